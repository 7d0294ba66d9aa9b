# src/bikecheckout/application/catalog.py
"""
Catalog - Server-side Source of Truth for Prices

The catalog maps product ids to canonical prices (centavos) and installment
ceilings. It is built once, is read-only afterwards and is injected into the
services that need it. Any price arriving from a client is discarded in
favour of a catalog lookup.

Files that USE this module:
- bikecheckout.application.order_totals (OrderTotalCalculator looks products up)
- bikecheckout.app (builds the default catalog)
- tests.test_order_totals (unit tests)

Files that this module USES:
- bikecheckout.domain.models (Product)
- bikecheckout.domain.errors (ProductNotFoundError)
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from bikecheckout.domain.errors import ProductNotFoundError
from bikecheckout.domain.models import Product

# Electric bicycle line, prices in centavos
DEFAULT_PRODUCTS = (
    Product("ambtus-flash", "FLASH", 749900, 21,
            "Potência 1000W, Bateria Lítio 48V, Freio Duplo Hidráulico, Suspensão Central, Display LCD Colorido"),
    Product("g60", "G60", 699900, 21,
            "Potência 1000W, Bateria 48V 15AH, Shimano 7 marchas, Autonomia 60km, Velocidade 32km/h"),
    Product("v20-pro", "V20 PRO", 849900, 21,
            "Potência 1000W, Bateria Lítio 48V 15AH, Freios Hidráulicos, Autonomia 60km, Shimano 7 marchas"),
    Product("q8", "Q8", 849900, 21,
            "Potência 1000W, Bateria Lítio 48V 15AH, Freios Hidráulico zoom, Suspensão Dianteira, Shimano 7 marchas"),
    Product("v10-max", "V10 MAX", 799900, 21,
            "Potência 1000W, Bateria Lítio 48V 15AH, Freios a disco Dianteiro/Traseiro, Suspensão Dupla"),
    Product("v8-pro", "V8 PRO", 799900, 21,
            "Potência 1000W, Bateria Lítio 48V 15AH, Freios Hidráulicos, Suspensão Dupla Traseira"),
    Product("y16", "Y16", 699900, 21,
            "Potência 1000W, Bateria Lítio, Freio Disco Duplo, Amortecedor Dianteiro/Traseiro, Autonomia 84km"),
    Product("ae6", "AE6", 859000, 21,
            "Dobrável, Potência 750W, Bateria 48V 15AH, Freios a disco, Shimano 7 marchas"),
    Product("ae7", "AE7", 819000, 21,
            "Potência 750W, Bateria 48V 15AH, Freios a disco mecânicos, Amortecedor Hidráulico Dianteiro/Mola Traseiro"),
    Product("c3", "C3", 689000, 21,
            "Potência 800W, Bateria 48V 24AH, Autonomia 75km, Freios a disco"),
    Product("c10", "C10", 799000, 21,
            "Potência 1000W, Bateria Chumbo Ácido 5*15V 20AH, Autonomia 65km, Freios Hidráulicos"),
    Product("c12", "C12", 929000, 21,
            "Potência 1000W, Bateria Lítio 60V 20AH, Autonomia 75km, Freios a disco, Banco com encosto"),
    Product("c15", "C15", 1029000, 21,
            "Potência 1000W, Bateria Lítio 60V 20AH, Autonomia 65km, Amortecedor Hidráulico, Freios a disco"),
    Product("t3", "T3", 1159000, 21,
            "Triciclo, Potência 1500W, Bateria Lítio 60V 20AH, Autonomia 65km, Freios a disco"),
    Product("x12", "X12", 1056000, 21,
            "Potência 1000W, Bateria Lítio 48V 15AH, Banco Duplo, Sistema de freio Dianteiro/Traseiro"),
)


class Catalog:
    """Read-only product catalog keyed by product id."""

    def __init__(self, products: Iterable[Product]):
        """
        Build the catalog.

        Args:
            products: Products to index; ids must be unique

        Raises:
            ValueError: On duplicate ids, non-positive prices or ceilings
        """
        index = {}
        for product in products:
            if product.product_id in index:
                raise ValueError(f"Duplicate product id in catalog: {product.product_id}")
            if product.price_cents <= 0:
                raise ValueError(f"Product {product.product_id} must have a positive price")
            if product.max_installments < 1:
                raise ValueError(f"Product {product.product_id} must allow at least 1 installment")
            index[product.product_id] = product
        self._products: Mapping[str, Product] = MappingProxyType(index)

    @classmethod
    def default(cls) -> "Catalog":
        """Catalog with the shipped bicycle line."""
        return cls(DEFAULT_PRODUCTS)

    def lookup(self, product_id: str) -> Product:
        """
        Find a product by id.

        Raises:
            ProductNotFoundError: If the id is not in the catalog
        """
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def products(self) -> List[Product]:
        return list(self._products.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)
