"""
bikecheckout - Price Integrity and Installment Pricing for E-bike Checkout

Server-side core of an electric bicycle checkout: recomputes order totals
from the catalog and shipping tiers, reverse-prices credit card installment
plans so the merchant nets the full amount after gateway fees, and guards
payment requests against tampered prices.
"""

__version__ = "1.0.0"
