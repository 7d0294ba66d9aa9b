"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Gateway (payment gateway contract)
- Persistence (security event storage)
- Formatting (display output)
"""

__all__ = []
