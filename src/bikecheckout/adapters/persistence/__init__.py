# src/bikecheckout/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Append-only security event log (JSON lines)
"""

from bikecheckout.adapters.persistence.security_store import JsonlSecurityEventStore, event_from_json

__all__ = [
    "JsonlSecurityEventStore",
    "event_from_json",
]
