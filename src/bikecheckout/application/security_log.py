# src/bikecheckout/application/security_log.py
"""
Security Event Log - Audit Trail of Suspicious Checkout Input

Records security events (unknown products, invalid installment counts,
price mismatches) with the request provenance. Events are written to the
security logger, kept in a bounded in-memory buffer for inspection and,
when a store is configured, appended to a JSON-lines file.

Recording an event never changes a checkout outcome by itself; the checkout
service decides whether to reject.

Files that USE this module:
- bikecheckout.application.checkout_service (records events)
- bikecheckout.app (wires the optional file store)
- tests.test_checkout_service (asserts on recorded events)

Files that this module USES:
- bikecheckout.domain.models (SecurityEvent, SecurityEventKind, RequestContext)
- bikecheckout.adapters.persistence.security_store (optional JSONL store)
- bikecheckout.shared.logging_conf (SECURITY_LOGGER_NAME)
"""
from __future__ import annotations

import json
import logging
import threading
from collections import deque
from typing import Any, Dict, Optional, Tuple

from bikecheckout.adapters.persistence.security_store import JsonlSecurityEventStore
from bikecheckout.domain.models import RequestContext, SecurityEvent, SecurityEventKind
from bikecheckout.shared.logging_conf import SECURITY_LOGGER_NAME

logger = logging.getLogger(__name__)
security_logger = logging.getLogger(SECURITY_LOGGER_NAME)


class SecurityEventLog:
    """Append-only, thread-safe security event recorder."""

    def __init__(self, store: Optional[JsonlSecurityEventStore] = None, buffer_size: int = 1000):
        """
        Args:
            store: Optional durable store events are appended to
            buffer_size: How many recent events to keep in memory
        """
        self.store = store
        self._recent: deque = deque(maxlen=buffer_size)
        self._counts: Dict[SecurityEventKind, int] = {kind: 0 for kind in SecurityEventKind}
        self._lock = threading.Lock()

    def record(
        self,
        kind: SecurityEventKind,
        details: Dict[str, Any],
        context: Optional[RequestContext] = None,
    ) -> SecurityEvent:
        """
        Record one security event.

        Args:
            kind: Event kind
            details: Offending values (JSON-serializable)
            context: Request provenance and receipt time; "unknown" values and now when missing

        Returns:
            The recorded SecurityEvent
        """
        context = context or RequestContext()
        event = SecurityEvent(
            kind=kind,
            details=dict(details),
            ip=context.ip,
            user_agent=context.user_agent,
            timestamp=context.received_at,
        )

        with self._lock:
            self._recent.append(event)
            self._counts[kind] += 1

        security_logger.warning(
            "[SECURITY] %s ip=%s user_agent=%s details=%s",
            kind.value,
            event.ip,
            event.user_agent,
            json.dumps(event.details, default=str, sort_keys=True),
        )

        if self.store is not None:
            try:
                self.store.append(event)
            except OSError as e:
                # The log line above already holds the event
                logger.error("Failed to persist security event %s: %s", kind.value, e)

        return event

    def events(self) -> Tuple[SecurityEvent, ...]:
        """Recent events, oldest first."""
        with self._lock:
            return tuple(self._recent)

    def count(self, kind: SecurityEventKind) -> int:
        """Total events of a kind since start (not bounded by the buffer)."""
        with self._lock:
            return self._counts[kind]
