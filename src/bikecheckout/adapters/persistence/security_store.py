# src/bikecheckout/adapters/persistence/security_store.py
"""
Security Event Store - Append-only JSON Lines File

Persists security events one JSON object per line. The file is only ever
opened in append mode; events are never rewritten or removed.

Files that USE this module:
- bikecheckout.application.security_log (SecurityEventLog appends events)
- bikecheckout.app (creates the store when SECURITY_LOG_FILE is set)
- tests.test_security_store (unit tests)

Files that this module USES:
- bikecheckout.domain.models (SecurityEvent, SecurityEventKind)
"""
from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Union

from bikecheckout.domain.models import SecurityEvent, SecurityEventKind

logger = logging.getLogger(__name__)


def event_from_json(data: dict) -> SecurityEvent:
    """
    Rebuild a SecurityEvent from its JSON form.

    Args:
        data: Dictionary written by SecurityEvent.to_json

    Returns:
        SecurityEvent with a UTC timestamp
    """
    ts_raw = data.get("timestamp")
    # Accept both "...Z" and "+00:00"
    if isinstance(ts_raw, str):
        ts = datetime.fromisoformat(ts_raw.replace("Z", "+00:00")).astimezone(timezone.utc)
    else:
        ts = datetime.now(timezone.utc)
    return SecurityEvent(
        kind=SecurityEventKind(data["kind"]),
        details=dict(data.get("details") or {}),
        ip=data.get("ip", "unknown"),
        user_agent=data.get("user_agent", "unknown"),
        timestamp=ts,
    )


class JsonlSecurityEventStore:
    """Append-only store of security events."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def append(self, event: SecurityEvent) -> None:
        """
        Append one event and flush it to disk.

        Raises:
            OSError: If the file cannot be written
        """
        line = json.dumps(event.to_json(), ensure_ascii=False, default=str, sort_keys=True)
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())

    def load(self) -> List[SecurityEvent]:
        """
        Read every stored event, oldest first.

        Corrupt lines are skipped with a warning so one bad write does not hide
        the rest of the audit trail.
        """
        if not self.path.exists():
            return []

        events = []
        with self.path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(event_from_json(json.loads(line)))
                except (json.JSONDecodeError, KeyError, ValueError) as e:
                    logger.warning("Skipping corrupt security event at %s:%d: %s", self.path, lineno, e)
        return events
