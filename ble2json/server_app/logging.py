from __future__ import annotations

import json
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional


class RingBufferHandler(logging.Handler):
    """
    Keeps the most recent log events in memory for ``/debug/logs``.

    Events logged with ``extra={"details": {...}}`` that name a ``device``
    and ``address`` are indexed by device label so the events of one sensor
    can be listed on their own.
    """

    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        details = dict(getattr(record, "details", None) or {})
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "device": details.pop("device", None),
            "address": details.pop("address", None),
            "details": details,
        }
        with self._lock:
            self._events.append(event)

    def get_events(self, device: Optional[str] = None, level: Optional[str] = None) -> List[Dict]:
        with self._lock:
            events = list(self._events)
        if device is not None:
            events = [e for e in events if e["device"] == device]
        if level is not None:
            minimum = logging.getLevelName(level.upper())
            if isinstance(minimum, int):
                events = [e for e in events if logging.getLevelName(e["level"]) >= minimum]
        return events


class EventFormatter(logging.Formatter):
    """Appends the ``details`` extra as JSON after the event name."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        details = getattr(record, "details", None)
        if details:
            message = f"{message} {json.dumps(details, default=str, sort_keys=True)}"
        return message


def create_logger(name: str, ring_size: int) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    formatter = EventFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    for handler in (RingBufferHandler(max_entries=ring_size), logging.StreamHandler()):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    return None
