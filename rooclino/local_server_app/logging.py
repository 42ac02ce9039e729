"""
In-memory event log for the webhook.

Events are plain ``logging`` records carrying a ``details`` dict in ``extra``;
the ring buffer keeps the most recent ones so ``GET /logs`` can show them.
"""
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional, Union

# Longest payload hex kept verbatim in logged details.
MAX_LOGGED_HEX = 64
PAYLOAD_KEYS = frozenset({"payload_hex", "frm_payload", "raw_hex"})


class RingBufferHandler(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "logger": record.name,
            "ts": record.created,
            "details": redact(getattr(record, "details", None)),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str, ring_size: int, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Return the named logger with a ``RingBufferHandler`` attached.

    The handler is attached once; later calls for the same name only update
    the level, so several app instances share one event ring.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if any(isinstance(h, RingBufferHandler) for h in logger.handlers):
        return logger
    handler = RingBufferHandler(max_entries=ring_size)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def ring_events(logger: logging.Logger) -> List[Dict]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler.get_events()
    return []


def redact(details: Optional[dict]) -> dict:
    """Copy ``details`` with long payload hex/base64 strings cut short."""
    if not details:
        return {}
    cleaned = {}
    for key, value in details.items():
        if key in PAYLOAD_KEYS and isinstance(value, str) and len(value) > MAX_LOGGED_HEX:
            cleaned[key] = value[:MAX_LOGGED_HEX] + "..."
        else:
            cleaned[key] = value
    return cleaned
