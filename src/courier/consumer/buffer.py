"""Thread-safe buffer of received message payloads."""

import threading
import time
from collections import deque
from typing import Optional


class ReceivedMessageBuffer:
    """
    Unbounded, ordered buffer of payloads received by a consumer.

    Entries keep delivery order and are never deduplicated: a message the
    broker redelivers appears once per delivery. Appends may come from several
    broker dispatch threads while readers drain or clear concurrently.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._items: deque[str] = deque()

    def append(self, payload: str) -> None:
        with self._lock:
            self._items.append(payload)
            self._not_empty.notify_all()

    def drain(self) -> list[str]:
        """Remove and return every buffered payload, oldest first."""
        with self._lock:
            out = list(self._items)
            self._items.clear()
            return out

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def snapshot(self) -> list[str]:
        """Return the buffered payloads without removing them."""
        with self._lock:
            return list(self._items)

    def wait_for(self, count: int = 1, timeout: Optional[float] = None) -> bool:
        """
        Block until at least ``count`` payloads are buffered.

        Args:
            count: Number of payloads to wait for
            timeout: Seconds to wait, or None to wait forever

        Returns:
            True if the buffer reached ``count`` entries before the timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._lock:
            while len(self._items) < count:
                if deadline is None:
                    self._not_empty.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._not_empty.wait(remaining)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
