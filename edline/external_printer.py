"""A thread-safe queue of messages to print while a line is being edited."""

from __future__ import annotations

import queue
from typing import Any, Generic, Optional, TypeVar

EXTERNAL_PRINTER_DEFAULT_CAPACITY = 20

T = TypeVar("T")


class ExternalPrinter(Generic[T]):
    """Holds lines sent from other threads until the editor prints them."""

    def __init__(self, max_cap: int = EXTERNAL_PRINTER_DEFAULT_CAPACITY) -> None:
        if max_cap < 1:
            raise ValueError(f"capacity must be positive, got {max_cap}")
        self._capacity = max_cap
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=max_cap)

    @property
    def capacity(self) -> int:
        """Maximum number of pending lines."""
        return self._capacity

    def print(self, line: T) -> None:
        """Queue a line; blocks while the printer is full."""
        self._queue.put(line)

    def get_line(self) -> Optional[T]:
        """The next pending line, or None without waiting."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> list[T]:
        """All pending lines, oldest first."""
        lines: list[T] = []
        while True:
            try:
                lines.append(self._queue.get_nowait())
            except queue.Empty:
                return lines