"""Fixed-capacity FIFO of bytes that refuses to overwrite."""

import threading
from collections import deque


class BufferFullError(OverflowError):
    """Raised when pushing into a full buffer."""


class BufferEmptyError(IndexError):
    """Raised when popping from an empty buffer."""


class RingBuffer:
    """Bounded byte queue; push fails when full, pop fails when empty."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._items: deque[int] = deque()
        self._lock = threading.Lock()

    def push(self, data: int) -> None:
        """Append one byte, raising BufferFullError if there is no room."""
        if not 0 <= data <= 0xFF:
            raise ValueError(f"byte out of range: {data}")
        with self._lock:
            if len(self._items) >= self._capacity:
                raise BufferFullError("Buffer is full")
            self._items.append(data)

    def pop(self) -> int:
        """Remove and return the oldest byte, raising BufferEmptyError if none."""
        with self._lock:
            if not self._items:
                raise BufferEmptyError("Buffer is empty")
            return self._items.popleft()

    def empty(self) -> bool:
        return not self._items

    def full(self) -> bool:
        return len(self._items) >= self._capacity

    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)