"""Background thread that moves bytes from a serial descriptor into a ring buffer."""

import os
import select
import threading
import time

from serialcomm import log
from serialcomm.ringbuffer import BufferFullError, RingBuffer

_EOF_BACKOFF = 0.01


class ReceiverThread:
    """Reads a file descriptor one byte at a time and queues each byte."""

    def __init__(self, poll_interval: float = 0.1) -> None:
        self._poll_interval = poll_interval
        self._running = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """True while the reader thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self, fd: int, ring: RingBuffer) -> None:
        """Start reading ``fd`` into ``ring`` on a background thread."""
        if self.is_running:
            raise RuntimeError("receiver thread is already running")
        self._running.set()
        self._thread = threading.Thread(
            target=self._read_loop,
            args=(fd, ring),
            name="serial-receiver",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the reader to finish and wait for it."""
        log.info("Stopping receiver thread...")
        self._running.clear()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _read_loop(self, fd: int, ring: RingBuffer) -> None:
        while self._running.is_set():
            log.debug("ReceiverThread waiting for data...")
            try:
                ready, _, _ = select.select([fd], [], [], self._poll_interval)
                if not ready:
                    continue
                chunk = os.read(fd, 1)
            except (OSError, ValueError):
                log.error("Serial read error")
                break

            if not chunk:
                log.debug("No data received")
                time.sleep(_EOF_BACKOFF)
                continue

            byte = chunk[0]
            log.debug(f"Received byte: {len(chunk)}")
            try:
                ring.push(byte)
            except BufferFullError as exc:
                log.error(f"Ring buffer overflow: {exc}")
                break
            log.info(f"The pushed byte is 0x{byte:02X}")