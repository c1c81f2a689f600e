"""Framed serial communication: CRC-16 framing, frame parsing, a ring buffer, a receiver thread and a serial host."""

__version__ = "0.1.0"
__all__ = ["crc", "encoder", "parser", "ringbuffer", "log", "receiver", "host"]