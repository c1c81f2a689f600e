"""Byte-at-a-time state machine that recovers payloads from frames."""

import enum
from collections.abc import Iterable

from serialcomm.crc import compute_crc16
from serialcomm.encoder import ESC, ESCAPE_MASK, ETX, STX


class ParserState(enum.Enum):
    """Where the parser is within a frame."""

    WAIT_STX = enum.auto()
    IN_FRAME = enum.auto()
    IN_ESCAPE = enum.auto()


class FrameParser:
    """Reassembles frames from a byte stream and checks their CRC."""

    def __init__(self) -> None:
        self.state = ParserState.WAIT_STX
        self._buffer = bytearray()

    def reset(self) -> None:
        """Drop any partial frame and wait for the next STX."""
        self._buffer.clear()
        self.state = ParserState.WAIT_STX

    def push(self, byte: int) -> bytes | None:
        """Feed one byte; return the payload when a valid frame completes."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")

        if self.state is ParserState.WAIT_STX:
            if byte == STX:
                self.state = ParserState.IN_FRAME
                self._buffer.clear()
            return None

        if self.state is ParserState.IN_ESCAPE:
            self._buffer.append(byte ^ ESCAPE_MASK)
            self.state = ParserState.IN_FRAME
            return None

        if byte == ESC:
            self.state = ParserState.IN_ESCAPE
        elif byte == ETX:
            payload = self._checked_payload()
            self.reset()
            return payload
        else:
            self._buffer.append(byte)
        return None

    def feed(self, data: Iterable[int]) -> list[bytes]:
        """Push every byte of ``data`` and return the payloads completed on the way."""
        return [payload for payload in map(self.push, data) if payload is not None]

    def _checked_payload(self) -> bytes | None:
        if len(self._buffer) < 2:
            return None
        payload = bytes(self._buffer[:-2])
        received = int.from_bytes(self._buffer[-2:], "big")
        if received != compute_crc16(payload):
            return None
        return payload