"""Frame encoding: STX + escaped payload + escaped CRC-16 + ETX."""

from collections.abc import Iterable

from serialcomm.crc import compute_crc16

STX = 0x02
ETX = 0x03
ESC = 0x1B
ESCAPE_MASK = 0x20

SPECIAL_BYTES = frozenset({STX, ETX, ESC})


def _escaped(byte: int) -> bytes:
    if byte in SPECIAL_BYTES:
        return bytes((ESC, byte ^ ESCAPE_MASK))
    return bytes((byte,))


def encode(payload: Iterable[int]) -> bytes:
    """Wrap ``payload`` in a complete frame with escaping and a big-endian CRC."""
    data = bytes(payload)
    crc = compute_crc16(data)
    frame = bytearray((STX,))
    for byte in data:
        frame += _escaped(byte)
    frame += _escaped((crc >> 8) & 0xFF)
    frame += _escaped(crc & 0xFF)
    frame.append(ETX)
    return bytes(frame)