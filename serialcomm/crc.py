"""CRC-16-CCITT checksum used by the framing protocol."""

from collections.abc import Iterable

_POLYNOMIAL = 0x1021
_INITIAL = 0xFFFF


def compute_crc16(data: Iterable[int]) -> int:
    """Return the bitwise CRC-16-CCITT (poly 0x1021, init 0xFFFF) of ``data``."""
    crc = _INITIAL
    for byte in data:
        crc ^= (byte & 0xFF) << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ _POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc