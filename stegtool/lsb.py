"""Hiding bytes in the least significant bits of cover bytes."""

from __future__ import annotations

from collections.abc import Iterator

BYTE_SIZE = 8


class StegError(Exception):
    """Raised when a payload cannot be hidden in or recovered from a cover."""


def validate_compression(compression: int) -> bool:
    """Return whether ``compression`` (bits per cover byte) is 1, 2, 4 or 8."""
    return 0 < compression <= BYTE_SIZE and compression & (compression - 1) == 0


def _check(compression: int, length: int, cover_length: int) -> int:
    if not validate_compression(compression):
        raise StegError("Invalid compression value")
    stride = BYTE_SIZE // compression
    if length * stride > cover_length:
        raise StegError("Data is too big for the cover image")
    return stride


def _chunks(payload: bytes, compression: int, stride: int) -> Iterator[int]:
    mask = (1 << compression) - 1
    for byte in payload:
        for i in range(stride):
            yield (byte >> (BYTE_SIZE - (i + 1) * compression)) & mask


def hide_lsb(cover: bytes, payload: bytes, compression: int) -> bytearray:
    """Return a copy of ``cover`` with ``payload`` in its low ``compression`` bits.

    Each payload byte is spread, most significant bits first, over
    ``8 // compression`` consecutive cover bytes.
    """
    stride = _check(compression, len(payload), len(cover))
    keep = ~((1 << compression) - 1) & 0xFF
    result = bytearray(cover)
    for index, chunk in enumerate(_chunks(payload, compression, stride)):
        result[index] = (result[index] & keep) | chunk
    return result


def show_lsb(cover: bytes, message_length: int, compression: int) -> bytes:
    """Recover ``message_length`` bytes hidden by :func:`hide_lsb`."""
    stride = _check(compression, message_length, len(cover))
    mask = (1 << compression) - 1
    message = bytearray()
    for start in range(0, message_length * stride, stride):
        byte = 0
        for i, cover_byte in enumerate(cover[start : start + stride]):
            byte |= (cover_byte & mask) << (BYTE_SIZE - (i + 1) * compression)
        message.append(byte)
    return bytes(message)