"""Hamming(7,4) error-correcting code applied nibble by nibble to byte strings.

Every input byte becomes two code bytes: the high nibble first, then the low
nibble. A code byte carries the seven code bits in its bits 7..1; bit 0 is
always zero on encoding and ignored on decoding.
"""

from __future__ import annotations

from collections.abc import Iterable

_N = 7
_K = 4

_PARITY_CHECK = (
    (1, 1, 0, 1, 1, 0, 0),
    (1, 0, 1, 1, 0, 1, 0),
    (0, 1, 1, 1, 0, 0, 1),
)

_GENERATOR = (
    (1, 0, 0, 0, 1, 1, 0),
    (0, 1, 0, 0, 1, 0, 1),
    (0, 0, 1, 0, 0, 1, 1),
    (0, 0, 0, 1, 1, 1, 1),
)

_CHECK_COLUMNS = tuple(zip(*_PARITY_CHECK))


def _encode_nibble(nibble: int) -> int:
    bits = [(nibble >> (_K - 1 - j)) & 1 for j in range(_K)]
    codeword = [
        sum(a * g for a, g in zip(bits, column)) % 2 for column in zip(*_GENERATOR)
    ]
    return sum(bit << (_N - i) for i, bit in enumerate(codeword))


def _decode_byte(byte: int) -> int:
    received = [(byte >> (_N - i)) & 1 for i in range(_N)]
    syndrome = tuple(
        sum(h * r for h, r in zip(row, received)) % 2 for row in _PARITY_CHECK
    )
    if any(syndrome):
        index = _CHECK_COLUMNS.index(syndrome) if syndrome in _CHECK_COLUMNS else 0
        byte ^= 1 << (_N - index)
    return (byte >> 4) & 0x0F


_ENCODE_TABLE = tuple(_encode_nibble(nibble) for nibble in range(16))
_DECODE_TABLE = tuple(_decode_byte(byte) for byte in range(256))


def hamming_encode(data: Iterable[int]) -> bytes:
    """Encode every byte of ``data`` into two Hamming(7,4) code bytes."""
    return bytes(
        code
        for byte in data
        for code in (_ENCODE_TABLE[(byte >> 4) & 0x0F], _ENCODE_TABLE[byte & 0x0F])
    )


def hamming_decode(data: bytes) -> bytes:
    """Decode pairs of code bytes, correcting one flipped bit per code byte.

    A trailing unpaired byte is ignored.
    """
    return bytes(
        (_DECODE_TABLE[high] << 4) | _DECODE_TABLE[low]
        for high, low in zip(data[0::2], data[1::2])
    )