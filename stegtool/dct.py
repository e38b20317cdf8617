"""Hiding bytes in the parity of DCT coefficients of 8x8 pixel blocks.

The payload length is written first as eight little-endian bytes, one bit
per block, starting at the top-left of the interleaved pixel data; the
payload itself follows in a second pass that starts a fixed distance
further into the data.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from stegtool.dsp import BLOCK_SIZE, dct2d, idct2d
from stegtool.lsb import StegError, validate_compression

BYTE_SIZE = 8
_LENGTH_BYTES = 8
_COEFFICIENTS = ((4, 3), (0, 0), (0, 0), (0, 0))


def _pixels(data, size: int) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        array = np.frombuffer(data, dtype=np.uint8)
    else:
        array = np.asarray(data).astype(np.uint8).reshape(-1)
    if array.size < size:
        raise StegError("Cover image holds fewer bytes than its dimensions require")
    return array[:size]


def _check_blocks(width: int, height: int) -> None:
    if width % BLOCK_SIZE or height % BLOCK_SIZE:
        raise StegError("The input data is not a multiple of the DCT block size.")


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _payload_offset(channels: int) -> int:
    return _LENGTH_BYTES * channels * BLOCK_SIZE * BLOCK_SIZE


def _blocks(
    size: int, offset: int, stride: int, width: int, height: int
) -> Iterator[np.ndarray]:
    grid = np.arange(BLOCK_SIZE)
    for block_x in range(width // BLOCK_SIZE):
        for block_y in range(height // BLOCK_SIZE):
            index = (
                offset
                + (block_y * BLOCK_SIZE + grid)[:, None] * stride
                + block_x * BLOCK_SIZE
                + grid[None, :]
            )
            if index[-1, -1] >= size:
                raise StegError("Data does not fit in the cover image")
            yield index


def _embed(
    values: np.ndarray,
    offset: int,
    stride: int,
    width: int,
    height: int,
    data: bytes,
    compression: int,
) -> None:
    blocks = _blocks(values.size, offset, stride, width, height)
    byte_index = 0
    bit_index = 0
    while byte_index < len(data):
        index = next(blocks, None)
        if index is None:
            break
        coefficients = dct2d(values[index])
        for row, col in _COEFFICIENTS[:compression]:
            byte = data[byte_index] if byte_index < len(data) else 0
            bit = (byte >> (BYTE_SIZE - bit_index - 1)) & 1
            value = coefficients[row, col]
            coefficients[row, col] = (
                _round_half_away(value) - math.fmod(math.trunc(value), 2) + bit
            )
            bit_index += 1
            if bit_index >= BYTE_SIZE:
                bit_index = 0
                byte_index += 1
        values[index] = idct2d(coefficients)


def _extract(
    values: np.ndarray,
    offset: int,
    stride: int,
    width: int,
    height: int,
    length: int,
    compression: int,
) -> bytes:
    blocks = _blocks(values.size, offset, stride, width, height)
    message = bytearray(length)
    byte_index = 0
    bit_index = 0
    byte = 0
    while byte_index < length:
        index = next(blocks, None)
        if index is None:
            break
        coefficients = dct2d(values[index])
        for row, col in _COEFFICIENTS[:compression]:
            bit = int(_round_half_away(coefficients[row, col])) & 1
            byte |= bit << (BYTE_SIZE - bit_index - 1)
            bit_index += compression
            if bit_index >= BYTE_SIZE:
                if byte_index < length:
                    message[byte_index] = byte
                byte_index += 1
                bit_index = 0
                byte = 0
    return bytes(message)


def hide_dct(
    pixels, width: int, height: int, channels: int, payload, compression: int
) -> bytes:
    """Return a copy of ``pixels`` carrying ``payload`` in its DCT coefficients."""
    if not 0 <= compression <= len(_COEFFICIENTS):
        raise StegError("Invalid compression value")
    _check_blocks(width, height)
    data = bytes(payload)
    if len(data) > width * height * channels // BLOCK_SIZE // BLOCK_SIZE:
        raise StegError("Payload is too large for the cover image")

    values = _pixels(pixels, width * height * channels).astype(float) / 255.0
    stride = width * channels

    header = len(data).to_bytes(_LENGTH_BYTES, "little")
    _embed(values, 0, stride, width, height, header, compression)
    _embed(values, _payload_offset(channels), stride, width, height, data, compression)

    return np.clip(values * 255.0, 0, 255).astype(np.uint8).tobytes()


def show_dct(pixels, width: int, height: int, channels: int, compression: int) -> bytes:
    """Recover a payload hidden by :func:`hide_dct`."""
    if not validate_compression(compression) or compression > len(_COEFFICIENTS):
        raise StegError("Invalid compression value")
    _check_blocks(width, height)

    values = _pixels(pixels, width * height * channels).astype(float) / 255.0
    stride = width * channels

    header = _extract(values, 0, stride, width, height, _LENGTH_BYTES, compression)
    length = int.from_bytes(header, "little")
    if length <= 0:
        raise StegError("Message length is invalid")
    if length > width * height * channels // BLOCK_SIZE // BLOCK_SIZE:
        raise StegError("Message length exceeds the maximum allowed size")

    return _extract(
        values, _payload_offset(channels), stride, width, height, length, compression
    )