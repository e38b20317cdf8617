"""Discrete Fourier and cosine transforms used by the embedding schemes."""

from __future__ import annotations

import math

import numpy as np

BLOCK_SIZE = 8


def _as_vector(x) -> np.ndarray:
    array = np.asarray(x, dtype=complex)
    if array.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    return array


def _check_power_of_two(n: int, what: str) -> None:
    if n < 1 or n & (n - 1):
        raise ValueError(f"{what} must be a power of 2")


def _dft(x: np.ndarray, sign: int) -> np.ndarray:
    n = len(x)
    if n == 0:
        return x.copy()
    index = np.arange(n)
    kernel = np.exp(sign * 2j * np.pi * np.outer(index, index) / n)
    return kernel @ x


def _dit(x: np.ndarray, sign: int) -> np.ndarray:
    """Radix-2 decimation in time along the last axis (no scaling)."""
    n = x.shape[-1]
    if n == 1:
        return x.copy()
    even = _dit(x[..., 0::2], sign)
    odd = _dit(x[..., 1::2], sign)
    half = n // 2
    twiddle = np.exp(sign * 2j * np.pi * np.arange(half) / n) * odd
    return np.concatenate((even + twiddle, even - twiddle), axis=-1)


def fft_simple(x) -> np.ndarray:
    """Forward DFT computed directly from its definition."""
    return _dft(_as_vector(x), -1)


def ifft_simple(x) -> np.ndarray:
    """Inverse DFT computed directly from its definition."""
    vector = _as_vector(x)
    if len(vector) == 0:
        return vector.copy()
    return _dft(vector, 1) / len(vector)


def fft_dit(x) -> np.ndarray:
    """Recursive radix-2 FFT; the length must be a power of two."""
    vector = _as_vector(x)
    _check_power_of_two(len(vector), "n")
    return _dit(vector, -1)


def ifft_dit(x) -> np.ndarray:
    """Recursive radix-2 inverse FFT; the length must be a power of two."""
    vector = _as_vector(x)
    _check_power_of_two(len(vector), "n")
    return _dit(vector, 1) / len(vector)


def _as_grid(x, width: int, height: int) -> np.ndarray:
    _check_power_of_two(width, "width")
    _check_power_of_two(height, "height")
    array = np.asarray(x, dtype=complex)
    if array.size != width * height:
        raise ValueError("data size does not match width * height")
    return array.reshape(height, width)


def fft2d(x, width: int, height: int) -> np.ndarray:
    """2-D FFT of row-major data; returns an array shaped (height, width)."""
    grid = _as_grid(x, width, height)
    rows = _dit(grid, -1)
    return np.ascontiguousarray(_dit(rows.T, -1).T)


def ifft2d(x, width: int, height: int) -> np.ndarray:
    """2-D inverse FFT of row-major data; returns an array shaped (height, width)."""
    grid = _as_grid(x, width, height)
    rows = _dit(grid, 1) / width
    return np.ascontiguousarray((_dit(rows.T, 1) / height).T)


_ALPHA = np.where(
    np.arange(BLOCK_SIZE) == 0,
    math.sqrt(1.0 / BLOCK_SIZE),
    math.sqrt(2.0 / BLOCK_SIZE),
)
_BASIS = _ALPHA[:, None] * np.cos(
    math.pi
    / BLOCK_SIZE
    * (np.arange(BLOCK_SIZE)[None, :] + 0.5)
    * np.arange(BLOCK_SIZE)[:, None]
)


def _as_block(block) -> np.ndarray:
    array = np.asarray(block, dtype=float)
    if array.shape != (BLOCK_SIZE, BLOCK_SIZE):
        raise ValueError(f"block must be {BLOCK_SIZE}x{BLOCK_SIZE}")
    return array


def dct2d(block) -> np.ndarray:
    """Orthonormal 2-D DCT-II of an 8x8 block."""
    return _BASIS @ _as_block(block) @ _BASIS.T


def idct2d(block) -> np.ndarray:
    """Inverse of :func:`dct2d`."""
    return _BASIS.T @ _as_block(block) @ _BASIS