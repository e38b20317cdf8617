"""Hiding an image in the Fourier spectrum of a cover image."""

from __future__ import annotations

import numpy as np

from stegtool.dsp import fft2d, ifft2d
from stegtool.lsb import StegError

_MARGIN = 1
_TAIL_FRACTION = 0.06


def _pixels(data, size: int, what: str) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        array = np.frombuffer(data, dtype=np.uint8)
    else:
        array = np.asarray(data).astype(np.uint8).reshape(-1)
    if array.size < size:
        raise StegError(f"{what} holds fewer bytes than its dimensions require")
    return array[:size]


def _check_shape(width: int, height: int) -> None:
    if width < 1 or height < 1 or width & (width - 1) or height & (height - 1):
        raise StegError("The input data is not a power of 2 shape.")


def centralize(coefficients) -> tuple[np.ndarray, float, float]:
    """Map the real parts of ``coefficients`` onto [0, 1].

    The bounds are found by bisection so that about 6% of the values fall
    below the lower bound and 6% above the upper one; the upper bound is
    kept at least one above the lower. Returns the flattened normalized
    values together with the lower and upper bounds.
    """
    values = np.real(np.asarray(coefficients)).astype(float).reshape(-1)
    if values.size == 0:
        raise ValueError("no coefficients to centralize")

    threshold = int(values.size * _TAIL_FRACTION)
    minimum = float(values.min())
    maximum = float(values.max())

    left, right = minimum, maximum
    while left + 1 <= right:
        middle = (left + right) / 2.0
        if np.count_nonzero(values < middle) < threshold:
            left = middle
        else:
            right = middle
    low = left

    left, right = minimum, maximum
    while left + 1 <= right:
        middle = (left + right) / 2.0
        if np.count_nonzero(values > middle) < threshold:
            right = middle
        else:
            left = middle
    high = right

    if low + 1 >= high:
        high = low + 1

    normalized = np.clip((values - low) / (high - low), 0.0, 1.0)
    return normalized, float(low), float(high)


def hide_fft(
    pixels,
    width: int,
    height: int,
    channels: int,
    payload,
    payload_width: int,
    payload_height: int,
    payload_channels: int,
) -> bytes:
    """Return ``pixels`` with the first channel of ``payload`` added to its spectrum.

    Both images are interleaved, row-major, 8 bits per channel. The payload
    is written near the top-left of every channel's spectrum and mirrored
    horizontally, scaled by the spread of that channel's coefficients.
    """
    _check_shape(width, height)
    if (
        payload_width > width // 2 - 2 * _MARGIN
        or payload_height > height // 2 - 2 * _MARGIN
    ):
        raise StegError("Payload dimensions are too large for the cover image")
    if payload_channels > channels:
        raise StegError("Payload channel count exceeds cover image channel count")
    if payload_channels < 1:
        raise StegError("Payload must have at least one channel")

    cover = _pixels(pixels, width * height * channels, "Cover image").reshape(
        height, width, channels
    )
    mark = (
        _pixels(
            payload, payload_width * payload_height * payload_channels, "Payload image"
        )
        .reshape(payload_height, payload_width, payload_channels)[:, :, 0]
        .astype(float)
        / 255.0
    )

    rows = slice(_MARGIN, _MARGIN + payload_height)
    cols = np.arange(_MARGIN, _MARGIN + payload_width)
    mirrored = width - 1 - cols

    result = np.empty_like(cover)
    for channel in range(channels):
        spectrum = fft2d(cover[:, :, channel] / 255.0, width, height)
        _, low, high = centralize(spectrum)
        alpha = high - low

        spectrum[rows, cols] += mark * alpha
        spectrum[rows, mirrored] += mark * alpha

        restored = ifft2d(spectrum, width, height).real
        result[:, :, channel] = np.clip(restored * 255.0, 0, 255).astype(np.uint8)

    return result.tobytes()


def show_fft(original, modified, width: int, height: int, channels: int) -> bytes:
    """Recover the spectral difference between ``modified`` and ``original``.

    Returns an interleaved image of the same shape whose pixels are the
    centralized real parts of the difference of the two spectra.
    """
    _check_shape(width, height)
    size = width * height * channels
    before = _pixels(original, size, "Original image").reshape(height, width, channels)
    after = _pixels(modified, size, "Modified image").reshape(height, width, channels)

    message = np.zeros((height, width, channels), dtype=np.uint8)
    for channel in range(channels):
        difference = fft2d(after[:, :, channel] / 255.0, width, height) - fft2d(
            before[:, :, channel] / 255.0, width, height
        )
        normalized, _, _ = centralize(difference)
        message[:, :, channel] = (
            np.clip(normalized * 255.0, 0, 255).astype(np.uint8).reshape(height, width)
        )

    return message.tobytes()