import numpy as np
import pytest

from stegtool.fourier import centralize, hide_fft, show_fft
from stegtool.lsb import StegError


def _random_bytes(size, seed):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()


def test_centralize_constant_input():
    normalized, low, high = centralize([5.0, 5.0, 5.0, 5.0])
    assert low == 5.0
    assert high == low + 1
    assert np.all(normalized == 0.0)


def test_centralize_uses_real_part_only():
    real = centralize([1.0, 7.0, 3.0, 20.0, -4.0, 2.0])
    complex_ = centralize([1 + 9j, 7 - 2j, 3 + 1j, 20 + 0j, -4 - 8j, 2 + 5j])
    assert np.allclose(real[0], complex_[0])
    assert real[1] == complex_[1]
    assert real[2] == complex_[2]


def test_centralize_invariants_on_random_data():
    rng = np.random.default_rng(3)
    values = rng.normal(scale=50.0, size=400)
    normalized, low, high = centralize(values)
    assert normalized.shape == (400,)
    assert np.all((normalized >= 0.0) & (normalized <= 1.0))
    assert high >= low + 1
    assert low >= values.min()
    assert high <= values.max() + 1


def test_centralize_empty_raises():
    with pytest.raises(ValueError):
        centralize([])


def test_hide_fft_rejects_non_power_of_two():
    with pytest.raises(StegError, match="power of 2"):
        hide_fft(bytes(12 * 16), 12, 16, 1, b"", 0, 0, 1)


def test_hide_fft_rejects_large_payload():
    with pytest.raises(StegError, match="too large"):
        hide_fft(bytes(16 * 16), 16, 16, 1, bytes(7 * 7), 7, 7, 1)


def test_hide_fft_rejects_extra_payload_channels():
    with pytest.raises(StegError, match="channel"):
        hide_fft(bytes(16 * 16), 16, 16, 1, bytes(4 * 4 * 3), 4, 4, 3)


def test_hide_fft_zero_cover_zero_payload_stays_zero():
    result = hide_fft(bytes(16 * 16 * 3), 16, 16, 3, bytes(4 * 4), 4, 4, 1)
    assert result == bytes(16 * 16 * 3)


def test_hide_fft_nonzero_payload_changes_cover():
    payload = bytes([255]) * 16
    result = hide_fft(bytes(16 * 16), 16, 16, 1, payload, 4, 4, 1)
    assert len(result) == 16 * 16
    assert any(result)


def test_hide_fft_channels_are_independent():
    gray = _random_bytes(16 * 16, 1)
    payload = _random_bytes(4 * 4, 2)
    single = np.frombuffer(hide_fft(gray, 16, 16, 1, payload, 4, 4, 1), dtype=np.uint8)
    rgb = np.repeat(np.frombuffer(gray, dtype=np.uint8), 3).tobytes()
    triple = np.frombuffer(
        hide_fft(rgb, 16, 16, 3, payload, 4, 4, 1), dtype=np.uint8
    ).reshape(-1, 3)
    for channel in range(3):
        assert np.array_equal(triple[:, channel], single)


def test_hide_fft_uses_only_first_payload_channel():
    cover = _random_bytes(16 * 16 * 2, 4)
    first = np.frombuffer(_random_bytes(16, 5), dtype=np.uint8)
    noisy = np.stack([first, np.frombuffer(_random_bytes(16, 6), dtype=np.uint8)], axis=1)
    quiet = np.stack([first, np.zeros(16, dtype=np.uint8)], axis=1)
    a = hide_fft(cover, 16, 16, 2, noisy.tobytes(), 4, 4, 2)
    b = hide_fft(cover, 16, 16, 2, quiet.tobytes(), 4, 4, 2)
    assert a == b


def test_show_fft_identical_images_yield_zeros():
    image = _random_bytes(8 * 8 * 3, 7)
    assert show_fft(image, image, 8, 8, 3) == bytes(8 * 8 * 3)


def test_show_fft_channels_are_independent():
    original = _random_bytes(16 * 16, 8)
    modified = hide_fft(original, 16, 16, 1, _random_bytes(16, 9), 4, 4, 1)
    single = np.frombuffer(show_fft(original, modified, 16, 16, 1), dtype=np.uint8)
    rgb_original = np.repeat(np.frombuffer(original, dtype=np.uint8), 3).tobytes()
    rgb_modified = np.repeat(np.frombuffer(modified, dtype=np.uint8), 3).tobytes()
    triple = np.frombuffer(
        show_fft(rgb_original, rgb_modified, 16, 16, 3), dtype=np.uint8
    ).reshape(-1, 3)
    for channel in range(3):
        assert np.array_equal(triple[:, channel], single)


def test_show_fft_rejects_non_power_of_two():
    with pytest.raises(StegError, match="power of 2"):
        show_fft(bytes(6 * 8), bytes(6 * 8), 6, 8, 1)


def test_show_fft_rejects_short_data():
    with pytest.raises(StegError):
        show_fft(bytes(10), bytes(10), 8, 8, 1)