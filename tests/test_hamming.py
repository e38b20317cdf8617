import itertools

import pytest

from stegtool.hamming import hamming_decode, hamming_encode


def test_encode_doubles_length():
    data = bytes(range(50))
    assert len(hamming_encode(data)) == 2 * len(data)


def test_encode_all_ones():
    assert hamming_encode(b"\xff") == b"\xfe\xfe"


def test_encode_zero():
    assert hamming_encode(b"\x00") == b"\x00\x00"


def test_round_trip_all_bytes():
    data = bytes(range(256))
    assert hamming_decode(hamming_encode(data)) == data


def test_data_bits_are_high_nibble():
    encoded = hamming_encode(bytes([0xA5]))
    assert encoded[0] >> 4 == 0xA
    assert encoded[1] >> 4 == 0x5


def test_lowest_bit_unused():
    encoded = hamming_encode(bytes(range(256)))
    assert all(byte & 1 == 0 for byte in encoded)


@pytest.mark.parametrize("bit", range(1, 8))
def test_single_bit_error_corrected(bit):
    data = bytes(range(256))
    encoded = bytearray(hamming_encode(data))
    corrupted = bytes(byte ^ (1 << bit) for byte in encoded)
    assert hamming_decode(corrupted) == data


def test_flipping_padding_bit_is_harmless():
    data = b"steg message"
    corrupted = bytes(byte ^ 1 for byte in hamming_encode(data))
    assert hamming_decode(corrupted) == data


def test_codewords_have_minimum_distance_three():
    codewords = [hamming_encode(bytes([nibble]))[1] for nibble in range(16)]
    for a, b in itertools.combinations(codewords, 2):
        assert bin(a ^ b).count("1") >= 3


def test_decode_ignores_trailing_odd_byte():
    encoded = hamming_encode(b"ok")
    assert hamming_decode(encoded + b"\x55") == b"ok"


def test_empty_input():
    assert hamming_encode(b"") == b""
    assert hamming_decode(b"") == b""