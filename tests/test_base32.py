import base64
import random

import pytest

from otpkit import base32

RFC4648_VECTORS = [
    (b"", ""),
    (b"f", "MY"),
    (b"fo", "MZXQ"),
    (b"foo", "MZXW6"),
    (b"foob", "MZXW6YQ"),
    (b"fooba", "MZXW6YTB"),
    (b"foobar", "MZXW6YTBOI"),
]


@pytest.mark.parametrize("data,text", RFC4648_VECTORS)
def test_encode_matches_rfc4648_without_padding(data, text):
    assert base32.encode(data) == text


@pytest.mark.parametrize("data,text", RFC4648_VECTORS)
def test_decode_matches_rfc4648(data, text):
    assert base32.decode(text) == data


def test_rfc_test_secret():
    assert base32.encode(b"12345678901234567890") == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_decode_is_case_insensitive():
    assert base32.decode("mzxw6ytboi") == b"foobar"
    assert base32.decode("MzXw6YtBoI") == b"foobar"


def test_decode_skips_characters_outside_alphabet():
    assert base32.decode("MZXW 6YTB-OI======") == b"foobar"
    assert base32.decode("MY======") == b"f"
    assert base32.decode("0189!") == b""


def test_decode_ignores_non_ascii_lookalikes():
    # "ı".upper() == "I", but only ASCII letters belong to the alphabet
    assert base32.decode("ıı") == b""


def test_decode_discards_trailing_partial_byte():
    assert base32.decode("A") == b""
    assert base32.decode("MZX") == b"fo"


def test_round_trip_random_bytes():
    rng = random.Random(4226)
    for _ in range(1000):
        data = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 64)))
        text = base32.encode(data)
        assert base32.decode(text) == data
        assert text == base64.b32encode(data).decode("ascii").rstrip("=")
