from typing import Iterable, List

import pytest

from otpkit import base32
from otpkit.digest import HmacDigestProvider
from otpkit.exceptions import DigestUnavailable

RFC_SECRET_BYTES = b"12345678901234567890"


class CountingDigestProvider(HmacDigestProvider):
    def __init__(self) -> None:
        self.calls = 0

    def compute_hmac(self, algorithm, key, message):
        self.calls += 1
        return super().compute_hmac(algorithm, key, message)


class ScriptedRandomSource(object):
    """Hands out the given chunks in order, then zero bytes."""

    def __init__(self, chunks: Iterable[bytes] = ()) -> None:
        self.chunks: List[bytes] = list(chunks)
        self.requests: List[int] = []

    def random_bytes(self, size: int) -> bytes:
        self.requests.append(size)
        if self.chunks:
            return self.chunks.pop(0)
        return bytes(size)


@pytest.fixture
def rfc_secret() -> str:
    return base32.encode(RFC_SECRET_BYTES)


@pytest.fixture
def counting_provider() -> CountingDigestProvider:
    return CountingDigestProvider()


@pytest.fixture
def scripted_random() -> ScriptedRandomSource:
    return ScriptedRandomSource()


class UnavailableDigestProvider(object):
    def __init__(self) -> None:
        self.calls = 0

    def compute_hmac(self, algorithm, key, message):
        self.calls += 1
        raise DigestUnavailable("HMAC backend offline")


@pytest.fixture
def unavailable_provider() -> UnavailableDigestProvider:
    return UnavailableDigestProvider()
