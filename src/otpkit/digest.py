import enum
import hashlib
import hmac
import logging
from typing import Protocol, Union

from .exceptions import DigestUnavailable, UnsupportedAlgorithm

logger = logging.getLogger(__name__)


class Algorithm(enum.Enum):
    """
    HMAC hash functions allowed by the otpauth scheme.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hash_name(self) -> str:
        return self.value.lower()

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self]

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        """
        Accepts an Algorithm or a name such as "sha1", "SHA-256" or "Sha512".

        :raises UnsupportedAlgorithm: for anything else
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper().replace("-", "")
            for algorithm in cls:
                if algorithm.value == normalized:
                    return algorithm
        raise UnsupportedAlgorithm("Unsupported algorithm {!r}, must be SHA1, SHA256 or SHA512".format(value))


_DIGEST_SIZES = {
    Algorithm.SHA1: 20,
    Algorithm.SHA256: 32,
    Algorithm.SHA512: 64,
}


class DigestProvider(Protocol):
    def compute_hmac(self, algorithm: Algorithm, key: bytes, message: bytes) -> bytes:
        ...


class HmacDigestProvider(object):
    """
    Computes HMACs with the standard library hmac/hashlib modules.
    """

    def compute_hmac(self, algorithm: Union[Algorithm, str], key: bytes, message: bytes) -> bytes:
        """
        :param algorithm: one of the supported Algorithm members (or its name)
        :param key: raw secret bytes
        :param message: the data to authenticate
        :returns: the HMAC digest
        """
        algorithm = Algorithm.parse(algorithm)
        try:
            digest = hmac.new(key, message, getattr(hashlib, algorithm.hash_name)).digest()
        except (ValueError, AttributeError) as exc:
            # e.g. hash disabled by a FIPS policy
            logger.warning("HMAC-%s is not available on this platform: %s", algorithm.value, exc)
            raise DigestUnavailable("HMAC-{} is not available".format(algorithm.value)) from exc
        if len(digest) != algorithm.digest_size:
            raise DigestUnavailable(
                "HMAC-{} returned {} bytes, expected {}".format(algorithm.value, len(digest), algorithm.digest_size)
            )
        return digest


#: Selected once at import; pass another provider to the engines to replace it.
default_digest_provider = HmacDigestProvider()
