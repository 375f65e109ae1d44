from typing import Optional

from .config import Config
from .digest import DigestProvider, default_digest_provider
from .utils import decode_secret

MAX_COUNTER = 2**64 - 1
MIN_DIGEST_SIZE = 20


def derive_code(digest: bytes, digits: int) -> str:
    """
    RFC 4226 dynamic truncation of an HMAC digest into a decimal code.

    The last nibble of the digest picks an offset (0-15); the four bytes
    found there, with the top bit cleared, form a 31 bit integer which is
    reduced modulo 10**digits and zero-padded.

    :param digest: HMAC output, at least 20 bytes
    :param digits: length of the resulting code
    """
    if len(digest) < MIN_DIGEST_SIZE:
        raise ValueError("digest must be at least {} bytes, got {}".format(MIN_DIGEST_SIZE, len(digest)))
    hmac_hash = bytearray(digest)
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    return str(code % 10**digits).rjust(digits, "0")


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, config: Optional[Config] = None, digest_provider: Optional[DigestProvider] = None) -> None:
        self.config = config if config is not None else Config()
        self.digest_provider = digest_provider if digest_provider is not None else default_digest_provider

    @property
    def digits(self) -> int:
        return self.config.digits

    def generate_otp(self, secret: str, input: int) -> str:
        """
        :param secret: base32 secret
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        if isinstance(input, bool) or not isinstance(input, int):
            raise ValueError("input must be an integer")
        if not 0 <= input <= MAX_COUNTER:
            raise ValueError("input must be between 0 and 2**64 - 1")
        digest = self.digest_provider.compute_hmac(
            self.config.algorithm, decode_secret(secret), self.int_to_bytestring(input)
        )
        return derive_code(digest, self.config.digits)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        return i.to_bytes(padding, "big")
