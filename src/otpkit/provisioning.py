"""
Enrollment helpers: new secrets, otpauth URIs and backup codes.
"""
import logging
from typing import List, Optional

from . import base32, utils
from .config import Config
from .exceptions import InvalidConfiguration
from .random_source import RandomSource, default_random_source

logger = logging.getLogger(__name__)

DEFAULT_SECRET_SIZE = 20


def generate_secret(size_bytes: int = DEFAULT_SECRET_SIZE, random_source: Optional[RandomSource] = None) -> str:
    """
    Creates a new random secret, base32 encoded without padding.

    20 bytes (160 bits, the RFC 4226 recommendation) give 32 characters.

    :param size_bytes: number of random bytes
    :param random_source: defaults to the operating system CSPRNG
    :raises RandomSourceUnavailable: if no secure source can be used
    """
    if isinstance(size_bytes, bool) or not isinstance(size_bytes, int) or size_bytes < 1:
        raise InvalidConfiguration("secret size must be a positive number of bytes")
    if random_source is None:
        random_source = default_random_source
    secret = base32.encode(random_source.random_bytes(size_bytes))
    logger.debug("Generated %d byte secret", size_bytes)
    return secret


def build_provisioning_uri(
    account_name: str,
    issuer: Optional[str],
    secret: str,
    config: Optional[Config] = None,
    counter: Optional[int] = None,
) -> str:
    """
    ``otpauth://totp/...`` for authenticator apps, or ``otpauth://hotp/...``
    when a counter is given.
    """
    return utils.build_uri(secret, account_name, issuer=issuer, config=config, initial_count=counter)


def generate_backup_codes(
    count: int = 10, digits: int = 8, random_source: Optional[RandomSource] = None
) -> List[str]:
    """
    One-off recovery codes, each a zero-padded decimal string.

    :param count: how many codes to create
    :param digits: length of each code
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidConfiguration("count must be a positive integer")
    if isinstance(digits, bool) or not isinstance(digits, int) or digits < 1:
        raise InvalidConfiguration("digits must be a positive integer")
    if random_source is None:
        random_source = default_random_source
    limit = 10**digits
    return [str(_random_below(random_source, limit)).rjust(digits, "0") for _ in range(count)]


def _random_below(random_source: RandomSource, limit: int) -> int:
    # rejection sampling keeps the distribution uniform
    size = (limit.bit_length() + 7) // 8
    ceiling = (256**size // limit) * limit
    while True:
        value = int.from_bytes(random_source.random_bytes(size), "big")
        if value < ceiling:
            return value % limit


class Provisioner(object):
    """
    Secret generation and URI building bound to one configuration.
    """

    def __init__(self, config: Optional[Config] = None, random_source: Optional[RandomSource] = None) -> None:
        self.config = config if config is not None else Config()
        self.random_source = random_source if random_source is not None else default_random_source

    def generate_secret(self, size_bytes: int = DEFAULT_SECRET_SIZE) -> str:
        return generate_secret(size_bytes, self.random_source)

    def provisioning_uri(self, account_name: str, issuer: Optional[str], secret: str) -> str:
        return build_provisioning_uri(account_name, issuer, secret, self.config)

    def backup_codes(self, count: int = 10, digits: int = 8) -> List[str]:
        return generate_backup_codes(count, digits, self.random_source)
