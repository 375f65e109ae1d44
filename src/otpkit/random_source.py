import logging
import secrets
from typing import Protocol

from .exceptions import RandomSourceUnavailable

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random_bytes(self, size: int) -> bytes:
        ...


class SystemRandomSource(object):
    """
    Draws bytes from the operating system CSPRNG through ``secrets``.

    Never falls back to the ``random`` module.
    """

    def random_bytes(self, size: int) -> bytes:
        try:
            return secrets.token_bytes(size)
        except (NotImplementedError, OSError) as exc:
            logger.error("Secure random source unavailable: %s", exc)
            raise RandomSourceUnavailable("No cryptographically secure random source available") from exc


#: Selected once at import; pass another source to replace it.
default_random_source = SystemRandomSource()
