import logging
import time
from typing import Any, Callable, List, Optional

from . import utils
from .config import AUTHENTICATOR_CONFIG, Config
from .digest import DigestProvider
from .provisioning import DEFAULT_SECRET_SIZE, Provisioner
from .random_source import RandomSource
from .totp import TOTP

logger = logging.getLogger(__name__)


class Authenticator(object):
    """
    Google Authenticator style TOTP: 6 digits, SHA1, 30 second steps and
    one step of tolerated drift, plus enrollment helpers.

    Holds a TOTP engine and a Provisioner rather than extending TOTP, and
    always hands the engine an explicit current time.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        digest_provider: Optional[DigestProvider] = None,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if config is None:
            config = AUTHENTICATOR_CONFIG
        self.totp = TOTP(config, digest_provider, clock if clock is not None else time.time)
        self.provisioner = Provisioner(config, random_source)

    @property
    def config(self) -> Config:
        return self.totp.config

    def generate_secret(self, size_bytes: int = DEFAULT_SECRET_SIZE) -> str:
        return self.provisioner.generate_secret(size_bytes)

    def keyuri(self, account_name: str, issuer: Optional[str], secret: str) -> str:
        """
        The otpauth URI to show (usually as a QR code) during enrollment.
        """
        return self.provisioner.provisioning_uri(account_name, issuer, secret)

    def backup_codes(self, count: int = 10, digits: int = 8) -> List[str]:
        return self.provisioner.backup_codes(count, digits)

    def generate(self, secret: str) -> str:
        return self.totp.generate(secret, self.totp.clock())

    def verify(self, code: Any, secret: str) -> bool:
        return self.totp.verify(code, secret, self.totp.clock())

    def verify_token(self, token: Optional[str], secret: str) -> bool:
        """
        Verifies a code as typed by a user, ignoring spaces and separators.

        :param token: raw input such as "123 456" or "123-456"
        :param secret: base32 secret
        """
        code = utils.clean_token(token)
        if not code:
            return False
        matched = self.verify(code, secret)
        if not matched:
            logger.info("Authenticator code rejected")
        return matched

    def time_remaining(self) -> int:
        return self.totp.time_remaining(self.totp.clock())

    def time_used(self) -> int:
        return self.totp.time_used(self.totp.clock())
