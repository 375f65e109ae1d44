import datetime
import logging
import math
import time
from typing import Any, Callable, Optional, Union

from . import utils
from .config import Config
from .digest import DigestProvider
from .hotp import HOTP
from .otp import MAX_COUNTER

logger = logging.getLogger(__name__)

TimeLike = Union[int, float, datetime.datetime]


class TOTP(object):
    """
    Handler for time-based OTP counters.

    Wraps an HOTP engine and derives the counter from the clock:
    ``counter = floor(unix_time / step)``.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        digest_provider: Optional[DigestProvider] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        :param config: algorithm, digits, step and window; defaults to Config()
        :param digest_provider: HMAC backend, defaults to the stdlib one
        :param clock: returns the current Unix time in seconds
        """
        self.hotp = HOTP(config, digest_provider)
        self.clock = clock

    @property
    def config(self) -> Config:
        return self.hotp.config

    @property
    def step(self) -> int:
        return self.config.step

    def timestamp(self, for_time: Optional[TimeLike] = None) -> int:
        """
        Whole Unix seconds for ``for_time``, or for now when it is None.

        Naive datetimes are taken as local time, like ``datetime.timestamp()``.
        """
        if for_time is None:
            for_time = self.clock()
        if isinstance(for_time, datetime.datetime):
            for_time = for_time.timestamp()
        if isinstance(for_time, bool) or not isinstance(for_time, (int, float)):
            raise ValueError("time must be Unix seconds or a datetime, got {!r}".format(for_time))
        return int(math.floor(for_time))

    def counter_for(self, for_time: Optional[TimeLike] = None) -> int:
        return self.timestamp(for_time) // self.step

    def generate(self, secret: str, for_time: Optional[TimeLike] = None) -> str:
        """
        Generates the OTP valid at ``for_time``.

        :param secret: base32 secret
        :param for_time: Unix seconds or datetime, defaults to now
        :returns: OTP value
        """
        return self.hotp.generate(secret, self.counter_for(for_time))

    def now(self, secret: str) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.generate(secret)

    def matching_offset(
        self, code: Any, secret: str, for_time: Optional[TimeLike] = None, window: Optional[int] = None
    ) -> Optional[int]:
        """
        Finds the step offset in ``[-window, +window]`` at which ``code`` is valid.

        Offsets are tried in ascending order, so a code valid at several
        offsets reports the smallest. Counters outside 0..2**64-1 are skipped.

        :returns: the offset, or None when the code does not match
        """
        if window is None:
            window = self.config.window
        if window < 0:
            raise ValueError("window must not be negative")
        if not utils.is_well_formed(code, self.config.digits):
            logger.debug("Rejected malformed TOTP code")
            return None

        counter = self.counter_for(for_time)
        for offset in range(-window, window + 1):
            candidate = counter + offset
            if candidate < 0 or candidate > MAX_COUNTER:
                continue
            if utils.strings_equal(code, self.hotp.generate(secret, candidate)):
                logger.debug("TOTP code matched at step offset %d", offset)
                return offset
        return None

    def verify(self, code: Any, secret: str, for_time: Optional[TimeLike] = None, window: Optional[int] = None) -> bool:
        """
        Verifies the OTP passed in against the time ``for_time``.

        :param code: the OTP to check against
        :param secret: base32 secret
        :param for_time: Unix seconds or datetime, defaults to now
        :param window: extra steps accepted on each side, defaults to the
            configured window
        :returns: True if verification succeeded, False otherwise
        """
        return self.matching_offset(code, secret, for_time, window) is not None

    def time_remaining(self, for_time: Optional[TimeLike] = None) -> int:
        """Seconds until the code valid at ``for_time`` expires."""
        return self.step - self.time_used(for_time)

    def time_used(self, for_time: Optional[TimeLike] = None) -> int:
        """Seconds elapsed in the current step."""
        return self.timestamp(for_time) % self.step

    def provisioning_uri(self, name: str, secret: str, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        :param name: name of the user account
        :param secret: base32 secret
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        return utils.build_uri(secret, name, issuer=issuer_name, config=self.config)
