import logging
from typing import Any, Optional

from . import utils
from .otp import MAX_COUNTER, OTP

logger = logging.getLogger(__name__)


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def generate(self, secret: str, counter: int) -> str:
        """
        Generates the OTP for the given count.

        :param secret: base32 secret
        :param counter: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(secret, counter)

    def verify(self, code: Any, secret: str, counter: int, window: Optional[int] = None) -> Optional[int]:
        """
        Verifies an OTP against ``counter`` and up to ``window`` counters after it.

        Only looks ahead; a code for an earlier counter never matches.
        Malformed codes are rejected before any HMAC is computed.

        :param code: the OTP to check
        :param secret: base32 secret
        :param counter: the next expected HMAC counter
        :param window: look-ahead, defaults to the configured window
        :returns: offset from ``counter`` of the match (0 when exact), or
            None when nothing matched. Compare against None, not falsiness.
        """
        if window is None:
            window = self.config.window
        if window < 0:
            raise ValueError("window must not be negative")
        if not utils.is_well_formed(code, self.digits):
            logger.debug("Rejected malformed HOTP code")
            return None

        for offset in range(window + 1):
            candidate = counter + offset
            if candidate > MAX_COUNTER:
                break
            if utils.strings_equal(code, self.generate(secret, candidate)):
                logger.debug("HOTP code matched at offset %d", offset)
                return offset
        return None

    def provisioning_uri(self, name: str, secret: str, initial_count: int = 0, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        :param name: name of the user account
        :param secret: base32 secret
        :param initial_count: starting HMAC counter value, defaults to 0
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        return utils.build_uri(secret, name, issuer=issuer_name, config=self.config, initial_count=initial_count)
