class OTPError(Exception):
    """
    Base class for every error raised by otpkit.
    """


class InvalidSecret(OTPError, ValueError):
    """The secret is empty or does not decode to any bytes."""


class UnsupportedAlgorithm(OTPError, ValueError):
    """The HMAC algorithm is not one of SHA1, SHA256 or SHA512."""


class InvalidConfiguration(OTPError, ValueError):
    """A configuration value (digits, step, window, sizes) is out of range."""


class RandomSourceUnavailable(OTPError, RuntimeError):
    """No cryptographically secure random source could be used."""


class DigestUnavailable(OTPError, RuntimeError):
    """The HMAC backend could not compute a digest."""
