import dataclasses
from typing import Any, Union

from .digest import Algorithm
from .exceptions import InvalidConfiguration

MIN_DIGITS = 6
MAX_DIGITS = 10


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a meaningful setting here
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration("{} must be an integer, got {!r}".format(name, value))
    return value


@dataclasses.dataclass(frozen=True)
class Config(object):
    """
    Immutable OTP settings shared by HOTP, TOTP and the authenticator.

    :param algorithm: HMAC hash, an Algorithm or its name; defaults to SHA1
    :param digits: length of generated codes, between 6 and 10
    :param step: TOTP period in seconds; ignored by HOTP
    :param window: how many neighbouring counters verification accepts
    """

    algorithm: Union[Algorithm, str] = Algorithm.SHA1
    digits: int = 6
    step: int = 30
    window: int = 0

    def __post_init__(self) -> None:
        # frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))

        digits = _require_int("digits", self.digits)
        if not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise InvalidConfiguration("digits must be between {} and {}".format(MIN_DIGITS, MAX_DIGITS))
        if _require_int("step", self.step) < 1:
            raise InvalidConfiguration("step must be a positive number of seconds")
        if _require_int("window", self.window) < 0:
            raise InvalidConfiguration("window must not be negative")

    def replace(self, **changes: Any) -> "Config":
        """Returns a copy with ``changes`` applied, validated again."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = Config()

#: Google Authenticator compatible settings: accept one step of clock drift either way.
AUTHENTICATOR_CONFIG = Config(algorithm=Algorithm.SHA1, digits=6, step=30, window=1)
