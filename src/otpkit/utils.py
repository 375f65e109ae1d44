import re
from hmac import compare_digest
from typing import Any, Optional
from urllib.parse import quote

from . import base32
from .config import Config
from .exceptions import InvalidSecret

_NON_DIGITS = re.compile(r"[^0-9]")


def decode_secret(secret: str) -> bytes:
    """
    Turns a base32 secret into the HMAC key.

    :raises InvalidSecret: if nothing decodable is left
    """
    if not isinstance(secret, str):
        raise InvalidSecret("secret must be a base32 string")
    key = base32.decode(secret)
    if not key:
        raise InvalidSecret("secret does not decode to any bytes")
    return key


def is_well_formed(code: Any, digits: int) -> bool:
    """
    True if ``code`` is a string of exactly ``digits`` ASCII decimal digits.
    """
    if not isinstance(code, str) or len(code) != digits:
        return False
    return _NON_DIGITS.search(code) is None


def clean_token(token: Optional[str]) -> str:
    """
    Drops everything but ASCII digits from a user-typed code, e.g. "123 456".
    """
    if not token:
        return ""
    return _NON_DIGITS.sub("", token)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This compares lengths first and then scans the whole string,
    so only the length is revealed to a timing attack.
    """
    if len(s1) != len(s2):
        return False
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))


def build_uri(
    secret: str,
    name: str,
    issuer: Optional[str] = None,
    config: Optional[Config] = None,
    initial_count: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app. Parameters are always emitted in the same order:
    secret, algorithm, digits, period (or counter), issuer.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the hotp/totp secret used to generate the URI
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param config: algorithm, digits and period to advertise
    :param initial_count: starting counter value, defaults to None.
        If none, the OTP type will be assumed as TOTP.
    :returns: provisioning uri
    """
    if not name:
        raise ValueError("account name must not be empty")
    decode_secret(secret)
    if config is None:
        config = Config()

    # initial_count may be 0 as a valid param
    is_hotp = initial_count is not None
    if is_hotp and (isinstance(initial_count, bool) or not isinstance(initial_count, int) or initial_count < 0):
        raise ValueError("counter must be a non-negative integer")

    label = _quote(name)
    if issuer is not None:
        label = _quote(issuer) + ":" + label

    url_args = [
        ("secret", _quote(secret)),
        ("algorithm", config.algorithm.value),
        ("digits", str(config.digits)),
    ]
    if is_hotp:
        url_args.append(("counter", str(initial_count)))
    else:
        url_args.append(("period", str(config.step)))
    if issuer is not None:
        url_args.append(("issuer", _quote(issuer)))

    query = "&".join("{}={}".format(key, value) for key, value in url_args)
    return "otpauth://{}/{}?{}".format("hotp" if is_hotp else "totp", label, query)


def _quote(value: str) -> str:
    # RFC 3986: leave only unreserved characters literal
    return quote(value, safe="")
