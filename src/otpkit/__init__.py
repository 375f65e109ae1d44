from re import split
from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import parse_qsl, unquote, urlparse

from .authenticator import Authenticator as Authenticator
from .config import AUTHENTICATOR_CONFIG as AUTHENTICATOR_CONFIG
from .config import DEFAULT_CONFIG as DEFAULT_CONFIG
from .config import Config as Config
from .digest import Algorithm as Algorithm
from .digest import HmacDigestProvider as HmacDigestProvider
from .exceptions import DigestUnavailable as DigestUnavailable
from .exceptions import InvalidConfiguration as InvalidConfiguration
from .exceptions import InvalidSecret as InvalidSecret
from .exceptions import OTPError as OTPError
from .exceptions import RandomSourceUnavailable as RandomSourceUnavailable
from .exceptions import UnsupportedAlgorithm as UnsupportedAlgorithm
from .hotp import HOTP as HOTP
from .provisioning import build_provisioning_uri as build_provisioning_uri
from .provisioning import generate_backup_codes as generate_backup_codes
from .provisioning import generate_secret as generate_secret
from .random_source import SystemRandomSource as SystemRandomSource
from .totp import TOTP as TOTP
from .utils import decode_secret


class ProvisioningInfo(NamedTuple):
    kind: str
    secret: str
    account: str
    issuer: Optional[str]
    config: Config
    counter: Optional[int]


def parse_uri(uri: str) -> ProvisioningInfo:
    """
    Parses the provisioning URI for the OTP; works for either TOTP or HOTP.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the hotp/totp URI to parse
    :returns: ProvisioningInfo with the secret, label parts and settings
    """
    parsed_uri = urlparse(uri)

    if parsed_uri.scheme != "otpauth":
        raise ValueError("Not an otpauth URI")
    if parsed_uri.netloc not in ("totp", "hotp"):
        raise ValueError("Not a supported OTP type")

    # Label is "issuer:account" or just "account". Segments built by this
    # package never contain a literal colon; other tools may encode the
    # separator itself, so fall back to "%3A" only when no literal colon exists.
    label = parsed_uri.path[1:]
    if ":" in label:
        accountinfo_parts = label.split(":", 1)
    else:
        accountinfo_parts = split("%3A|%3a", label, maxsplit=1)
    issuer: Optional[str] = None
    if len(accountinfo_parts) == 1:
        account = unquote(accountinfo_parts[0])
    else:
        issuer = unquote(accountinfo_parts[0])
        account = unquote(accountinfo_parts[1])

    secret = None
    counter = None
    config_data: Dict[str, Any] = {}
    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            secret = value
        elif key == "issuer":
            if issuer is not None and issuer != value:
                raise ValueError("If issuer is specified in both label and parameters, it should be equal.")
            issuer = value
        elif key == "algorithm":
            config_data["algorithm"] = value
        elif key == "digits":
            config_data["digits"] = _int_param(key, value)
        elif key == "period":
            config_data["step"] = _int_param(key, value)
        elif key == "counter":
            counter = _int_param(key, value)

    if not secret:
        raise ValueError("No secret found in URI")
    decode_secret(secret)

    if parsed_uri.netloc == "hotp":
        if counter is None:
            counter = 0
        elif counter < 0:
            raise ValueError("counter must not be negative")
    else:
        counter = None
    return ProvisioningInfo(parsed_uri.netloc, secret, account, issuer, Config(**config_data), counter)


def _int_param(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError("Invalid value for {}: {!r}".format(key, value)) from None
