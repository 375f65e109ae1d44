import pytest

from otpkit import Algorithm, Config, InvalidSecret, UnsupportedAlgorithm, build_provisioning_uri, parse_uri
from otpkit import utils


def test_strings_equal():
    assert utils.strings_equal("755224", "755224")
    assert not utils.strings_equal("755224", "755225")
    assert not utils.strings_equal("755224", "7552240")
    assert not utils.strings_equal("", "755224")


@pytest.mark.parametrize(
    "code,expected",
    [("000042", True), ("12a456", False), ("12345", False), ("１２３４５６", False), (123456, False)],
)
def test_is_well_formed(code, expected):
    assert utils.is_well_formed(code, 6) is expected


def test_clean_token():
    assert utils.clean_token(" 123-456 ") == "123456"
    assert utils.clean_token(None) == ""


def test_decode_secret(rfc_secret):
    assert utils.decode_secret(rfc_secret) == b"12345678901234567890"
    with pytest.raises(InvalidSecret):
        utils.decode_secret(None)  # type: ignore[arg-type]


def test_parse_uri_reads_back_built_uri(rfc_secret):
    config = Config(algorithm=Algorithm.SHA256, digits=8, step=60)
    info = parse_uri(build_provisioning_uri("alice@example.com", "Example Co", rfc_secret, config))
    assert info.kind == "totp"
    assert info.secret == rfc_secret
    assert info.account == "alice@example.com"
    assert info.issuer == "Example Co"
    assert info.config == config
    assert info.counter is None


def test_parse_hotp_uri(rfc_secret):
    info = parse_uri("otpauth://hotp/alice?secret={}&counter=7".format(rfc_secret))
    assert info.kind == "hotp"
    assert info.issuer is None
    assert info.counter == 7
    assert info.config == Config()


def test_parse_uri_with_encoded_colon(rfc_secret):
    info = parse_uri("otpauth://totp/ExampleCo%3Aalice?secret={}&issuer=ExampleCo".format(rfc_secret))
    assert (info.issuer, info.account) == ("ExampleCo", "alice")


@pytest.mark.parametrize(
    "uri,error",
    [
        ("http://totp/alice?secret=GEZDGNBV", ValueError),
        ("otpauth://motp/alice?secret=GEZDGNBV", ValueError),
        ("otpauth://totp/alice?issuer=ExampleCo", ValueError),
        ("otpauth://totp/alice?secret=0189", InvalidSecret),
        ("otpauth://totp/A:alice?secret=GEZDGNBV&issuer=B", ValueError),
        ("otpauth://totp/alice?secret=GEZDGNBV&algorithm=MD5", UnsupportedAlgorithm),
        ("otpauth://totp/alice?secret=GEZDGNBV&digits=5", ValueError),
        ("otpauth://totp/alice?secret=GEZDGNBV&period=abc", ValueError),
        ("otpauth://hotp/alice?secret=GEZDGNBV&counter=-1", ValueError),
    ],
)
def test_parse_uri_errors(uri, error):
    with pytest.raises(error):
        parse_uri(uri)


def test_parse_uri_keeps_colon_inside_issuer(rfc_secret):
    uri = build_provisioning_uri("alice", "Acme:EU", rfc_secret)
    assert uri.startswith("otpauth://totp/Acme%3AEU:alice?")
    info = parse_uri(uri)
    assert (info.issuer, info.account) == ("Acme:EU", "alice")


def test_parse_uri_keeps_colon_inside_account(rfc_secret):
    info = parse_uri(build_provisioning_uri("ops:alice", "ExampleCo", rfc_secret))
    assert (info.issuer, info.account) == ("ExampleCo", "ops:alice")
