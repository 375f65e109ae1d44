"""
RFC 4648 base32 without padding, as used by the otpauth scheme.

Decoding is permissive: characters outside the alphabet (padding, spaces,
dashes people type when copying a secret) are ignored. Callers that need
strict validation should check the text before decoding.
"""
import base64

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}
_LOOKUP.update({char.lower(): index for char, index in list(_LOOKUP.items()) if char.isalpha()})


def encode(data: bytes) -> str:
    """
    Encodes bytes as unpadded base32 text.

    :param data: the bytes to encode
    :returns: upper-case base32 string, empty for empty input
    """
    return base64.b32encode(data).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Decodes base32 text, ignoring case and any non-alphabet characters.

    A trailing group of fewer than 8 bits is discarded.

    :param text: base32 text
    :returns: decoded bytes
    """
    output = bytearray()
    buffer = 0
    bits = 0
    for char in text:
        value = _LOOKUP.get(char)
        if value is None:
            continue
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1
    return bytes(output)
