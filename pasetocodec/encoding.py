"""
Base64url codec used on the wire.

Tokens use the URL-safe alphabet with padding stripped. Decoding is strict:
padded input, characters outside the alphabet and impossible lengths are
rejected with MalformedToken.
"""

import re
from typing import Union

from jwcrypto.common import base64url_decode, base64url_encode

from pasetocodec.errors import MalformedToken

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def to_bytes(value: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """Coerce str (UTF-8) or any bytes-like value to bytes."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected str or bytes, got {type(value).__name__}")


def b64_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64url_encode(to_bytes(data))


def b64_decode(text: Union[str, bytes]) -> bytes:
    """
    Decode unpadded base64url text.

    Raises:
        MalformedToken: If the input is padded, uses characters outside the
            URL-safe alphabet, has a length no encoding can produce, or is
            not the canonical encoding of its bytes.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError:
            raise MalformedToken("Invalid base64url encoding") from None

    if not isinstance(text, str) or not _B64URL_RE.match(text):
        raise MalformedToken("Invalid base64url encoding")

    if len(text) % 4 == 1:
        raise MalformedToken("Invalid base64url length")

    try:
        decoded = base64url_decode(text)
    except ValueError as e:
        raise MalformedToken(f"Invalid base64url encoding: {e}") from e

    # Unused low bits of the last character must be zero.
    if base64url_encode(decoded) != text:
        raise MalformedToken("Non-canonical base64url encoding")
    return decoded
