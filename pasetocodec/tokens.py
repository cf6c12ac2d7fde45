"""
PASETO token value type and tokenizer.

A raw token has the form ``version.purpose.payload[.footer]`` where payload and
footer are unpadded base64url. The footer segment is omitted entirely when the
footer is empty.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pasetocodec.encoding import b64_decode, b64_encode
from pasetocodec.errors import MalformedToken


class Purpose(str, Enum):
    """Closed set of token purposes."""

    LOCAL = "local"
    PUBLIC = "public"

    @classmethod
    def parse(cls, tag: str) -> "Purpose":
        """Map a wire tag to a Purpose, rejecting anything unknown."""
        try:
            return cls(tag)
        except ValueError:
            raise MalformedToken(f"Unknown token purpose: {tag!r}") from None


@dataclass(frozen=True)
class Token:
    """A split and decoded token. ``payload`` and ``footer`` are raw bytes."""

    version: str
    purpose: Purpose
    payload: bytes
    footer: bytes = b""

    @property
    def header(self) -> str:
        return f"{self.version}.{self.purpose.value}."

    @classmethod
    def from_string(cls, raw: Union[str, bytes]) -> "Token":
        return parse_token(raw)

    def to_string(self) -> str:
        """Serialize back to wire form, omitting the footer segment when empty."""
        body = self.header + b64_encode(self.payload)
        if self.footer:
            body += "." + b64_encode(self.footer)
        return body

    def __str__(self) -> str:
        return self.to_string()


def split_segments(raw: Union[str, bytes]) -> list:
    """Split a raw token into its 3 or 4 dot-separated segments."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("ascii")
        except UnicodeDecodeError:
            raise MalformedToken("Token must be ASCII") from None
    if not isinstance(raw, str):
        raise MalformedToken("Token must be a string")

    parts = raw.split(".")
    if len(parts) not in (3, 4):
        raise MalformedToken(f"Token must have 3 or 4 segments, got {len(parts)}")
    if len(parts) == 4 and not parts[3]:
        raise MalformedToken("Empty footer segment must be omitted")
    return parts


def parse_token(raw: Union[str, bytes]) -> Token:
    """
    Split a raw token into (version, purpose, payload, footer).

    Only the structure is checked here; the version tag is left for the
    version codec to accept or reject.

    Raises:
        MalformedToken: On wrong segment count, unknown purpose or invalid
            base64url.
    """
    parts = split_segments(raw)
    version = parts[0]
    if not version:
        raise MalformedToken("Missing token version")
    purpose = Purpose.parse(parts[1])
    payload = b64_decode(parts[2])
    footer = b64_decode(parts[3]) if len(parts) == 4 else b""
    return Token(version=version, purpose=purpose, payload=payload, footer=footer)


def get_footer(raw: Union[str, bytes]) -> bytes:
    """
    Return the decoded footer of a raw token (b"" when absent).

    Footers are never encrypted, so they can be read before choosing a key
    (for example a key id stored in the footer).
    """
    parts = split_segments(raw)
    return b64_decode(parts[3]) if len(parts) == 4 else b""
