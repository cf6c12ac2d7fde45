"""
Shared pytest fixtures for pasetocodec tests.
"""

import pytest

from pasetocodec import V2, KeyPair, generate_keypair
from pasetocodec.primitives import SecureRandom


# The 32-byte key used in the reference documentation examples.
REFERENCE_KEY = bytes(
    [
        56, 165, 237, 250, 173, 90, 82, 73, 227, 45, 166, 36, 121, 213, 122, 227,
        188, 168, 248, 190, 39, 11, 243, 40, 236, 206, 123, 237, 189, 43, 220, 66,
    ]
)


class FixedRandom(SecureRandom):
    """Deterministic random source for reproducible tokens."""

    def __init__(self, value: bytes):
        self.value = value
        self.calls = []

    def random_bytes(self, n: int) -> bytes:
        self.calls.append(n)
        return (self.value * (n // len(self.value) + 1))[:n]


@pytest.fixture
def local_key() -> bytes:
    """Fixed 32-byte symmetric key."""
    return REFERENCE_KEY


@pytest.fixture
def keypair() -> KeyPair:
    """Fresh Ed25519 key pair."""
    return generate_keypair()


@pytest.fixture
def other_keypair() -> KeyPair:
    """A second, unrelated key pair."""
    return generate_keypair()


@pytest.fixture
def codec() -> V2:
    """Default v2 codec."""
    return V2()


@pytest.fixture
def fixed_seed() -> bytes:
    """24-byte nonce seed."""
    return bytes(range(24))


@pytest.fixture
def deterministic_codec(fixed_seed: bytes) -> V2:
    """v2 codec whose CSPRNG always returns ``fixed_seed``."""
    return V2(random=FixedRandom(fixed_seed))


@pytest.fixture
def sample_message() -> bytes:
    """Sample JSON claims."""
    return b'{"data":"this is a signed message","exp":"2039-01-01T00:00:00+00:00"}'


def split_token(token: str):
    """Split a token string into (header, payload segment, footer segment)."""
    parts = token.split(".")
    footer = parts[3] if len(parts) == 4 else ""
    return f"{parts[0]}.{parts[1]}.", parts[2], footer
