"""
Key generation helpers for v2 tokens.
"""

from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from pasetocodec.errors import InvalidKeyLength
from pasetocodec.primitives import SecureRandom, SystemRandom


@dataclass(frozen=True)
class KeyPair:
    """
    Ed25519 key pair in the libsodium layout.

    Attributes:
        secret_key: 64 bytes, the 32-byte seed followed by the public key.
        public_key: 32-byte public key.
    """

    secret_key: bytes
    public_key: bytes

    @property
    def seed(self) -> bytes:
        return self.secret_key[:32]

    @classmethod
    def from_seed(cls, seed: bytes) -> "KeyPair":
        """Derive the key pair from a 32-byte seed."""
        if len(seed) != 32:
            raise InvalidKeyLength(32, len(seed))
        private_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
        public_key = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
        )
        return cls(secret_key=bytes(seed) + public_key, public_key=public_key)

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> "KeyPair":
        """Rebuild the key pair from a 64-byte secret key."""
        if len(secret_key) != 64:
            raise InvalidKeyLength(64, len(secret_key))
        pair = cls.from_seed(secret_key[:32])
        if pair.public_key != bytes(secret_key[32:]):
            raise ValueError("Secret key does not embed the public key of its seed")
        return pair

    def secret_hex(self) -> str:
        return self.secret_key.hex()

    def public_hex(self) -> str:
        return self.public_key.hex()


def generate_keypair() -> KeyPair:
    """Generate a fresh Ed25519 key pair for public tokens."""
    private_key = Ed25519PrivateKey.generate()
    seed = private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return KeyPair.from_seed(seed)


def generate_local_key(random: Optional[SecureRandom] = None) -> bytes:
    """Generate a fresh 32-byte symmetric key for local tokens."""
    return (random or SystemRandom()).random_bytes(32)
