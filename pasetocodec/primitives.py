"""
Cryptographic capabilities consumed by the codec.

The codec never calls a crypto library directly; it goes through these
interfaces so tests can substitute deterministic fakes. The default
implementations bind to vetted libraries:

- XChaCha20-Poly1305 AEAD via libsodium (PyNaCl bindings)
- Ed25519 detached signatures via ``cryptography``
- keyed BLAKE2b via ``hashlib``
- ``os.urandom`` as the CSPRNG
"""

import hashlib
import os
from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from nacl.bindings import (
    crypto_aead_xchacha20poly1305_ietf_decrypt,
    crypto_aead_xchacha20poly1305_ietf_encrypt,
)
from nacl.exceptions import CryptoError


class AeadError(Exception):
    """Raised by an AeadCipher when a ciphertext does not authenticate."""

    pass


class AeadCipher(ABC):
    """Authenticated encryption with associated data."""

    @abstractmethod
    def encrypt(self, plaintext: bytes, associated_data: bytes, nonce: bytes, key: bytes) -> bytes:
        """Return ciphertext with the authentication tag appended."""
        pass

    @abstractmethod
    def decrypt(self, ciphertext: bytes, associated_data: bytes, nonce: bytes, key: bytes) -> bytes:
        """Return the plaintext, or raise AeadError."""
        pass


class SignatureScheme(ABC):
    """Detached digital signatures."""

    signature_length: int = 64

    @abstractmethod
    def sign_detached(self, message: bytes, secret_key: bytes) -> bytes:
        """Sign ``message`` and return the detached signature."""
        pass

    @abstractmethod
    def verify_detached(self, signature: bytes, message: bytes, public_key: bytes) -> bool:
        """Return True only if ``signature`` is valid for ``message``."""
        pass


class KeyedHash(ABC):
    """Keyed cryptographic hash with configurable output size."""

    @abstractmethod
    def hash(self, message: bytes, output_len: int, key: bytes) -> bytes:
        pass


class SecureRandom(ABC):
    """Cryptographically secure random source."""

    @abstractmethod
    def random_bytes(self, n: int) -> bytes:
        pass


class XChaCha20Poly1305(AeadCipher):
    """IETF XChaCha20-Poly1305 (24-byte nonce, 16-byte tag) from libsodium."""

    tag_length = 16

    def encrypt(self, plaintext: bytes, associated_data: bytes, nonce: bytes, key: bytes) -> bytes:
        return crypto_aead_xchacha20poly1305_ietf_encrypt(plaintext, associated_data, nonce, key)

    def decrypt(self, ciphertext: bytes, associated_data: bytes, nonce: bytes, key: bytes) -> bytes:
        if len(ciphertext) < self.tag_length:
            raise AeadError("Ciphertext shorter than the authentication tag")
        try:
            return crypto_aead_xchacha20poly1305_ietf_decrypt(ciphertext, associated_data, nonce, key)
        except CryptoError as e:
            raise AeadError(str(e)) from e


class Ed25519Signature(SignatureScheme):
    """
    Ed25519 detached signatures.

    Secret keys use the libsodium layout (32-byte seed followed by the 32-byte
    public key). The signing key is rebuilt from the seed, and the public
    half must match it.
    """

    signature_length = 64

    def sign_detached(self, message: bytes, secret_key: bytes) -> bytes:
        private_key = Ed25519PrivateKey.from_private_bytes(bytes(secret_key[:32]))
        public_key = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
        )
        if public_key != bytes(secret_key[32:]):
            raise ValueError("Secret key does not embed the public key of its seed")
        return private_key.sign(message)

    def verify_detached(self, signature: bytes, message: bytes, public_key: bytes) -> bool:
        try:
            Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(signature, message)
            return True
        except InvalidSignature:
            return False


class Blake2bHash(KeyedHash):
    """Keyed BLAKE2b (output and key sizes up to 64 bytes)."""

    def hash(self, message: bytes, output_len: int, key: bytes) -> bytes:
        return hashlib.blake2b(message, digest_size=output_len, key=key).digest()


class SystemRandom(SecureRandom):
    """Process-wide OS CSPRNG; safe to call from any thread."""

    def random_bytes(self, n: int) -> bytes:
        return os.urandom(n)
