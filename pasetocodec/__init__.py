"""
pasetocodec - PASETO version 2 tokens for Python.

Builds and parses ``v2.local`` (XChaCha20-Poly1305 encrypted) and ``v2.public``
(Ed25519 signed) tokens, binding header, body and footer through
Pre-Authentication Encoding.
"""

__version__ = "0.1.0"

from .errors import (
    PasetoError,
    InvalidKeyLength,
    DecryptionFailed,
    SignatureVerificationFailed,
    MalformedToken,
)
from .pae import pre_auth_encode
from .tokens import Token, Purpose, parse_token, get_footer
from .v2 import V2, encrypt, decrypt, sign, verify, peek, decode
from .keys import KeyPair, generate_keypair, generate_local_key
from .primitives import (
    AeadCipher,
    SignatureScheme,
    KeyedHash,
    SecureRandom,
    XChaCha20Poly1305,
    Ed25519Signature,
    Blake2bHash,
    SystemRandom,
)

__all__ = [
    "__version__",
    # Errors
    "PasetoError",
    "InvalidKeyLength",
    "DecryptionFailed",
    "SignatureVerificationFailed",
    "MalformedToken",
    # Codec
    "pre_auth_encode",
    "Token",
    "Purpose",
    "parse_token",
    "get_footer",
    "V2",
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    "peek",
    "decode",
    # Keys
    "KeyPair",
    "generate_keypair",
    "generate_local_key",
    # Capabilities
    "AeadCipher",
    "SignatureScheme",
    "KeyedHash",
    "SecureRandom",
    "XChaCha20Poly1305",
    "Ed25519Signature",
    "Blake2bHash",
    "SystemRandom",
]
