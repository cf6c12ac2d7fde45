"""
PASETO Version 2 codec.

``local`` tokens are encrypted with XChaCha20-Poly1305 and ``public`` tokens
are signed with Ed25519. Header, body and footer are bound together through
Pre-Authentication Encoding before they reach either primitive.

Wire format::

    v2.local.<b64(nonce || ciphertext || tag)>[.<b64(footer)>]
    v2.public.<b64(message || signature)>[.<b64(footer)>]

Example:
    >>> from pasetocodec import V2, Purpose, generate_local_key
    >>> key = generate_local_key()
    >>> token = V2().encrypt(b"secret claims", key, footer=b"kid:1")
    >>> V2().decode(token, key, Purpose.LOCAL)
    (True, b'secret claims')
"""

import logging
from typing import Optional, Tuple, Union

from pasetocodec.encoding import b64_decode, b64_encode, to_bytes
from pasetocodec.errors import (
    DecryptionFailed,
    InvalidKeyLength,
    MalformedToken,
    SignatureVerificationFailed,
)
from pasetocodec.pae import pre_auth_encode
from pasetocodec.primitives import (
    AeadCipher,
    AeadError,
    Blake2bHash,
    Ed25519Signature,
    KeyedHash,
    SecureRandom,
    SignatureScheme,
    SystemRandom,
    XChaCha20Poly1305,
)
from pasetocodec.tokens import Purpose, Token, parse_token, split_segments

logger = logging.getLogger(__name__)

BytesLike = Union[str, bytes]


class V2:
    """
    Version 2 codec with injectable crypto capabilities.

    Instances hold no mutable state and can be shared between threads.

    Args:
        aead: AEAD cipher for local tokens (default: XChaCha20-Poly1305).
        signature: Signature scheme for public tokens (default: Ed25519).
        keyed_hash: Keyed hash used to derive nonces (default: BLAKE2b).
        random: CSPRNG used for nonce seeds (default: os.urandom).
    """

    VERSION = "v2"
    KEY_LENGTH = 32
    NONCE_LENGTH = 24
    SECRET_KEY_LENGTH = 64
    PUBLIC_KEY_LENGTH = 32

    LOCAL_HEADER = "v2.local."
    PUBLIC_HEADER = "v2.public."

    def __init__(
        self,
        aead: Optional[AeadCipher] = None,
        signature: Optional[SignatureScheme] = None,
        keyed_hash: Optional[KeyedHash] = None,
        random: Optional[SecureRandom] = None,
    ):
        self._aead = aead or XChaCha20Poly1305()
        self._signature = signature or Ed25519Signature()
        self._hash = keyed_hash or Blake2bHash()
        self._random = random or SystemRandom()

    # ------------------------------------------------------------------
    # Local (symmetric)
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: BytesLike, key: bytes, footer: BytesLike = b"") -> str:
        """
        Encrypt ``plaintext`` into a ``v2.local.`` token.

        The nonce is a 24-byte BLAKE2b hash of the plaintext keyed with 24
        random bytes, so a weak random source alone cannot cause nonce reuse.

        Args:
            plaintext: Message to encrypt.
            key: 32-byte symmetric key.
            footer: Optional raw footer; authenticated but not encrypted.

        Returns:
            The token string.

        Raises:
            InvalidKeyLength: If ``key`` is not 32 bytes.
        """
        key = self._check_key(key, self.KEY_LENGTH)
        data = to_bytes(plaintext)
        footer = to_bytes(footer)

        seed = self._random.random_bytes(self.NONCE_LENGTH)
        nonce = self._hash.hash(data, self.NONCE_LENGTH, seed)
        pre_auth = pre_auth_encode([self.LOCAL_HEADER, nonce, footer])

        ciphertext = self._aead.encrypt(data, pre_auth, nonce, key)
        logger.debug(f"Encrypted local token ({len(data)} bytes, footer={bool(footer)})")

        return self._assemble(self.LOCAL_HEADER, nonce + ciphertext, footer)

    def decrypt(self, token_body: BytesLike, key: bytes, footer: BytesLike = "") -> Tuple[bool, bytes]:
        """
        Decrypt the payload segment of a local token.

        Args:
            token_body: base64url payload segment (the part after ``v2.local.``).
            key: 32-byte symmetric key.
            footer: base64url footer segment, or empty when the token has none.

        Returns:
            ``(True, plaintext)``

        Raises:
            InvalidKeyLength: If ``key`` is not 32 bytes.
            MalformedToken: If a segment is not valid base64url or the payload
                is too short to hold a nonce.
            DecryptionFailed: If the ciphertext does not authenticate.
        """
        key = self._check_key(key, self.KEY_LENGTH)
        payload = b64_decode(token_body)
        decoded_footer = b64_decode(footer) if footer else b""
        return self._decrypt_payload(payload, key, decoded_footer)

    def _decrypt_payload(self, payload: bytes, key: bytes, footer: bytes) -> Tuple[bool, bytes]:
        if len(payload) < self.NONCE_LENGTH:
            raise MalformedToken("Local token payload is shorter than the nonce")

        nonce = payload[: self.NONCE_LENGTH]
        ciphertext = payload[self.NONCE_LENGTH :]
        pre_auth = pre_auth_encode([self.LOCAL_HEADER, nonce, footer])

        try:
            plaintext = self._aead.decrypt(ciphertext, pre_auth, nonce, key)
        except AeadError as e:
            logger.debug(f"Local token rejected: {e}")
            raise DecryptionFailed() from None

        return True, plaintext

    # ------------------------------------------------------------------
    # Public (asymmetric)
    # ------------------------------------------------------------------

    def sign(self, message: BytesLike, secret_key: bytes, footer: BytesLike = b"") -> str:
        """
        Sign ``message`` into a ``v2.public.`` token.

        The message travels in the clear; only its integrity is protected.

        Args:
            message: Message to sign.
            secret_key: 64-byte Ed25519 secret key (seed || public key).
            footer: Optional raw footer, covered by the signature.

        Raises:
            InvalidKeyLength: If ``secret_key`` is not 64 bytes.
            ValueError: If the public half of ``secret_key`` does not belong
                to its seed.
        """
        secret_key = self._check_key(secret_key, self.SECRET_KEY_LENGTH)
        data = to_bytes(message)
        footer = to_bytes(footer)

        pre_auth = pre_auth_encode([self.PUBLIC_HEADER, data, footer])
        signature = self._signature.sign_detached(pre_auth, secret_key)
        logger.debug(f"Signed public token ({len(data)} bytes, footer={bool(footer)})")

        return self._assemble(self.PUBLIC_HEADER, data + signature, footer)

    def verify(self, signed_body: BytesLike, public_key: bytes, footer: BytesLike = "") -> Tuple[bool, bytes]:
        """
        Verify the payload segment of a public token.

        Args:
            signed_body: base64url payload segment (the part after ``v2.public.``).
            public_key: 32-byte Ed25519 public key.
            footer: base64url footer segment, or empty when the token has none.

        Returns:
            ``(True, message)``

        Raises:
            InvalidKeyLength: If ``public_key`` is not 32 bytes.
            MalformedToken: If a segment is not valid base64url or the payload
                is shorter than a signature.
            SignatureVerificationFailed: If the signature does not match.
        """
        public_key = self._check_key(public_key, self.PUBLIC_KEY_LENGTH)
        decoded_footer = b64_decode(footer) if footer else b""
        payload = b64_decode(signed_body)
        return self._verify_payload(payload, public_key, decoded_footer)

    def _verify_payload(self, payload: bytes, public_key: bytes, footer: bytes) -> Tuple[bool, bytes]:
        message, signature = self._split_signed(payload)
        pre_auth = pre_auth_encode([self.PUBLIC_HEADER, message, footer])

        if not self._signature.verify_detached(signature, pre_auth, public_key):
            logger.debug("Public token signature rejected")
            raise SignatureVerificationFailed()

        return True, message

    def peek(self, token: BytesLike) -> bytes:
        """
        Return the message of a public token WITHOUT verifying its signature.

        WARNING: the returned bytes are unauthenticated. Anyone can forge them.
        Use this only for diagnostics or routing hints, never for
        authorization decisions; call ``verify``/``decode`` for that.

        Raises:
            MalformedToken: If the token does not have 3 or 4 segments or the
                payload is not valid base64url / too short.
        """
        parts = split_segments(token)
        message, _ = self._split_signed(b64_decode(parts[2]))
        return message

    # ------------------------------------------------------------------
    # Full tokens
    # ------------------------------------------------------------------

    def accepts(self, token: Token) -> Token:
        """Return ``token`` if it belongs to this version, else raise MalformedToken."""
        if token.version != self.VERSION:
            raise MalformedToken(f"Unexpected token version: {token.version!r}, expected {self.VERSION!r}")
        return token

    def decode(self, raw: BytesLike, key: bytes, purpose: Purpose) -> Tuple[bool, bytes]:
        """
        Parse a full token and decrypt or verify it as ``purpose``.

        The caller states which purpose the key is for. A token tagged with
        any other purpose is rejected before the key is used.

        Args:
            raw: Complete token string.
            key: 32-byte symmetric key for ``Purpose.LOCAL``, 32-byte Ed25519
                public key for ``Purpose.PUBLIC``.
            purpose: The purpose the caller expects.

        Returns:
            ``(True, plaintext_or_message)``

        Raises:
            MalformedToken: If the token version or purpose does not match.
        """
        purpose = Purpose.parse(purpose)
        token = self.accepts(parse_token(raw))
        if token.purpose is not purpose:
            raise MalformedToken(
                f"Unexpected token purpose: {token.purpose.value!r}, expected {purpose.value!r}"
            )

        if token.purpose is Purpose.LOCAL:
            key = self._check_key(key, self.KEY_LENGTH)
            return self._decrypt_payload(token.payload, key, token.footer)
        elif token.purpose is Purpose.PUBLIC:
            key = self._check_key(key, self.PUBLIC_KEY_LENGTH)
            return self._verify_payload(token.payload, key, token.footer)

        raise MalformedToken(f"Unsupported token purpose: {token.purpose!r}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _split_signed(self, payload: bytes) -> Tuple[bytes, bytes]:
        signature_length = self._signature.signature_length
        if len(payload) < signature_length:
            raise MalformedToken("Public token payload is shorter than the signature")
        cut = len(payload) - signature_length
        return payload[:cut], payload[cut:]

    @staticmethod
    def _check_key(key: bytes, expected: int) -> bytes:
        key = to_bytes(key)
        if len(key) != expected:
            raise InvalidKeyLength(expected, len(key))
        return key

    @staticmethod
    def _assemble(header: str, body: bytes, footer: bytes) -> str:
        token = header + b64_encode(body)
        if footer:
            token += "." + b64_encode(footer)
        return token


_default = V2()


def encrypt(plaintext: BytesLike, key: bytes, footer: BytesLike = b"") -> str:
    """Encrypt with the default v2 codec. See ``V2.encrypt``."""
    return _default.encrypt(plaintext, key, footer)


def decrypt(token_body: BytesLike, key: bytes, footer: BytesLike = "") -> Tuple[bool, bytes]:
    """Decrypt with the default v2 codec. See ``V2.decrypt``."""
    return _default.decrypt(token_body, key, footer)


def sign(message: BytesLike, secret_key: bytes, footer: BytesLike = b"") -> str:
    """Sign with the default v2 codec. See ``V2.sign``."""
    return _default.sign(message, secret_key, footer)


def verify(signed_body: BytesLike, public_key: bytes, footer: BytesLike = "") -> Tuple[bool, bytes]:
    """Verify with the default v2 codec. See ``V2.verify``."""
    return _default.verify(signed_body, public_key, footer)


def peek(token: BytesLike) -> bytes:
    """Unverified message of a public token. See ``V2.peek`` for the caveats."""
    return _default.peek(token)


def decode(raw: BytesLike, key: bytes, purpose: Purpose) -> Tuple[bool, bytes]:
    """Parse and decrypt/verify a full token of the given purpose. See ``V2.decode``."""
    return _default.decode(raw, key, purpose)
