"""
PASETO error taxonomy.

Every failure raised by the codec derives from PasetoError. Decryption and
signature failures carry a single generic message so callers cannot tell a bad
tag from a bad footer or nonce.
"""


class PasetoError(Exception):
    """Base class for all codec errors."""

    pass


class InvalidKeyLength(PasetoError, ValueError):
    """Raised when a key does not have the size the operation requires."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid key length. Expected {expected}, but got {actual}")


class DecryptionFailed(PasetoError):
    """Raised when a local token cannot be authenticated or decrypted."""

    def __init__(self, message: str = "Failed to decrypt payload."):
        super().__init__(message)


class SignatureVerificationFailed(PasetoError):
    """Raised when a public token signature does not verify."""

    def __init__(self, message: str = "Failed to verify signature."):
        super().__init__(message)


class MalformedToken(PasetoError, ValueError):
    """Raised for structurally invalid tokens (segments, base64url, tags, lengths)."""

    pass
