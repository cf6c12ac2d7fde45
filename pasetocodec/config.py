# pasetocodec/config.py
"""
Centralized configuration for pasetocodec.

Values are read from environment variables with defaults, so the CLI can pick
up keys and logging settings without flags.

Environment Variables:
    PASETO_LOCAL_KEY: Hex-encoded 32-byte key for local tokens.
    PASETO_SECRET_KEY: Hex-encoded 64-byte Ed25519 secret key for signing.
    PASETO_PUBLIC_KEY: Hex-encoded 32-byte Ed25519 public key for verifying.
    PASETO_LOG_LEVEL: Logging level name used by the CLI (default: WARNING).
    PASETO_LOG_FORMAT: Logging format string used by the CLI.
"""

import os
from typing import Final, Optional

# =============================================================================
# Key Environment Variables
# =============================================================================

LOCAL_KEY_ENV: Final[str] = "PASETO_LOCAL_KEY"
SECRET_KEY_ENV: Final[str] = "PASETO_SECRET_KEY"
PUBLIC_KEY_ENV: Final[str] = "PASETO_PUBLIC_KEY"

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL: Final[str] = os.getenv("PASETO_LOG_LEVEL", "WARNING").upper()

LOG_FORMAT: Final[str] = os.getenv(
    "PASETO_LOG_FORMAT",
    "%(levelname)s: %(message)s"
)

# =============================================================================
# Helper Functions
# =============================================================================


def get_key_from_env(name: str) -> Optional[bytes]:
    """
    Read a hex-encoded key from the environment.

    The variable is read at call time.

    Args:
        name: Environment variable name (e.g. LOCAL_KEY_ENV).

    Returns:
        The decoded key bytes, or None if the variable is unset or empty.

    Raises:
        ValueError: If the value is not valid hex.
    """
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise ValueError(f"{name} must be hex-encoded")


def _mask(name: str) -> str:
    return "<set>" if os.environ.get(name) else "<unset>"


def print_config() -> None:
    """Print current configuration with key material masked."""
    print("pasetocodec Configuration:")
    print(f"  {LOCAL_KEY_ENV}:  {_mask(LOCAL_KEY_ENV)}")
    print(f"  {SECRET_KEY_ENV}: {_mask(SECRET_KEY_ENV)}")
    print(f"  {PUBLIC_KEY_ENV}: {_mask(PUBLIC_KEY_ENV)}")
    print(f"  LOG_LEVEL:         {LOG_LEVEL}")
    print(f"  LOG_FORMAT:        {LOG_FORMAT}")


if __name__ == "__main__":
    print_config()
