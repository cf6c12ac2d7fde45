"""
pasetocodec Command Line Interface.

Provides commands for generating keys, encrypting/decrypting local tokens and
signing/verifying public tokens.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from pasetocodec import config
from pasetocodec.errors import PasetoError
from pasetocodec.keys import generate_keypair, generate_local_key
from pasetocodec.tokens import Purpose, get_footer
from pasetocodec.v2 import V2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def _load_key(arg: Optional[str], env_name: str) -> bytes:
    """Resolve a hex key from --key or the environment."""
    if arg:
        try:
            return bytes.fromhex(arg.strip())
        except ValueError:
            raise ValueError("--key must be hex-encoded")
    key = config.get_key_from_env(env_name)
    if key is None:
        raise ValueError(f"Missing key. Set {env_name} or use --key")
    return key


def _print_bytes(data: bytes) -> None:
    try:
        print(data.decode("utf-8"))
    except UnicodeDecodeError:
        print(data.hex())


def cmd_keygen(args: argparse.Namespace) -> int:
    """Generate a local key or a public key pair."""
    if args.purpose == "local":
        key = generate_local_key().hex()
        if args.env:
            print(f"export {config.LOCAL_KEY_ENV}='{key}'")
        else:
            print("--- LOCAL KEY (Keep Secret) ---")
            print(key)
        return 0

    pair = generate_keypair()
    if args.env:
        print(f"export {config.SECRET_KEY_ENV}='{pair.secret_hex()}'")
        print(f"export {config.PUBLIC_KEY_ENV}='{pair.public_hex()}'")
    else:
        print("--- SECRET KEY (Keep Secret) ---")
        print(pair.secret_hex())
        print("\n--- PUBLIC KEY (Share with verifiers) ---")
        print(pair.public_hex())
    return 0


def cmd_encrypt(args: argparse.Namespace) -> int:
    """Encrypt a message into a local token."""
    key = _load_key(args.key, config.LOCAL_KEY_ENV)
    print(V2().encrypt(args.message, key, args.footer or b""))
    return 0


def cmd_decrypt(args: argparse.Namespace) -> int:
    """Decrypt a local token."""
    key = _load_key(args.key, config.LOCAL_KEY_ENV)
    _, plaintext = V2().decode(args.token, key, Purpose.LOCAL)
    _print_bytes(plaintext)
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    """Sign a message into a public token."""
    secret_key = _load_key(args.key, config.SECRET_KEY_ENV)
    print(V2().sign(args.message, secret_key, args.footer or b""))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify a public token."""
    public_key = _load_key(args.key, config.PUBLIC_KEY_ENV)
    try:
        _, message = V2().decode(args.token, public_key, Purpose.PUBLIC)
    except PasetoError as e:
        if args.json:
            print(json.dumps({"valid": False, "error": str(e)}))
        else:
            print("❌ INVALID")
        return 1

    if args.json:
        footer = get_footer(args.token)
        print(
            json.dumps(
                {
                    "valid": True,
                    "message": message.decode("utf-8", errors="replace"),
                    "footer": footer.decode("utf-8", errors="replace"),
                },
                indent=2,
            )
        )
    else:
        print("✅ VALID")
        _print_bytes(message)
    return 0


def cmd_peek(args: argparse.Namespace) -> int:
    """Show the message of a public token without verifying it."""
    print("⚠️  Warning: signature not verified, do not trust these claims", file=sys.stderr)
    _print_bytes(V2().peek(args.token))
    return 0


COMMANDS = {
    "keygen": cmd_keygen,
    "encrypt": cmd_encrypt,
    "decrypt": cmd_decrypt,
    "sign": cmd_sign,
    "verify": cmd_verify,
    "peek": cmd_peek,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pasetocodec",
        description="PASETO v2 tokens: local (encrypted) and public (signed)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    p_keygen = subparsers.add_parser("keygen", help="Generate a key")
    p_keygen.add_argument("--purpose", choices=["local", "public"], default="local")
    p_keygen.add_argument("--env", action="store_true", help="Output as environment variables")

    p_encrypt = subparsers.add_parser("encrypt", help="Create a local token")
    p_encrypt.add_argument("message", help="The message to encrypt")
    p_encrypt.add_argument("--key", help="32-byte key (hex)")
    p_encrypt.add_argument("--footer", help="Optional footer (stored unencrypted)")

    p_decrypt = subparsers.add_parser("decrypt", help="Decrypt a local token")
    p_decrypt.add_argument("token", help="The token to decrypt")
    p_decrypt.add_argument("--key", help="32-byte key (hex)")

    p_sign = subparsers.add_parser("sign", help="Create a public token")
    p_sign.add_argument("message", help="The message to sign")
    p_sign.add_argument("--key", help="64-byte Ed25519 secret key (hex)")
    p_sign.add_argument("--footer", help="Optional footer")

    p_verify = subparsers.add_parser("verify", help="Verify a public token")
    p_verify.add_argument("token", help="The token to verify")
    p_verify.add_argument("--key", help="32-byte Ed25519 public key (hex)")
    p_verify.add_argument("--json", action="store_true", help="Output as JSON")

    p_peek = subparsers.add_parser("peek", help="Read a public token WITHOUT verifying it")
    p_peek.add_argument("token", help="The token to inspect")

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except (PasetoError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
