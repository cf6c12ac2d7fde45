"""
Pre-Authentication Encoding (PAE).

PAE turns an ordered list of byte strings into a single buffer that encodes the
element count and every element's length, so that no two different lists share
an encoding. The result is what gets authenticated (AEAD associated data) or
signed.

    PAE([])       == LE64(0)
    PAE([b""])    == LE64(1) || LE64(0)
    PAE([b"test"])== LE64(1) || LE64(4) || b"test"
"""

import struct
from typing import Iterable, Union

from pasetocodec.encoding import to_bytes

# LE64 clears the top bit so the value stays a valid signed 64-bit integer.
_LE64_MASK = 0x7FFFFFFFFFFFFFFF


def le64(n: int) -> bytes:
    """Encode an unsigned length as 8 little-endian bytes."""
    if n < 0:
        raise ValueError("LE64 requires a non-negative integer")
    return struct.pack("<Q", n & _LE64_MASK)


def pre_auth_encode(pieces: Iterable[Union[str, bytes]]) -> bytes:
    """Length-prefix and concatenate ``pieces`` (str pieces are UTF-8 encoded)."""
    items = [to_bytes(piece) for piece in pieces]
    out = bytearray(le64(len(items)))
    for item in items:
        out += le64(len(item))
        out += item
    return bytes(out)
