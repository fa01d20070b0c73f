"""
Participant identifiers - base-58 public keys <-> fixed-width bytes
"""
from typing import List, Sequence

import base58

from avalon_commit.config import CRYPTO_CONFIG


class InvalidIdentifier(ValueError):
    pass


def decode_identifier(pubkey: str) -> bytes:
    """
    Decode a base-58 public key to fixed-width identifier bytes.

    Shorter results are left-padded with zero bytes so every identifier
    hashes at the same width.

    Args:
        pubkey: Base-58 encoded public key

    Returns:
        Identifier bytes (32 by default)

    Raises:
        InvalidIdentifier: If the text is not base-58 or decodes too long
    """
    width = CRYPTO_CONFIG["identifier_length"]

    if not isinstance(pubkey, str) or not pubkey:
        raise InvalidIdentifier(f"Invalid pubkey: {pubkey!r}")

    try:
        raw = base58.b58decode(pubkey)
    except ValueError as e:
        raise InvalidIdentifier(f"Invalid base58 pubkey {pubkey!r}: {e}") from e

    if len(raw) > width:
        raise InvalidIdentifier(
            f"Pubkey {pubkey!r} decodes to {len(raw)} bytes, expected at most {width}"
        )
    return raw.rjust(width, b"\x00")


def decode_identifiers(pubkeys: Sequence[str]) -> List[bytes]:
    return [decode_identifier(pubkey) for pubkey in pubkeys]


def encode_identifier(identifier: bytes) -> str:
    return base58.b58encode(bytes(identifier)).decode("ascii")
