"""
Role Inbox Authentication - signed, time-bound role requests

A player proves ownership of their pubkey by signing a challenge that binds
the game id and the request timestamp with the matching Ed25519 key.
"""
import time
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey
)

from avalon_commit.config import NETWORK_CONFIG

SIGNATURE_SIZE = 64


def now_ms() -> int:
    return int(time.time() * 1000)


def build_challenge(game_id: str, timestamp: int) -> bytes:
    """Message a player signs to open their role inbox"""
    return f"Reveal role for game {game_id} at {timestamp}".encode("utf-8")


def is_fresh(timestamp: int, now: Optional[int] = None, window_ms: Optional[int] = None) -> bool:
    """True if the timestamp lies within the freshness window around now"""
    if now is None:
        now = now_ms()
    if window_ms is None:
        window_ms = NETWORK_CONFIG["request_freshness_ms"]
    return abs(now - timestamp) <= window_ms


def verify_signature(pubkey: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Args:
        pubkey: Raw 32-byte public key
        message: Signed bytes
        signature: Detached 64-byte signature

    Returns:
        True if signature is valid, False otherwise
    """
    if len(signature) != SIGNATURE_SIZE:
        return False

    try:
        public_key = Ed25519PublicKey.from_public_bytes(bytes(pubkey))
    except ValueError:
        return False

    try:
        public_key.verify(bytes(signature), message)
        return True
    except InvalidSignature:
        return False


def sign_challenge(private_key: Ed25519PrivateKey, game_id: str, timestamp: int) -> bytes:
    return private_key.sign(build_challenge(game_id, timestamp))
