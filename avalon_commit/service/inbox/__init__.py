"""
Role Inbox Service - Authenticated delivery of private roles

Structure:
- auth.py: signed, time-bound challenges (Ed25519)
- network_client.py: RoleInboxClient and RoleReveal
"""

from .auth import (
    SIGNATURE_SIZE,
    now_ms,
    build_challenge,
    is_fresh,
    verify_signature,
    sign_challenge
)
from .network_client import RoleInboxClient, RoleReveal, pubkey_of, check_server_health

__all__ = [
    'SIGNATURE_SIZE',
    'now_ms',
    'build_challenge',
    'is_fresh',
    'verify_signature',
    'sign_challenge',
    'RoleInboxClient',
    'RoleReveal',
    'pubkey_of',
    'check_server_health',
]
