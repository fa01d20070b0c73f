"""
Role Service - Deterministic role dealing for one game

Structure:
- catalog.py: role distribution per table size, alignment lookup
- permutation.py: seed-driven shuffle and dealing
- knowledge.py: who each role may see
- errors.py: input validation errors
"""

from .errors import (
    RoleAssignmentError,
    UnsupportedParticipantCount,
    InvalidSeedLength
)
from .catalog import (
    ROLE_DISTRIBUTION,
    role_set_for,
    alignment_of,
    supported_counts,
    role_name,
    role_from_name,
    alignment_name
)
from .permutation import seeded_shuffle, validate_seed, assign
from .knowledge import known_players_for, derive_known_sets

__all__ = [
    'RoleAssignmentError',
    'UnsupportedParticipantCount',
    'InvalidSeedLength',
    'ROLE_DISTRIBUTION',
    'role_set_for',
    'alignment_of',
    'supported_counts',
    'role_name',
    'role_from_name',
    'alignment_name',
    'seeded_shuffle',
    'validate_seed',
    'assign',
    'known_players_for',
    'derive_known_sets',
]
