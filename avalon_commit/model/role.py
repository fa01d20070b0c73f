"""
Role and Alignment tags

Integer values are part of the commitment: they are the role byte and the
alignment byte hashed into every leaf, and must match the on-chain enums.
"""
from enum import IntEnum


class Role(IntEnum):
    UNKNOWN = 0
    MERLIN = 1
    PERCIVAL = 2
    SERVANT = 3
    MORGANA = 4
    ASSASSIN = 5
    MINION = 6


class Alignment(IntEnum):
    UNKNOWN = 0
    GOOD = 1
    EVIL = 2
