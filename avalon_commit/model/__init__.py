"""
Role Commitment Models Package

Provides the data model shared by the role assigner, the commitment tree
and the role delivery server.
"""

from .role import Role, Alignment
from .assignment import Assignment
from .game import GameRecord, GameStore

__all__ = ["Role", "Alignment", "Assignment", "GameRecord", "GameStore"]
