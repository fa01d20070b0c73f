"""
Assignment Model

One participant's private role assignment for a single game.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from .role import Role, Alignment


class Assignment:
    """
    Represents the role handed to one participant.

    Created once per game by the role assigner and never mutated afterwards:
    attributes are read-only and the known set is filled in by building a
    new instance via with_known_players().
    """
    __slots__ = ("_participant_id", "_index", "_role", "_alignment", "_known_players")

    def __init__(
        self,
        participant_id: bytes,
        index: int,
        role: Role,
        alignment: Alignment,
        known_players: Optional[Iterable[bytes]] = None
    ):
        self._participant_id = bytes(participant_id)
        self._index = index
        self._role = Role(role)
        self._alignment = Alignment(alignment)
        self._known_players: Tuple[bytes, ...] = tuple(known_players or ())

    @property
    def participant_id(self) -> bytes:
        return self._participant_id

    @property
    def index(self) -> int:
        return self._index

    @property
    def role(self) -> Role:
        return self._role

    @property
    def alignment(self) -> Alignment:
        return self._alignment

    @property
    def known_players(self) -> Tuple[bytes, ...]:
        return self._known_players

    def with_known_players(self, known_players: Iterable[bytes]) -> "Assignment":
        """Return a copy of this assignment carrying the given known set"""
        return Assignment(
            self._participant_id,
            self._index,
            self._role,
            self._alignment,
            known_players
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_id": self._participant_id.hex(),
            "index": self._index,
            "role": int(self._role),
            "alignment": int(self._alignment),
            "known_players": [p.hex() for p in self._known_players],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return (
            self._participant_id == other._participant_id
            and self._index == other._index
            and self._role == other._role
            and self._alignment == other._alignment
            and self._known_players == other._known_players
        )

    def __hash__(self) -> int:
        return hash((self._participant_id, self._index, self._role, self._alignment, self._known_players))

    def __repr__(self) -> str:
        return (
            f"Assignment(index={self._index}, role={self._role.name}, "
            f"alignment={self._alignment.name}, known={len(self._known_players)})"
        )
