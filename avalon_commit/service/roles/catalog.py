from types import MappingProxyType
from typing import List, Mapping, Tuple

from avalon_commit.config import GAME_CONFIG
from avalon_commit.model.role import Role, Alignment
from .errors import UnsupportedParticipantCount

# ============================================================================
# Role Distribution
# ============================================================================

ROLE_DISTRIBUTION: Mapping[int, Tuple[Role, ...]] = MappingProxyType({
    5: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT,
        Role.MORGANA, Role.ASSASSIN),
    6: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.SERVANT,
        Role.MORGANA, Role.ASSASSIN),
    7: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.SERVANT,
        Role.MORGANA, Role.ASSASSIN, Role.MINION),
    8: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.SERVANT, Role.SERVANT,
        Role.MORGANA, Role.ASSASSIN, Role.MINION),
    9: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.SERVANT, Role.SERVANT, Role.SERVANT,
        Role.MORGANA, Role.ASSASSIN, Role.MINION),
    10: (Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.SERVANT, Role.SERVANT, Role.SERVANT,
         Role.MORGANA, Role.ASSASSIN, Role.MINION, Role.MINION),
})

_ALIGNMENTS: Mapping[Role, Alignment] = MappingProxyType({
    Role.UNKNOWN: Alignment.UNKNOWN,
    Role.MERLIN: Alignment.GOOD,
    Role.PERCIVAL: Alignment.GOOD,
    Role.SERVANT: Alignment.GOOD,
    Role.MORGANA: Alignment.EVIL,
    Role.ASSASSIN: Alignment.EVIL,
    Role.MINION: Alignment.EVIL,
})


def role_set_for(count: int) -> List[Role]:
    """
    Roles dealt at a table of the given size, in catalog order.

    Args:
        count: Number of participants

    Returns:
        New list of roles with exactly `count` entries

    Raises:
        UnsupportedParticipantCount: If no distribution exists for `count`
    """
    roles = ROLE_DISTRIBUTION.get(count)
    if roles is None:
        raise UnsupportedParticipantCount(
            count, GAME_CONFIG["min_players"], GAME_CONFIG["max_players"]
        )
    return list(roles)


def alignment_of(role: Role) -> Alignment:
    """
    Alignment of a role. Unknown (or unrecognised) roles map to Unknown.
    """
    try:
        return _ALIGNMENTS[Role(role)]
    except ValueError:
        return Alignment.UNKNOWN


def supported_counts() -> List[int]:
    return sorted(ROLE_DISTRIBUTION)


# ============================================================================
# Role Encoding/Decoding
# ============================================================================

def role_name(role: Role) -> str:
    """
    Display name of a role.

    Example: Role.MERLIN -> "Merlin"
    """
    return Role(role).name.capitalize()


def role_from_name(name: str) -> Role:
    """
    Parse a display name back to a role.

    Args:
        name: Role name, case-insensitive

    Returns:
        Matching role, or Role.UNKNOWN if the name is not recognised
    """
    try:
        return Role[name.strip().upper()]
    except KeyError:
        return Role.UNKNOWN


def alignment_name(alignment: Alignment) -> str:
    return Alignment(alignment).name.capitalize()
