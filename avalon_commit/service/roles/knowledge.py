from typing import List, Sequence

from avalon_commit.model.role import Role, Alignment
from avalon_commit.model.assignment import Assignment


def known_players_for(player: Assignment, all_players: Sequence[Assignment]) -> List[bytes]:
    """
    Identifiers a player is allowed to see at game start.

    - Merlin sees every evil player.
    - Percival sees Merlin and Morgana without knowing which is which.
    - Evil players see each other (never themselves).
    - Servants, and any role without a rule, see nobody.
    """
    if player.role == Role.MERLIN:
        return [p.participant_id for p in all_players if p.alignment == Alignment.EVIL]

    if player.role == Role.PERCIVAL:
        return [
            p.participant_id for p in all_players
            if p.role in (Role.MERLIN, Role.MORGANA)
        ]

    if player.alignment == Alignment.EVIL:
        return [
            p.participant_id for p in all_players
            if p.alignment == Alignment.EVIL and p.index != player.index
        ]

    return []


def derive_known_sets(assignments: Sequence[Assignment]) -> List[Assignment]:
    """
    Fill in every assignment's known set.

    Needs the complete table, so it runs once all roles are dealt.

    Returns:
        New assignments in the same order
    """
    return [
        assignment.with_known_players(known_players_for(assignment, assignments))
        for assignment in assignments
    ]
