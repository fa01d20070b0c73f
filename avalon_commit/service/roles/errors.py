class RoleAssignmentError(ValueError):
    """Base class for rejected role assignment inputs"""


class UnsupportedParticipantCount(RoleAssignmentError):
    def __init__(self, count: int, min_players: int, max_players: int):
        self.count = count
        super().__init__(
            f"Invalid player count: {count}. Must be {min_players}-{max_players}."
        )


class InvalidSeedLength(RoleAssignmentError):
    def __init__(self, length: int, expected: int):
        self.length = length
        super().__init__(f"Seed must be {expected} bytes, got {length}")
