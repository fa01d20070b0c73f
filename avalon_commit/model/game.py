"""
Game Record Model

In-memory record of one committed game as held by the role delivery server.
"""
import time
from typing import Dict, List, Optional

from .assignment import Assignment


class GameRecord:
    """
    Everything the server needs to answer inbox requests for one game.

    SERVER-SIDE ONLY: assignments and proofs never leave the server
    except one player's own entry through the authenticated role inbox.
    """
    def __init__(
        self,
        game_id: str,
        player_pubkeys: List[str],
        assignments: List[Assignment],
        seed: bytes,
        merkle_root: bytes,
        proofs: List[List[bytes]],
        game_pda: Optional[str] = None,
        created_at: Optional[int] = None
    ):
        self.game_id = game_id
        self.player_pubkeys = list(player_pubkeys)
        self.assignments = list(assignments)
        self.seed = bytes(seed)
        self.merkle_root = bytes(merkle_root)
        self.proofs = [list(p) for p in proofs]
        self.game_pda = game_pda
        self.created_at = created_at if created_at is not None else int(time.time() * 1000)

    @property
    def player_count(self) -> int:
        return len(self.assignments)

    def find_player(self, pubkey: str) -> Optional[int]:
        """Positional index of a base-58 pubkey in this game, or None"""
        try:
            return self.player_pubkeys.index(pubkey)
        except ValueError:
            return None

    def proof_for(self, index: int) -> List[bytes]:
        if index < 0 or index >= len(self.proofs):
            raise IndexError(f"Player index {index} out of range for {len(self.proofs)} players")
        return list(self.proofs[index])


class GameStore:
    """Games keyed by game id, also reachable by their on-chain address"""
    def __init__(self):
        self.games: Dict[str, GameRecord] = {}

    def put(self, record: GameRecord):
        self.games[record.game_id] = record

    def get(self, game_id_or_pda: str) -> Optional[GameRecord]:
        """Look up by game id first, then by game PDA"""
        record = self.games.get(game_id_or_pda)
        if record is not None:
            return record
        for candidate in self.games.values():
            if candidate.game_pda is not None and candidate.game_pda == game_id_or_pda:
                return candidate
        return None

    def all(self) -> List[GameRecord]:
        return list(self.games.values())

    def clear(self):
        self.games.clear()

    def __len__(self) -> int:
        return len(self.games)
