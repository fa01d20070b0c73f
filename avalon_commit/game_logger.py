"""
Game Logger - Records role commitments and inbox deliveries to file
Server-side audit trail; the published root is the only value that leaves the server
"""
import os
from datetime import datetime
from typing import List, Optional

from avalon_commit.config import LOG_CONFIG
from avalon_commit.model import Assignment
from avalon_commit.service.roles import role_name, alignment_name


class GameLogger:
    """Logs commitment events for one game to file"""

    def __init__(self, game_id: str, log_dir: Optional[str] = None):
        self.game_id = game_id
        self.log_dir = log_dir or LOG_CONFIG["log_dir"]
        self.log_file = os.path.join(self.log_dir, f"game_{game_id}.log")

        os.makedirs(self.log_dir, exist_ok=True)

        with open(self.log_file, 'w', encoding='utf-8') as f:
            f.write(f"=== Avalon Role Commitment Log ===\n")
            f.write(f"Game ID: {game_id}\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write("=" * 50 + "\n\n")

    def log(self, message: str):
        """Write a log message with timestamp"""
        timestamp = datetime.now().strftime('%H:%M:%S')
        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write(f"[{timestamp}] {message}\n")

    def log_section(self, title: str):
        """Write a section header"""
        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write("\n" + "=" * 50 + "\n")
            f.write(f"{title}\n")
            f.write("=" * 50 + "\n")

    def log_commitment(self, assignments: List[Assignment], root_hex: str, identifiers: List[str]):
        """Log the assigned roles and the root that was published"""
        self.log_section(f"Roles Committed ({len(assignments)} players)")
        self.log(f"Merkle Root: {root_hex}")

        for assignment, pubkey in zip(assignments, identifiers):
            self.log(
                f"  Player {assignment.index} ({pubkey}): "
                f"{role_name(assignment.role)} ({alignment_name(assignment.alignment)}), "
                f"sees {len(assignment.known_players)}"
            )

    def log_delivery(self, player_index: int, pubkey: str):
        """Log a role inbox delivery (role itself is not repeated)"""
        self.log(f"  → Player {player_index} ({pubkey}) fetched role and proof")

    def log_rejection(self, pubkey: str, reason: str):
        """Log a refused role inbox request"""
        self.log(f"  ✗ Inbox request from {pubkey} refused: {reason}")
