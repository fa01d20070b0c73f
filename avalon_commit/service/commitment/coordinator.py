"""
Role Commitment Coordinator - Facade over dealing, knowledge and the Merkle tree
"""
from typing import List, Optional, Sequence, Tuple

from avalon_commit.model.assignment import Assignment
from avalon_commit.service.roles import assign, derive_known_sets, validate_seed
from .merkle import MerkleProof, MerkleTree, leaf_hash


class RoleCommitment:
    """
    Commit-reveal state for one game.

    Facade pattern - delegates to the role service and the Merkle tree.
    Owned by the orchestrator; the root is the only value meant to be
    published, each proof goes to its own player only.
    """

    def __init__(self, seed: bytes):
        # Validated by assign_roles() or commit(), after the table size
        self.seed = bytes(seed)
        self.assignments: List[Assignment] = []
        self.leaves: List[bytes] = []
        self.tree: Optional[MerkleTree] = None

    def assign_roles(self, participant_ids: Sequence[bytes]) -> List[Assignment]:
        """Deal roles and derive what every role can see"""
        self.assignments = derive_known_sets(assign(participant_ids, self.seed))
        self.tree = None
        return list(self.assignments)

    def commit(self, assignments: Optional[Sequence[Assignment]] = None) -> Tuple[bytes, List[MerkleProof]]:
        """
        Hash every assignment into a leaf and build the tree.

        Args:
            assignments: Assignments to commit, defaults to the ones dealt by
                assign_roles()

        Returns:
            (root, proofs) with proofs in assignment order
        """
        self.seed = validate_seed(self.seed)
        if assignments is not None:
            self.assignments = list(assignments)

        self.leaves = [
            leaf_hash(a.participant_id, a.role, a.alignment, self.seed)
            for a in self.assignments
        ]
        self.tree = MerkleTree(self.leaves)
        return self.tree.root, self.tree.proofs

    @property
    def root(self) -> bytes:
        if self.tree is None:
            raise RuntimeError("Roles not committed. Call commit first.")
        return self.tree.root

    def proof_for(self, index: int) -> MerkleProof:
        """
        Proof for the player at a positional index.

        Raises:
            RuntimeError: If commit() has not run
            IndexError: If index is outside the assignment list
        """
        if self.tree is None:
            raise RuntimeError("Roles not committed. Call commit first.")
        return self.tree.proof_for(index)

    def leaf_for(self, index: int) -> bytes:
        if self.tree is None:
            raise RuntimeError("Roles not committed. Call commit first.")
        return self.leaves[index]


# ============================================================================
# Functional interface
# ============================================================================

def assign_roles(participant_ids: Sequence[bytes], seed: bytes) -> List[Assignment]:
    """Deal roles for a table and fill in known sets"""
    return RoleCommitment(seed).assign_roles(participant_ids)


def commit(assignments: Sequence[Assignment], seed: bytes) -> Tuple[bytes, List[MerkleProof]]:
    """Root and per-player proofs for a set of assignments"""
    return RoleCommitment(seed).commit(assignments)


def proof_for(assignments: Sequence[Assignment], seed: bytes, index: int) -> MerkleProof:
    """
    Proof that commit() produces for the player at `index`.

    Raises:
        IndexError: If index is outside the assignment list
    """
    if index < 0 or index >= len(assignments):
        raise IndexError(f"Player index {index} out of range for {len(assignments)} players")
    _, proofs = commit(assignments, seed)
    return proofs[index]
