"""
Role Commitment Tree - Merkle tree over role leaves

Bit-exact rules shared with the on-chain verifier:
- leaf   = H(player_id || role_byte || alignment_byte || seed)
- parent = H(min(a, b) || max(a, b)), unsigned byte-wise order
- leaves are padded with all-zero hashes up to the next power of two
- zero leaves give the all-zero root, one leaf is its own root
"""
import hashlib
from typing import List, Sequence, Tuple

from avalon_commit.config import CRYPTO_CONFIG
from avalon_commit.model.role import Role, Alignment

HASH_SIZE = hashlib.new(CRYPTO_CONFIG["hash"]).digest_size
ZERO_HASH = bytes(HASH_SIZE)

MerkleProof = List[bytes]


def _digest(data: bytes) -> bytes:
    return hashlib.new(CRYPTO_CONFIG["hash"], data).digest()


# ============================================================================
# Hashing
# ============================================================================

def leaf_hash(participant_id: bytes, role: Role, alignment: Alignment, seed: bytes) -> bytes:
    """
    Hash one role assignment into a leaf.

    Args:
        participant_id: Raw identifier bytes (decoded pubkey)
        role: Role tag, hashed as one byte
        alignment: Alignment tag, hashed as one byte
        seed: Game seed

    Returns:
        32-byte leaf
    """
    return _digest(
        bytes(participant_id) + bytes([int(role)]) + bytes([int(alignment)]) + bytes(seed)
    )


def pair_hash(a: bytes, b: bytes) -> bytes:
    """Parent of two nodes; the smaller node is hashed first"""
    first, second = (a, b) if a <= b else (b, a)
    return _digest(first + second)


# ============================================================================
# Tree
# ============================================================================

def _pad_to_power_of_two(leaves: Sequence[bytes]) -> List[bytes]:
    padded = list(leaves)
    while len(padded) & (len(padded) - 1):
        padded.append(ZERO_HASH)
    return padded


class MerkleTree:
    """
    Perfect binary tree built from an ordered leaf list.

    layers[0] is the padded leaf layer, layers[-1] holds only the root.
    """

    def __init__(self, leaves: Sequence[bytes]):
        self.leaves: List[bytes] = [bytes(leaf) for leaf in leaves]
        self.layers: List[List[bytes]] = []

        if len(self.leaves) > 1:
            layer = _pad_to_power_of_two(self.leaves)
            self.layers.append(layer)
            while len(layer) > 1:
                layer = [pair_hash(layer[i], layer[i + 1]) for i in range(0, len(layer), 2)]
                self.layers.append(layer)
        elif self.leaves:
            self.layers.append(list(self.leaves))

    @property
    def root(self) -> bytes:
        if not self.layers:
            return ZERO_HASH
        return self.layers[-1][0]

    @property
    def depth(self) -> int:
        """Number of hashing layers above the leaves"""
        return max(len(self.layers) - 1, 0)

    def proof_for(self, index: int) -> MerkleProof:
        """
        Sibling path from an original (non-padding) leaf up to the root.

        Raises:
            IndexError: If index does not name an original leaf
        """
        if index < 0 or index >= len(self.leaves):
            raise IndexError(f"Leaf index {index} out of range for {len(self.leaves)} leaves")

        proof: MerkleProof = []
        position = index
        for layer in self.layers[:-1]:
            proof.append(layer[position ^ 1])
            position //= 2
        return proof

    @property
    def proofs(self) -> List[MerkleProof]:
        return [self.proof_for(i) for i in range(len(self.leaves))]


def build_tree(leaves: Sequence[bytes]) -> Tuple[bytes, List[MerkleProof]]:
    """
    Compute the root and one proof per input leaf, in input order.

    Args:
        leaves: Ordered leaf hashes

    Returns:
        (root, proofs). No leaves gives (ZERO_HASH, []); a single leaf gives
        (leaf, [[]]).
    """
    tree = MerkleTree(leaves)
    return tree.root, tree.proofs


# ============================================================================
# Verification
# ============================================================================

def compute_root(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """Fold a proof into a leaf with the canonical pairing rule"""
    current = bytes(leaf)
    for sibling in proof:
        current = pair_hash(current, bytes(sibling))
    return current


def verify(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """
    Check that a leaf belongs to the tree with the given root.

    Returns False on any mismatch, including hashes of the wrong width.
    """
    if len(leaf) != HASH_SIZE or len(root) != HASH_SIZE:
        return False
    if any(len(sibling) != HASH_SIZE for sibling in proof):
        return False
    return compute_root(leaf, proof) == bytes(root)
