"""
Commitment Service - Merkle commitment over dealt roles

Structure:
- coordinator.py: RoleCommitment (Facade) and assign_roles/commit/proof_for
- merkle.py: leaf hashing, tree construction, proofs and verification
- identifiers.py: base-58 pubkey decoding
- serialization.py: hashes and proofs on the wire
"""

from .coordinator import RoleCommitment, assign_roles, commit, proof_for
from .merkle import (
    HASH_SIZE,
    ZERO_HASH,
    MerkleTree,
    leaf_hash,
    pair_hash,
    build_tree,
    compute_root,
    verify
)
from .identifiers import (
    InvalidIdentifier,
    decode_identifier,
    decode_identifiers,
    encode_identifier
)
from .serialization import (
    hash_to_hex,
    hash_from_hex,
    hash_to_byte_list,
    hash_from_byte_list,
    proof_to_hex,
    proof_from_hex,
    proof_to_byte_list,
    proof_from_byte_list,
    seed_from_request
)

__all__ = [
    'RoleCommitment',
    'assign_roles',
    'commit',
    'proof_for',
    'HASH_SIZE',
    'ZERO_HASH',
    'MerkleTree',
    'leaf_hash',
    'pair_hash',
    'build_tree',
    'compute_root',
    'verify',
    'InvalidIdentifier',
    'decode_identifier',
    'decode_identifiers',
    'encode_identifier',
    'hash_to_hex',
    'hash_from_hex',
    'hash_to_byte_list',
    'hash_from_byte_list',
    'proof_to_hex',
    'proof_from_hex',
    'proof_to_byte_list',
    'proof_from_byte_list',
    'seed_from_request',
]
