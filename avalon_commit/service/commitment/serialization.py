from typing import Any, List, Sequence

from avalon_commit.config import CRYPTO_CONFIG

# ============================================================================
# Serialization (hashes and proofs on the wire)
# ============================================================================

def hash_to_hex(value: bytes) -> str:
    return bytes(value).hex()


def hash_from_hex(value: str) -> bytes:
    """
    Parse a hex-encoded hash. Raises ValueError on malformed input.
    """
    return bytes.fromhex(value)


def hash_to_byte_list(value: bytes) -> List[int]:
    """
    Serialize a hash as a list of byte values.

    Example: b"\\x00\\xff" -> [0, 255]
    """
    return list(bytes(value))


def hash_from_byte_list(values: Sequence[int]) -> bytes:
    """
    Deserialize a list of byte values. Raises ValueError if any entry is
    outside 0-255.
    """
    return bytes(values)


def proof_to_hex(proof: Sequence[bytes]) -> List[str]:
    return [hash_to_hex(node) for node in proof]


def proof_from_hex(proof: Sequence[str]) -> List[bytes]:
    return [hash_from_hex(node) for node in proof]


def proof_to_byte_list(proof: Sequence[bytes]) -> List[List[int]]:
    return [hash_to_byte_list(node) for node in proof]


def proof_from_byte_list(proof: Sequence[Sequence[int]]) -> List[bytes]:
    return [hash_from_byte_list(node) for node in proof]


def seed_from_request(value: Any) -> bytes:
    """
    Read a seed sent either as a list of byte values or as a hex string.

    Width is not checked here; the role assigner rejects bad lengths.

    Raises:
        ValueError: If the value is neither form
    """
    if isinstance(value, str):
        return hash_from_hex(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(v, int) for v in value):
            raise ValueError("vrfSeed must contain integers")
        return hash_from_byte_list(value)
    raise ValueError(
        f"vrfSeed must be a {CRYPTO_CONFIG['seed_length']}-byte array or hex string"
    )
