import hashlib
from typing import List, Sequence, TypeVar

from avalon_commit.config import CRYPTO_CONFIG
from avalon_commit.model.assignment import Assignment
from .catalog import role_set_for, alignment_of
from .errors import InvalidSeedLength

T = TypeVar("T")


def _digest(data: bytes) -> bytes:
    return hashlib.new(CRYPTO_CONFIG["hash"], data).digest()


def seeded_shuffle(items: Sequence[T], seed: bytes) -> List[T]:
    """
    Deterministic Fisher-Yates shuffle driven by a hash chain.

    Step i (from the last index down to 1) hashes the current state with the
    single byte i, reduces the first 4 bytes of the digest (big-endian) modulo
    i + 1 to pick the swap partner, and carries the digest forward as the next
    state. The initial state is the seed.

    This is not a uniform permutation in the cryptographic sense. It only has
    to be reproducible by anyone holding the same seed, so a library PRNG
    must not be substituted here.

    Args:
        items: Values to shuffle (left untouched)
        seed: Initial chain state

    Returns:
        New list with the shuffled values
    """
    result = list(items)
    state = bytes(seed)

    for i in range(len(result) - 1, 0, -1):
        digest = _digest(state + bytes([i]))
        j = int.from_bytes(digest[:4], "big") % (i + 1)
        result[i], result[j] = result[j], result[i]
        state = digest

    return result


def validate_seed(seed: bytes) -> bytes:
    expected = CRYPTO_CONFIG["seed_length"]
    if len(seed) != expected:
        raise InvalidSeedLength(len(seed), expected)
    return bytes(seed)


def assign(participant_ids: Sequence[bytes], seed: bytes) -> List[Assignment]:
    """
    Deal shuffled roles to participants in input order.

    Args:
        participant_ids: Fixed-width participant identifiers; position in this
            list is the participant's index
        seed: 32-byte seed from the randomness beacon

    Returns:
        One Assignment per participant, known sets left empty

    Raises:
        UnsupportedParticipantCount: If the table size has no distribution
        InvalidSeedLength: If the seed is not exactly 32 bytes
    """
    roles = role_set_for(len(participant_ids))
    seed = validate_seed(seed)

    shuffled = seeded_shuffle(roles, seed)

    return [
        Assignment(participant_id, index, role, alignment_of(role))
        for index, (participant_id, role) in enumerate(zip(participant_ids, shuffled))
    ]
