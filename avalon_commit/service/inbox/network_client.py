import asyncio
from typing import Any, Dict, List, Optional, Sequence

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from avalon_commit.config import NETWORK_CONFIG
from avalon_commit.model.role import Role, Alignment
from avalon_commit.service.commitment import (
    decode_identifier,
    encode_identifier,
    hash_from_byte_list,
    hash_to_byte_list,
    leaf_hash,
    proof_from_byte_list,
    verify
)
from .auth import now_ms, sign_challenge


def pubkey_of(private_key: Ed25519PrivateKey) -> str:
    """Base-58 pubkey of an Ed25519 signing key"""
    raw = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )
    return encode_identifier(raw)


class RoleReveal:
    """A player's own role as delivered by the role inbox"""

    def __init__(
        self,
        game_id: str,
        player: str,
        role: Role,
        alignment: Alignment,
        known_players: List[str],
        merkle_proof: List[bytes]
    ):
        self.game_id = game_id
        self.player = player
        self.role = Role(role)
        self.alignment = Alignment(alignment)
        self.known_players = list(known_players)
        self.merkle_proof = list(merkle_proof)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "RoleReveal":
        return cls(
            game_id=data["gameId"],
            player=data["player"],
            role=data["role"],
            alignment=data["alignment"],
            known_players=data.get("knownPlayers", []),
            merkle_proof=proof_from_byte_list(data.get("merkleProof", []))
        )

    def leaf(self, seed: bytes) -> bytes:
        return leaf_hash(decode_identifier(self.player), self.role, self.alignment, seed)

    def verify_against(self, root: bytes, seed: bytes) -> bool:
        """
        Check the delivered role against the published commitment.

        Args:
            root: Merkle root published for the game
            seed: Game seed (public once the game has started)
        """
        return verify(self.leaf(seed), self.merkle_proof, root)


class RoleInboxClient:
    """Talks to the role delivery server on behalf of an orchestrator or a player"""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else NETWORK_CONFIG["connection_timeout"]
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport
        )

    async def assign_roles(
        self,
        game_id: str,
        player_pubkeys: Sequence[str],
        seed: bytes,
        game_pda: Optional[str] = None
    ) -> bytes:
        """
        Ask the server to deal and commit roles for a game.

        Returns:
            The 32-byte Merkle root to publish
        """
        payload: Dict[str, Any] = {
            "playerPubkeys": list(player_pubkeys),
            "vrfSeed": hash_to_byte_list(seed),
        }
        if game_pda is not None:
            payload["gamePDA"] = game_pda

        async with self._client() as client:
            response = await client.post(f"/assign-roles/{game_id}", json=payload)
            response.raise_for_status()
            data = response.json()

        print(f"[Inbox] ✓ Game {game_id}: {data['playerCount']} roles committed")
        return hash_from_byte_list(data["merkleRoot"])

    async def get_game(self, game_id: str) -> Dict[str, Any]:
        """Public state of a game (players and hex root, no roles)"""
        async with self._client() as client:
            response = await client.get(f"/game/{game_id}")
            response.raise_for_status()
            return response.json()

    async def fetch_role(
        self,
        game_id: str,
        private_key: Ed25519PrivateKey,
        timestamp: Optional[int] = None
    ) -> RoleReveal:
        """
        Fetch this player's role and Merkle proof from the role inbox.

        Args:
            game_id: Game to open the inbox for
            private_key: Player's Ed25519 signing key
            timestamp: Request time in ms, defaults to now
        """
        if timestamp is None:
            timestamp = now_ms()
        signature = sign_challenge(private_key, game_id, timestamp)

        async with self._client() as client:
            response = await client.post(
                f"/role-inbox/{game_id}",
                json={
                    "playerPubkey": pubkey_of(private_key),
                    "timestamp": timestamp,
                    "signature": list(signature),
                }
            )
            response.raise_for_status()
            return RoleReveal.from_response(response.json())

    async def fetch_roles(self, game_id: str, private_keys: Sequence[Ed25519PrivateKey]) -> List[RoleReveal]:
        """Fetch several players' roles concurrently (local simulations)"""
        tasks = [self.fetch_role(game_id, key) for key in private_keys]
        return list(await asyncio.gather(*tasks))


async def check_server_health(address: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> bool:
    """
    Check if a role delivery server is healthy and responding.

    Args:
        address: Server URL

    Returns:
        True if healthy, False otherwise
    """
    try:
        async with httpx.AsyncClient(timeout=5, transport=transport) as client:
            response = await client.get(f"{address.rstrip('/')}/health")
            response.raise_for_status()
            return True
    except httpx.HTTPError:
        return False
