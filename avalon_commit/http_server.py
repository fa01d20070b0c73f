"""
HTTP Server - Role assignment and private role inbox
"""
import hmac
import time
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, Header, HTTPException

from avalon_commit.config import LOG_CONFIG, NETWORK_CONFIG
from avalon_commit.game_logger import GameLogger
from avalon_commit.model import GameRecord, GameStore
from avalon_commit.service.commitment import (
    RoleCommitment,
    decode_identifier,
    decode_identifiers,
    hash_to_byte_list,
    hash_to_hex,
    proof_to_byte_list,
    seed_from_request
)
from avalon_commit.service.inbox import build_challenge, is_fresh, verify_signature
from avalon_commit.service.roles import role_name, alignment_name

app = FastAPI(title="Avalon Role Commitment Server")


# Global state - set by initialize_server
class ServerState:
    def __init__(self):
        self.store = GameStore()
        self.loggers: Dict[str, GameLogger] = {}
        self.spectator_token: str = NETWORK_CONFIG["spectator_token"]
        self.freshness_ms: int = NETWORK_CONFIG["request_freshness_ms"]
        self.log_dir: Optional[str] = LOG_CONFIG["log_dir"] if LOG_CONFIG["enabled"] else None
        self.started_at = time.time()

state = ServerState()


def initialize_server(
    spectator_token: Optional[str] = None,
    freshness_ms: Optional[int] = None,
    log_dir: Optional[str] = None,
    game_logging: bool = True
):
    """Reset server state (fresh store, optional overrides)"""
    state.store = GameStore()
    state.loggers = {}
    state.started_at = time.time()
    if spectator_token is not None:
        state.spectator_token = spectator_token
    if freshness_ms is not None:
        state.freshness_ms = freshness_ms
    if not game_logging:
        state.log_dir = None
    else:
        state.log_dir = log_dir or LOG_CONFIG["log_dir"]


def _logger_for(game_id: str) -> Optional[GameLogger]:
    return state.loggers.get(game_id)


def _require_game(game_id: str) -> GameRecord:
    game = state.store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


# ============================================================================
# Public endpoints
# ============================================================================

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "uptime": time.time() - state.started_at,
        "games": len(state.store),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/games")
async def list_games():
    return {
        "games": [
            {
                "gameId": g.game_id,
                "playerCount": g.player_count,
                "createdAt": g.created_at,
                "gamePDA": g.game_pda,
            }
            for g in state.store.all()
        ]
    }


@app.get("/game/{game_id_or_pda}")
async def get_game(game_id_or_pda: str):
    """Public state only - never roles"""
    game = _require_game(game_id_or_pda)
    return {
        "gameId": game.game_id,
        "playerCount": game.player_count,
        "players": [
            {"pubkey": pubkey, "index": index}
            for index, pubkey in enumerate(game.player_pubkeys)
        ],
        "merkleRoot": hash_to_hex(game.merkle_root),
        "createdAt": game.created_at,
        "gamePDA": game.game_pda,
    }


# ============================================================================
# Role assignment (orchestrator)
# ============================================================================

@app.post("/assign-roles/{game_id}")
async def assign_roles(game_id: str, request: dict):
    """
    Deal roles, commit them and keep them server-side.
    Only the root goes back; roles are delivered through the inbox.
    """
    player_pubkeys = request.get("playerPubkeys")
    if not player_pubkeys or not isinstance(player_pubkeys, list):
        raise HTTPException(status_code=400, detail="playerPubkeys array required")

    try:
        seed = seed_from_request(request.get("vrfSeed"))
        participant_ids = decode_identifiers(player_pubkeys)
        if len(set(participant_ids)) != len(participant_ids):
            raise ValueError("playerPubkeys must not contain duplicates")
        commitment = RoleCommitment(seed)
        assignments = commitment.assign_roles(participant_ids)
        root, proofs = commitment.commit()
    except ValueError as e:
        print(f"[ROLES] ✗ Rejected game {game_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    game = GameRecord(
        game_id=game_id,
        player_pubkeys=player_pubkeys,
        assignments=assignments,
        seed=seed,
        merkle_root=root,
        proofs=proofs,
        game_pda=request.get("gamePDA")
    )
    state.store.put(game)

    print(f"[ROLES] Game {game_id}: Assigned {len(assignments)} roles")
    for a in assignments:
        print(f"  Player {a.index}: {role_name(a.role)} ({alignment_name(a.alignment)})")

    if state.log_dir is not None:
        logger = GameLogger(game_id, state.log_dir)
        logger.log_commitment(assignments, hash_to_hex(root), player_pubkeys)
        state.loggers[game_id] = logger

    return {
        "gameId": game_id,
        "merkleRoot": hash_to_byte_list(root),
        "playerCount": len(assignments),
    }


# ============================================================================
# Role inbox (authenticated per player)
# ============================================================================

def _reject(game_id: str, pubkey: str, status_code: int, reason: str):
    logger = _logger_for(game_id)
    if logger is not None:
        logger.log_rejection(pubkey, reason)
    print(f"[INBOX] ✗ {pubkey[:8]}... refused for game {game_id}: {reason}")
    raise HTTPException(status_code=status_code, detail=reason)


@app.post("/role-inbox/{game_id}")
async def role_inbox(game_id: str, request: dict):
    """
    Deliver one player's own role, known players and Merkle proof.

    The request must carry a timestamp inside the freshness window and an
    Ed25519 signature over the challenge for (game_id, timestamp).
    """
    player_pubkey = request.get("playerPubkey")
    timestamp = request.get("timestamp")
    signature = request.get("signature")

    if not player_pubkey or timestamp is None or not signature:
        raise HTTPException(status_code=400, detail="playerPubkey, timestamp, signature required")

    try:
        timestamp = int(timestamp)
        signature_bytes = bytes(signature) if isinstance(signature, list) else bytes.fromhex(signature)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="timestamp must be an integer and signature bytes or hex")

    game = _require_game(game_id)

    index = game.find_player(player_pubkey)
    if index is None:
        raise HTTPException(status_code=404, detail="Player not found in this game")

    if not is_fresh(timestamp, window_ms=state.freshness_ms):
        _reject(game.game_id, player_pubkey, 401, "Request expired")

    message = build_challenge(game_id, timestamp)
    if not verify_signature(decode_identifier(player_pubkey), message, signature_bytes):
        _reject(game.game_id, player_pubkey, 401, "Invalid signature")

    assignment = game.assignments[index]
    logger = _logger_for(game.game_id)
    if logger is not None:
        logger.log_delivery(index, player_pubkey)
    print(f"[INBOX] Player {player_pubkey[:8]}... fetched role for game {game.game_id}")

    known_pubkeys = [
        game.player_pubkeys[p.index]
        for p in game.assignments
        if p.participant_id in assignment.known_players
    ]

    return {
        "gameId": game.game_id,
        "player": player_pubkey,
        "role": int(assignment.role),
        "alignment": int(assignment.alignment),
        "knownPlayers": known_pubkeys,
        "merkleProof": proof_to_byte_list(game.proof_for(index)),
    }


# ============================================================================
# God view (spectator only)
# ============================================================================

@app.get("/god-view/{game_id}")
async def god_view(
    game_id: str,
    authToken: Optional[str] = None,
    authorization: Optional[str] = Header(default=None)
):
    token = authToken
    if not token and authorization:
        token = authorization.replace("Bearer ", "", 1)

    if not token or not hmac.compare_digest(token.encode(), state.spectator_token.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized. Valid spectator token required.")

    game = _require_game(game_id)
    return {
        "gameId": game.game_id,
        "assignments": [
            {
                "playerPubkey": game.player_pubkeys[a.index],
                "playerIndex": a.index,
                "role": role_name(a.role),
                "alignment": alignment_name(a.alignment),
                "knownPlayers": [
                    game.player_pubkeys[p.index]
                    for p in game.assignments
                    if p.participant_id in a.known_players
                ],
            }
            for a in game.assignments
        ],
        "merkleRoot": hash_to_hex(game.merkle_root),
        "vrfSeed": hash_to_byte_list(game.seed),
        "createdAt": game.created_at,
        "gamePDA": game.game_pda,
    }
