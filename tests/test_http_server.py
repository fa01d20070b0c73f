from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from fastapi.testclient import TestClient

from avalon_commit.http_server import app, initialize_server, state
from avalon_commit.model import Alignment, Role
from avalon_commit.service.commitment import (
    decode_identifier,
    encode_identifier,
    leaf_hash,
    proof_from_byte_list,
    verify,
)
from avalon_commit.service.inbox import now_ms, pubkey_of, sign_challenge

FIVE_PLAYER_ROOT = "d9babacc4d5c177e827ad2937cb5e58ab0c4503780eca7b4846e0607675231c7"


def fixed_pubkeys(count=5):
    return [encode_identifier(bytes([k + 1]) * 32) for k in range(count)]


def create_game(client, game_id, pubkeys, seed=None, **extra):
    body = {"playerPubkeys": pubkeys, "vrfSeed": list(seed if seed is not None else bytes(32))}
    body.update(extra)
    return client.post(f"/assign-roles/{game_id}", json=body)


def inbox_request(key, game_id, timestamp=None):
    timestamp = timestamp if timestamp is not None else now_ms()
    return {
        "playerPubkey": pubkey_of(key),
        "timestamp": timestamp,
        "signature": list(sign_challenge(key, game_id, timestamp)),
    }


# ============================================================
# Public endpoints
# ============================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["games"] == 0


def test_assign_roles_returns_only_root(client):
    response = create_game(client, "g1", fixed_pubkeys())
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"gameId", "merkleRoot", "playerCount"}
    assert bytes(data["merkleRoot"]).hex() == FIVE_PLAYER_ROOT
    assert data["playerCount"] == 5


def test_seed_may_be_hex(client):
    response = client.post(
        "/assign-roles/g1", json={"playerPubkeys": fixed_pubkeys(), "vrfSeed": "00" * 32}
    )
    assert bytes(response.json()["merkleRoot"]).hex() == FIVE_PLAYER_ROOT


def test_public_game_state_has_no_roles(client):
    create_game(client, "g1", fixed_pubkeys(), gamePDA="PDA111")
    data = client.get("/game/g1").json()

    assert data["merkleRoot"] == FIVE_PLAYER_ROOT
    assert data["players"] == [{"pubkey": p, "index": i} for i, p in enumerate(fixed_pubkeys())]
    assert set(data) == {"gameId", "playerCount", "players", "merkleRoot", "createdAt", "gamePDA"}

    assert client.get("/game/PDA111").json()["gameId"] == "g1"


def test_list_games(client):
    create_game(client, "g1", fixed_pubkeys())
    create_game(client, "g2", fixed_pubkeys(7), gamePDA="PDA2")
    games = {g["gameId"]: g for g in client.get("/games").json()["games"]}
    assert games["g1"]["playerCount"] == 5
    assert games["g2"]["playerCount"] == 7
    assert games["g2"]["gamePDA"] == "PDA2"
    assert client.get("/health").json()["games"] == 2


def test_unknown_game(client):
    assert client.get("/game/nope").status_code == 404


# ============================================================
# Assignment validation
# ============================================================

def test_missing_pubkeys(client):
    response = client.post("/assign-roles/g1", json={"vrfSeed": [0] * 32})
    assert response.status_code == 400
    assert "playerPubkeys" in response.json()["detail"]


def test_unsupported_player_count(client):
    response = create_game(client, "g1", fixed_pubkeys(4))
    assert response.status_code == 400
    assert "Invalid player count" in response.json()["detail"]


def test_bad_seed_length(client):
    response = create_game(client, "g1", fixed_pubkeys(), seed=bytes(31))
    assert response.status_code == 400
    assert "32 bytes" in response.json()["detail"]


def test_count_checked_before_seed(client):
    response = create_game(client, "g1", fixed_pubkeys(4), seed=bytes(3))
    assert response.status_code == 400
    assert "Invalid player count" in response.json()["detail"]


def test_duplicate_pubkeys_rejected(client):
    pubkeys = fixed_pubkeys(4)
    response = create_game(client, "g1", pubkeys + [pubkeys[0]])
    assert response.status_code == 400
    assert "duplicates" in response.json()["detail"]
    assert client.get("/game/g1").status_code == 404


def test_pubkeys_decoding_to_same_identifier_rejected(client):
    # A leading "1" is a zero byte, which left padding also adds
    pubkeys = fixed_pubkeys(4) + ["2", "12"]
    response = create_game(client, "g1", pubkeys)
    assert response.status_code == 400


def test_missing_seed(client):
    response = client.post("/assign-roles/g1", json={"playerPubkeys": fixed_pubkeys()})
    assert response.status_code == 400


def test_bad_pubkey(client):
    response = create_game(client, "g1", fixed_pubkeys(4) + ["not-base58-0OIl"])
    assert response.status_code == 400


# ============================================================
# Role inbox
# ============================================================

def test_each_player_gets_own_verifiable_role(client, signing_keys):
    pubkeys = [pubkey_of(k) for k in signing_keys]
    seed = bytes([9]) * 32
    root = bytes(create_game(client, "g1", pubkeys, seed=seed).json()["merkleRoot"])

    seen_roles = []
    for key in signing_keys:
        response = client.post("/role-inbox/g1", json=inbox_request(key, "g1"))
        assert response.status_code == 200
        data = response.json()
        assert data["player"] == pubkey_of(key)

        leaf = leaf_hash(decode_identifier(data["player"]), Role(data["role"]), Alignment(data["alignment"]), seed)
        assert verify(leaf, proof_from_byte_list(data["merkleProof"]), root)
        seen_roles.append(Role(data["role"]))

    assert sorted(seen_roles) == sorted([Role.MERLIN, Role.PERCIVAL, Role.SERVANT, Role.MORGANA, Role.ASSASSIN])


def test_known_players_are_pubkeys(client, signing_keys):
    pubkeys = [pubkey_of(k) for k in signing_keys]
    create_game(client, "g1", pubkeys)
    by_role = {}
    for key in signing_keys:
        data = client.post("/role-inbox/g1", json=inbox_request(key, "g1")).json()
        by_role[Role(data["role"])] = data

    evil = {by_role[Role.MORGANA]["player"], by_role[Role.ASSASSIN]["player"]}
    assert set(by_role[Role.MERLIN]["knownPlayers"]) == evil
    assert by_role[Role.SERVANT]["knownPlayers"] == []
    assert by_role[Role.ASSASSIN]["knownPlayers"] == [by_role[Role.MORGANA]["player"]]
    assert set(by_role[Role.PERCIVAL]["knownPlayers"]) == {
        by_role[Role.MERLIN]["player"], by_role[Role.MORGANA]["player"]
    }


def test_inbox_missing_fields(client):
    response = client.post("/role-inbox/g1", json={"playerPubkey": "abc"})
    assert response.status_code == 400


def test_inbox_unknown_game(client, signing_keys):
    response = client.post("/role-inbox/nope", json=inbox_request(signing_keys[0], "nope"))
    assert response.status_code == 404


def test_inbox_unknown_player(client, signing_keys):
    create_game(client, "g1", [pubkey_of(k) for k in signing_keys])
    stranger = Ed25519PrivateKey.generate()
    response = client.post("/role-inbox/g1", json=inbox_request(stranger, "g1"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Player not found in this game"


def test_inbox_expired(client, signing_keys):
    create_game(client, "g1", [pubkey_of(k) for k in signing_keys])
    old = now_ms() - 120_000
    response = client.post("/role-inbox/g1", json=inbox_request(signing_keys[0], "g1", timestamp=old))
    assert response.status_code == 401
    assert response.json()["detail"] == "Request expired"


def test_inbox_rejects_signature_from_another_player(client, signing_keys):
    create_game(client, "g1", [pubkey_of(k) for k in signing_keys])
    body = inbox_request(signing_keys[1], "g1")
    body["playerPubkey"] = pubkey_of(signing_keys[0])
    response = client.post("/role-inbox/g1", json=body)
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid signature"


def test_inbox_rejects_signature_for_another_game(client, signing_keys):
    pubkeys = [pubkey_of(k) for k in signing_keys]
    create_game(client, "g1", pubkeys)
    create_game(client, "g2", pubkeys)
    response = client.post("/role-inbox/g2", json=inbox_request(signing_keys[0], "g1"))
    assert response.status_code == 401


def test_inbox_accepts_hex_signature(client, signing_keys):
    create_game(client, "g1", [pubkey_of(k) for k in signing_keys])
    body = inbox_request(signing_keys[0], "g1")
    body["signature"] = bytes(body["signature"]).hex()
    assert client.post("/role-inbox/g1", json=body).status_code == 200


# ============================================================
# God view
# ============================================================

def test_god_view_requires_token(client):
    create_game(client, "g1", fixed_pubkeys())
    assert client.get("/god-view/g1").status_code == 401
    assert client.get("/god-view/g1", params={"authToken": "wrong"}).status_code == 401


def test_god_view_with_token(client):
    create_game(client, "g1", fixed_pubkeys())
    by_query = client.get("/god-view/g1", params={"authToken": "test-token"})
    by_header = client.get("/god-view/g1", headers={"Authorization": "Bearer test-token"})
    assert by_query.status_code == 200
    assert by_query.json() == by_header.json()

    data = by_query.json()
    assert [a["role"] for a in data["assignments"]] == ["Merlin", "Assassin", "Servant", "Morgana", "Percival"]
    assert data["merkleRoot"] == FIVE_PLAYER_ROOT
    assert data["vrfSeed"] == [0] * 32


def test_god_view_unknown_game(client):
    response = client.get("/god-view/nope", params={"authToken": "test-token"})
    assert response.status_code == 404


# ============================================================
# Game log
# ============================================================

def test_commitment_is_logged(tmp_path, signing_keys):
    initialize_server(spectator_token="t", log_dir=str(tmp_path))
    with TestClient(app) as client:
        create_game(client, "logged", [pubkey_of(k) for k in signing_keys])
        client.post("/role-inbox/logged", json=inbox_request(signing_keys[0], "logged"))

    content = (tmp_path / "game_logged.log").read_text(encoding="utf-8")
    assert "Merkle Root:" in content
    assert "fetched role and proof" in content
    assert "logged" in state.loggers
