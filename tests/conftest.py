import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from fastapi.testclient import TestClient

from avalon_commit.http_server import app, initialize_server


ZERO_SEED = bytes(32)


def make_ids(count):
    """Identifiers 0x01..01, 0x02..02, ... (one repeated byte each)"""
    return [bytes([k + 1]) * 32 for k in range(count)]


@pytest.fixture
def zero_seed():
    return ZERO_SEED


@pytest.fixture
def five_ids():
    return make_ids(5)


@pytest.fixture
def signing_keys():
    return [Ed25519PrivateKey.generate() for _ in range(5)]


@pytest.fixture
def client():
    initialize_server(spectator_token="test-token", freshness_ms=60_000, game_logging=False)
    with TestClient(app) as test_client:
        yield test_client
