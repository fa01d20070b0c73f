"""
Configuration for the Role Commitment Server
"""
from typing import Dict, Any
import os
from pathlib import Path


def _load_spectator_token(env_path: Path = Path(__file__).resolve().parent.parent / ".env") -> str:
    """Spectator token from SPECTATOR_TOKEN, else from a KEY=value line in .env"""
    value = os.getenv("SPECTATOR_TOKEN")
    if value:
        return value.strip()

    if not env_path.exists():
        return "spectator-secret"

    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            key, sep, val = line.partition("=")
            if sep and key.strip() == "SPECTATOR_TOKEN":
                return val.strip().strip("\"'")
    except OSError as e:
        print(f"[Config] ⚠ Could not read {env_path}: {e}")

    return "spectator-secret"


# Game Configuration
GAME_CONFIG: Dict[str, Any] = {
    # Supported table sizes (role distribution exists for each)
    "min_players": 5,
    "max_players": 10,
}


# Network Configuration
NETWORK_CONFIG: Dict[str, Any] = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "3000")),

    # Role inbox requests older (or newer) than this are rejected
    "request_freshness_ms": 60_000,

    # God-view access for spectators
    "spectator_token": _load_spectator_token(),

    "connection_timeout": 10,
}


# Cryptography Configuration
CRYPTO_CONFIG: Dict[str, Any] = {
    "hash": "sha256",
    "seed_length": 32,
    "identifier_length": 32,
}


# Logging Configuration
LOG_CONFIG: Dict[str, Any] = {
    "log_dir": os.getenv("AVALON_LOG_DIR", "logs"),
    "enabled": os.getenv("AVALON_GAME_LOG", "1") != "0",
}
