"""
Server Entry - Runs the role commitment server with uvicorn
"""
from typing import Optional

import uvicorn

from avalon_commit.config import NETWORK_CONFIG
from avalon_commit.http_server import app, initialize_server


def _print_banner(host: str, port: int):
    print("=" * 56)
    print(" AVALON - ROLE COMMITMENT SERVER")
    print("=" * 56)
    print(f"  HTTP API:    http://{host}:{port}")
    print("")
    print("Endpoints:")
    print("  GET  /health                - Health check")
    print("  GET  /games                 - List all games")
    print("  GET  /game/:id              - Get game (public state)")
    print("  POST /assign-roles/:gameId  - Assign roles")
    print("  POST /role-inbox/:gameId    - Fetch private role")
    print("  GET  /god-view/:gameId      - Full state (spectator)")
    print("")


def run_server(host: Optional[str] = None, port: Optional[int] = None, log_dir: Optional[str] = None):
    """Run the server in the foreground (blocking)"""
    host = host or NETWORK_CONFIG["host"]
    port = port or NETWORK_CONFIG["port"]

    initialize_server(log_dir=log_dir)
    _print_banner(host, port)
    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    run_server()
