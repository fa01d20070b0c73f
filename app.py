"""
Main Application - Local commit-reveal walkthrough, or the role server
"""
import argparse
import asyncio
import os
import sys

import httpx
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from rich.console import Console
from rich.table import Table

from avalon_commit.config import GAME_CONFIG
from avalon_commit.http_server import app, initialize_server
from avalon_commit.main import run_server
from avalon_commit.model import Alignment
from avalon_commit.service.commitment import hash_from_hex, hash_to_hex
from avalon_commit.service.inbox import RoleInboxClient, pubkey_of
from avalon_commit.service.roles import role_name, alignment_name

# Role icons for the reveal table
ROLE_DISPLAY = {
    "Merlin": "🔮",
    "Percival": "🛡",
    "Servant": "👤",
    "Morgana": "🎭",
    "Assassin": "🗡",
    "Minion": "👿",
}


async def run_demo(num_players: int, seed: bytes, console: Console):
    """Deal, commit, deliver and verify roles against an in-process server"""
    initialize_server(game_logging=False)
    transport = httpx.ASGITransport(app=app)
    client = RoleInboxClient("http://avalon.local", transport=transport)

    keys = [Ed25519PrivateKey.generate() for _ in range(num_players)]
    pubkeys = [pubkey_of(key) for key in keys]
    game_id = "demo"

    console.rule("STEP 1: Players")
    for i, pubkey in enumerate(pubkeys):
        console.print(f"  {i + 1}. Player {i + 1}: {pubkey[:20]}...")

    console.rule("STEP 2: Seed")
    console.print(f"  Seed: {seed.hex()[:40]}...")

    console.rule("STEP 3: Commit")
    root = await client.assign_roles(game_id, pubkeys, seed)
    console.print(f"  Merkle Root: [bold]{hash_to_hex(root)}[/bold]")
    public_state = await client.get_game(game_id)
    published_ok = hash_from_hex(public_state["merkleRoot"]) == root
    if not published_ok:
        console.print("  [red]✗ Published root does not match the commitment[/red]")

    console.rule("STEP 4: Role Inbox")
    reveals = await client.fetch_roles(game_id, keys)

    table = Table(title="🎭 Role Reveal", show_header=True, header_style="bold cyan")
    table.add_column("Player", style="cyan", no_wrap=True)
    table.add_column("Role", style="bold")
    table.add_column("Sees", style="dim")
    table.add_column("Proof", style="white")

    all_valid = published_ok
    for i, reveal in enumerate(reveals):
        name = role_name(reveal.role)
        colour = "red" if reveal.alignment == Alignment.EVIL else "blue"
        valid = reveal.verify_against(root, seed)
        all_valid = all_valid and valid
        table.add_row(
            f"Player {i + 1}",
            f"[{colour}]{ROLE_DISPLAY.get(name, '❓')} {name} ({alignment_name(reveal.alignment)})[/{colour}]",
            str(len(reveal.known_players)),
            "[green]✓ verified[/green]" if valid else "[red]✗ invalid[/red]"
        )
    console.print(table)
    return all_valid


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Avalon role commitment")
    parser.add_argument("--serve", action="store_true", help="Run the role commitment server")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument(
        "--players", type=int, default=GAME_CONFIG["min_players"],
        help="Table size for the walkthrough"
    )
    parser.add_argument("--seed", default=None, help="64-char hex seed (random if omitted)")
    args = parser.parse_args(argv)

    if args.serve:
        run_server(args.host, args.port)
        return 0

    seed = bytes.fromhex(args.seed) if args.seed else os.urandom(32)
    console = Console()
    ok = asyncio.run(run_demo(args.players, seed, console))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
