"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lol-stats", description="Match statistics for the tracked group")
    parser.add_argument("--json", action="store_true", dest="json_out", help="print JSON instead of text")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default=settings.API_HOST)
    serve.add_argument("--port", type=int, default=settings.API_PORT)

    sub.add_parser("players", help="leaderboard of the tracked roster")

    player = sub.add_parser("player", help="full profile of one player")
    player.add_argument("puuid")

    matches = sub.add_parser("matches", help="paginated recent matches")
    matches.add_argument("--page", type=int, default=1)
    matches.add_argument("--limit", type=int, default=settings.DEFAULT_PAGE_SIZE)

    winrate = sub.add_parser("winrate", help="win rates for a player on a champion and position")
    winrate.add_argument("puuid")
    winrate.add_argument("--champion", required=True)
    winrate.add_argument("--position", required=True)
    return parser


def _serve(host: str, port: int) -> int:
    import uvicorn
    from presentation.api import create_app

    uvicorn.run(create_app(), host=host, port=port, log_config=None)
    return 0


async def _run_command(args: argparse.Namespace) -> int:
    # Lazy imports keep `serve` from opening a second repository handle
    from application.services import ServiceContainer
    from presentation.cli import StatsCommand

    services = ServiceContainer.from_settings()
    command = StatsCommand(services, json_out=args.json_out)
    try:
        if args.command == "players":
            return await command.players()
        if args.command == "player":
            return await command.player(args.puuid)
        if args.command == "matches":
            return await command.matches(page=args.page, limit=args.limit)
        return await command.winrate(args.puuid, args.champion, args.position)
    finally:
        await services.close()


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    bootstrap_logging(
        service="stats",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="stats.jsonl",
    )
    try:
        if args.command == "serve":
            return _serve(args.host, args.port)
        return asyncio.run(_run_command(args))
    finally:
        shutdown_logging()


def _entry() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(_entry())
