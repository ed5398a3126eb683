"""
Logo Picker command line
========================

Maintenance entry points for the catalog database and the API server.

Usage:
    logo-picker init-db
    logo-picker seed --offline
    logo-picker serve --port 8000
    logo-picker leaderboard
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

import uvicorn

from .catalog.seed import load_seed_records
from .catalog.service import CatalogService
from .catalog.store import get_engine, init_db
from .config import get_settings


def _catalog(args) -> CatalogService:
    engine = init_db(get_engine(args.database_url))
    return CatalogService(engine)


def cmd_init_db(args):
    engine = init_db(get_engine(args.database_url))
    print(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


def cmd_seed(args):
    catalog = _catalog(args)
    records = load_seed_records(offline=args.offline, seed=args.seed)
    inserted = catalog.seed_catalog(records)
    print(f"Seeded {inserted} brands ({len(records) - inserted} already present)")


def cmd_serve(args):
    if args.database_url:
        os.environ["LOGO_PICKER_DATABASE_URL"] = args.database_url
        get_settings.cache_clear()
    uvicorn.run("logo_picker.api:app", host=args.host, port=args.port, reload=args.reload)


def cmd_leaderboard(args):
    catalog = _catalog(args)
    scores = catalog.list_scores()
    if not scores:
        print("No scores recorded yet.")
        return
    for rank, record in enumerate(scores, 1):
        print(f"{rank:>2}. {record.player_name:<15} {record.score:>5}  ({record.difficulty})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Logo Picker catalog and server tools")
    parser.add_argument("--database-url", help="SQLAlchemy URL (default: LOGO_PICKER_DATABASE_URL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create the brands and scores tables")
    init_parser.set_defaults(func=cmd_init_db)

    seed_parser = subparsers.add_parser("seed", help="Insert brands from the logo dataset")
    seed_parser.add_argument("--offline", action="store_true", help="Use the embedded brand list")
    seed_parser.add_argument("--seed", type=int, help="Random seed for tier assignment")
    seed_parser.set_defaults(func=cmd_seed)

    serve_parser = subparsers.add_parser("serve", help="Run the REST API with uvicorn")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=cmd_serve)

    board_parser = subparsers.add_parser("leaderboard", help="Print the top scores")
    board_parser.set_defaults(func=cmd_leaderboard)

    return parser


def main(argv: Optional[Sequence[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
