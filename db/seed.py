from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path

from db.engine import create_engine
from db.logging import configure_logging
from db.seeders import users
from db.settings import SETTINGS
from db.storage import SqlUserStorage


OPERATIONS = {"up": users.apply, "down": users.revert}


async def run(operation: str, database_url: str, csv_path: Path) -> int:
    engine = create_engine(database_url)
    try:
        return await OPERATIONS[operation](SqlUserStorage(engine), csv_path)
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed or unseed the mock users in the Users table.")
    parser.add_argument("operation", choices=sorted(OPERATIONS), help="up inserts the CSV users, down removes them.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    parser.add_argument("--csv", type=Path, default=SETTINGS.users_csv_path, help="Mock users CSV file.")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(SETTINGS.log_level, operation=args.operation)
    asyncio.run(run(args.operation, args.database_url, args.csv))


if __name__ == "__main__":
    main()
