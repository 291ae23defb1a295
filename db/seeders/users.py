from __future__ import annotations

from pathlib import Path

from db.logging import logger
from db.settings import SETTINGS
from db.storage import UserStorage
from db.users_csv import load_users_csv


USERS_TABLE = "Users"


async def apply(storage: UserStorage, csv_path: str | Path | None = None) -> int:
    """
    Insert every mock user from the CSV in a single bulk insert.

    CSV ids are dropped so the table's own sequence assigns them. Load and storage
    errors propagate as-is; the caller decides whether seeding is fatal.
    """
    batch = load_users_csv(SETTINGS.users_csv_path if csv_path is None else csv_path)
    inserted = await storage.bulk_insert(USERS_TABLE, batch.insert_rows())
    logger.info("seed_users_applied", table=USERS_TABLE, csv_path=str(batch.path), inserted=inserted)
    return inserted


async def revert(storage: UserStorage, csv_path: str | Path | None = None) -> int:
    """
    Delete the rows whose email appears in the CSV.

    Matching is by email only, so rows edited after seeding are still removed.
    No matches is a successful no-op.
    """
    batch = load_users_csv(SETTINGS.users_csv_path if csv_path is None else csv_path)
    deleted = await storage.destroy(USERS_TABLE, emails=batch.emails())
    logger.info("seed_users_reverted", table=USERS_TABLE, csv_path=str(batch.path), deleted=deleted)
    return deleted


# Migration-runner naming.
up = apply
down = revert
