from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import Any, Protocol

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncEngine


class UserStorage(Protocol):
    async def bulk_insert(self, table_name: str, records: Sequence[Mapping[str, Any]]) -> int: ...

    async def destroy(self, table_name: str, *, emails: Collection[str]) -> int: ...


class SqlUserStorage:
    """
    UserStorage over an async SQLAlchemy engine.

    Each call runs in its own transaction, so a failed bulk insert leaves no rows behind.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def bulk_insert(self, table_name: str, records: Sequence[Mapping[str, Any]]) -> int:
        if not records:
            # An empty executemany would insert a single row of defaults.
            return 0
        tbl = sa.table(table_name, *(sa.column(name) for name in records[0]))
        async with self._engine.begin() as conn:
            await conn.execute(sa.insert(tbl), [dict(r) for r in records])
        return len(records)

    async def destroy(self, table_name: str, *, emails: Collection[str]) -> int:
        if not emails:
            return 0
        tbl = sa.table(table_name, sa.column("email"))
        q = sa.delete(tbl).where(tbl.c.email.in_(sorted(emails)))
        async with self._engine.begin() as conn:
            result = await conn.execute(q)
        return result.rowcount
