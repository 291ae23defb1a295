from __future__ import annotations

import sys
from collections.abc import Collection, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest


# Ensure the repo root is importable (so `import db.*` works in tests).
REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT))


class FakeUserStorage:
    """In-memory UserStorage that records every call it receives."""

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self.calls: list[tuple[str, str, Any]] = []
        self._next_id = 100

    async def bulk_insert(self, table_name: str, records: Sequence[Mapping[str, Any]]) -> int:
        self.calls.append(("bulk_insert", table_name, [dict(r) for r in records]))
        for r in records:
            self.rows.append({"id": self._next_id, **r})
            self._next_id += 1
        return len(records)

    async def destroy(self, table_name: str, *, emails: Collection[str]) -> int:
        self.calls.append(("destroy", table_name, set(emails)))
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["email"] not in emails]
        return before - len(self.rows)


@pytest.fixture()
def storage() -> FakeUserStorage:
    return FakeUserStorage()


@pytest.fixture()
def write_csv(tmp_path: Path):
    def _write(text: str, name: str = "users.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
