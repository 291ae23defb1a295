from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class CsvSchemaError(ValueError):
    """Raised when a seed CSV does not match the `Users` column set."""


class UserRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    # Ids recorded in the CSV are never written; the database assigns its own.
    id: int | None = None
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3)

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


REQUIRED_COLUMNS = frozenset(name for name, f in UserRecord.model_fields.items() if f.is_required())
KNOWN_COLUMNS = frozenset(UserRecord.model_fields)


@dataclass(frozen=True)
class SeedBatch:
    path: Path
    records: tuple[UserRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    def insert_rows(self) -> list[dict[str, Any]]:
        return [r.model_dump(exclude={"id"}) for r in self.records]

    def emails(self) -> set[str]:
        return {r.email for r in self.records}


def _check_header(path: Path, header: list[str] | None) -> None:
    if not header:
        raise CsvSchemaError(f"{path}: missing header row")
    columns = {h.strip() for h in header}
    missing = REQUIRED_COLUMNS - columns
    unknown = columns - KNOWN_COLUMNS
    if missing or unknown:
        raise CsvSchemaError(
            f"{path}: column mismatch (missing={sorted(missing)}, unknown={sorted(unknown)})"
        )


def load_users_csv(path: str | Path) -> SeedBatch:
    """
    Read a mock users CSV into a SeedBatch, in file order.

    The header is checked against the `Users` columns before any row is read, so a
    renamed or extra column fails fast instead of surfacing as a database error.
    """
    path = Path(path)
    records: list[UserRecord] = []
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        _check_header(path, reader.fieldnames)
        for row in reader:
            if None in row:
                raise CsvSchemaError(f"{path}:{reader.line_num}: more values than header columns")
            values = {k.strip(): v for k, v in row.items()}
            try:
                records.append(UserRecord.model_validate(values))
            except ValidationError as exc:
                raise CsvSchemaError(f"{path}:{reader.line_num}: invalid user row") from exc
    return SeedBatch(path=path, records=tuple(records))
