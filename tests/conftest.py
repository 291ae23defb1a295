from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config


REPO_ROOT = Path(__file__).resolve().parents[1]


def _docker_available() -> bool:
    try:
        import docker

        docker.from_env().ping()
    except Exception:
        return False
    return True


@pytest.fixture(scope="session")
def postgres_url() -> str:
    if not _docker_available():
        pytest.skip("docker is required for PostgreSQL integration tests")
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16") as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def migrated_db(postgres_url: str) -> str:
    from db.engine import async_database_url, sync_database_url

    alembic_ini = str(REPO_ROOT / "db" / "migrations" / "alembic.ini")
    cfg = Config(alembic_ini)
    # env.py reads DATABASE_URL; Alembic itself runs on the sync driver.
    os.environ["DATABASE_URL"] = sync_database_url(postgres_url)
    command.upgrade(cfg, "head")

    async_url = async_database_url(postgres_url)
    os.environ["DATABASE_URL"] = async_url
    return async_url
