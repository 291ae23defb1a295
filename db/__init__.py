"""
Database utilities, migrations, and seeding.

Repo-level DB operations for the `Users` table:
- Alembic migrations config
- CSV-backed mock user seed (`python -m db.seed up|down`)
"""
