# src/frog_backend/scripts/migrate.py
"""Apply Alembic migrations up to head."""
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from frog_backend.core.settings import settings

_MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_alembic_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at this project's migrations."""
    cfg = Config(os.path.join(_MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", _MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url_sync)
    return cfg


def run_upgrade_head(database_url: str | None = None) -> None:
    command.upgrade(build_alembic_config(database_url), "head")


if __name__ == "__main__":
    run_upgrade_head()
