"""Alembic environment for the post store and tip ledger schema."""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# Allow running `alembic` from a checkout without installing the package.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from frog_backend.core.settings import settings  # noqa: E402
from frog_backend.db.session import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    # Keep application loggers alive when migrations run in-process.
    fileConfig(config.config_file_name, disable_existing_loggers=False)

database_url = os.getenv("ALEMBIC_URL") or config.get_main_option("sqlalchemy.url")
if not database_url:
    database_url = settings.database_url_sync
config.set_main_option("sqlalchemy.url", database_url)

target_metadata = Base.metadata

# SQLite cannot ALTER constraints in place; batch mode recreates the table instead.
RENDER_AS_BATCH = database_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=RENDER_AS_BATCH,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the migrations against a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=RENDER_AS_BATCH,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
