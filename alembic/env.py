"""Alembic environment for the marketplace schema.

Migrations run on an async engine built from Settings.database_url.
After an online `alembic upgrade` against PostgreSQL the reference-data
seeders (categories, starter resources) run; pass `-x seed=false` to skip
them.
"""

import asyncio
import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_engine_from_config
from sqlalchemy.ext.asyncio import async_sessionmaker

from alembic import context
from src.core.config import settings
from src.infrastructure.persistence import BaseModel

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", settings.database_url)

# Registers every table on BaseModel.metadata
import src.infrastructure.persistence.models  # noqa: E402, F401

target_metadata = BaseModel.metadata


def run_migrations_offline() -> None:
    """Emit the migration SQL for the configured URL without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def _should_seed(engine: AsyncEngine) -> bool:
    """Seed after `upgrade` on PostgreSQL unless `-x seed=false` is given."""
    flag = context.get_x_argument(as_dictionary=True).get("seed", "true")
    if flag.strip().lower() in {"0", "false", "no", "n"}:
        return False
    # Seeders use PostgreSQL NOW() and array literals
    return "upgrade" in sys.argv and engine.dialect.name == "postgresql"


async def _run_seeders(engine: AsyncEngine) -> None:
    # alembic/ is not a package (it would shadow the alembic library)
    alembic_dir = str(Path(__file__).parent)
    if alembic_dir not in sys.path:
        sys.path.insert(0, alembic_dir)

    from seeds import run_all_seeders  # noqa: E402

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await run_all_seeders(session)
        await session.commit()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    if _should_seed(connectable):
        await _run_seeders(connectable)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
