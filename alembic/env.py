"""Alembic environment for the catalog schema.

The target URL is the app's own DATABASE_URL (normalised by Settings) when the
variable is set, else sqlalchemy.url from alembic.ini. Online runs go through
an async engine, since both asyncpg and aiosqlite are async drivers.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from alembic import context

from locallibrary.config import Settings
from locallibrary.db.base import Base
import locallibrary.models  # noqa: F401  (populates Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def catalog_database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return Settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=Base.metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(
                lambda sync_conn: _configure_and_run(connection=sync_conn),
            )
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(
        url=catalog_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online(catalog_database_url()))
