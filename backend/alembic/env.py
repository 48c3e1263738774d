import asyncio
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

# Migrations run from backend/, which is not an installed package root.
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from golf_press.db import Base, _normalize_url  # noqa: E402
from golf_press import models  # noqa: E402,F401

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    return _normalize_url(url)


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(lambda conn: _configure_and_run(connection=conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(url=_database_url(), literal_binds=True)
else:
    asyncio.run(_run_online(_database_url()))
