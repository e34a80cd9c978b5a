import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from sqlmodel import SQLModel

from alembic import context  # type: ignore[attr-defined]
from inventory_service.core.config import settings
from inventory_service.db import models  # noqa: F401

# объект конфигурации Alembic с доступом к значениям из alembic.ini
config = context.config

# Настраиваем логгеры из alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Метаданные SQLModel моделей для автогенерации миграций
target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Запуск миграций в 'оффлайн' режиме.

    Контекст конфигурируется только URL, без Engine, поэтому
    DBAPI-драйвер не нужен. Вызовы context.execute() выводят SQL
    в выходной файл скрипта.
    """
    context.configure(
        url=settings.database_url,
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


async def run_async_migrations() -> None:
    """
    Запуск миграций через асинхронный движок.

    Строка подключения берется из наших настроек (.env), а не из alembic.ini.
    """
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = settings.database_url

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Запуск миграций в 'онлайн' режиме."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
