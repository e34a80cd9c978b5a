"""Настройка движка и сессий базы данных."""

import logging
from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_service.core.config import Settings, settings
from inventory_service.core.exceptions import StorageFailureError

# Драйверы (asyncpg) пропускают сетевые ошибки соединения как OSError
STORAGE_ERRORS = (SQLAlchemyError, OSError)


def create_engine(url: str, config: Settings = settings) -> AsyncEngine:
    """
    Создает асинхронный "движок" с ограниченным пулом соединений.

    Для SQLite включаются внешние ключи, а каждая транзакция открывается
    через BEGIN IMMEDIATE: пишущие транзакции выполняются строго по очереди,
    как при построчной блокировке в PostgreSQL.

    Args:
        url: Строка подключения SQLAlchemy.
        config: Настройки с размерами пула и таймаутами.

    Returns:
        Объект AsyncEngine.
    """
    sa_url = make_url(url)
    if sa_url.get_backend_name() == "sqlite":
        pool_options: dict[str, Any] = {}
        # Для :memory: SQLAlchemy берет StaticPool, у которого нет размеров
        if sa_url.database not in (None, "", ":memory:"):
            pool_options = {
                "pool_size": config.DB_POOL_SIZE,
                "max_overflow": config.DB_MAX_OVERFLOW,
                "pool_timeout": config.DB_POOL_TIMEOUT,
            }
        engine = create_async_engine(
            url,
            echo=False,
            connect_args={"timeout": config.DB_POOL_TIMEOUT},
            **pool_options,
        )
        _enable_sqlite_locking(engine)
        return engine

    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Проверяет "живо" ли соединение перед использованием
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
    )


def _enable_sqlite_locking(engine: AsyncEngine) -> None:
    # Драйвер sqlite3 сам открывает транзакции лениво. Отключаем это
    # и начинаем транзакцию явно, сразу с блокировкой на запись.
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Создает фабрику асинхронных сессий, привязанную к движку.

    Args:
        engine: Движок базы данных.

    Returns:
        Фабрика сессий.
    """
    return async_sessionmaker(
        engine,
        autoflush=False,
        expire_on_commit=False,
        class_=AsyncSession,
    )


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Возвращает фабрику сессий, которой владеет приложение."""
    return request.app.state.session_factory  # type: ignore[no-any-return]


SessionFactoryDep = Annotated[
    async_sessionmaker[AsyncSession], Depends(get_session_factory)
]


async def get_db_session(
    session_factory: SessionFactoryDep,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость (dependency) для получения сессии базы данных.

    Сессия закрывается и возвращает соединение в пул при любом исходе запроса.

    Yields:
        Объект асинхронной сессии SQLAlchemy.
    """
    async with session_factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


@contextmanager
def storage_errors() -> Iterator[None]:
    """
    Превращает ошибки БД и соединения в StorageFailureError.

    Raises:
        StorageFailureError: Исходная ошибка сохраняется в __cause__.
    """
    try:
        yield
    except STORAGE_ERRORS as e:
        logging.exception("Storage failure")
        raise StorageFailureError() from e
