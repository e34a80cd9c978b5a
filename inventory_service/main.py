"""Главный файл приложения. Точка входа."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory_service.core.config import settings
from inventory_service.core.exceptions import InventoryError
from inventory_service.db.session import create_engine, create_session_factory
from inventory_service.handlers import orders, products


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Контекстный менеджер для управления жизненным циклом приложения.

    Если фабрика сессий не была передана в create_app, приложение само
    создает движок и закрывает его при остановке.
    """
    logging.info("--- LIFESPAN START ---")
    engine = None
    if getattr(app.state, "session_factory", None) is None:
        engine = create_engine(settings.database_url)
        app.state.session_factory = create_session_factory(engine)
        logging.info("Database engine created (pool size %s)", settings.DB_POOL_SIZE)

    yield

    logging.info("--- LIFESPAN SHUTDOWN ---")
    if engine is not None:
        await engine.dispose()
        app.state.session_factory = None


async def inventory_error_handler(
    request: Request, exc: InventoryError
) -> JSONResponse:
    """
    Превращает ошибки бизнес-логики в ответ {"error": <сообщение>}.
    """
    return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Отклоняет некорректные тела запросов до обращения к БД.
    """
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        details.append(f"{field}: {error['msg']}" if field else error["msg"])
    return JSONResponse(content={"error": "; ".join(details)}, status_code=400)


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """
    Собирает приложение FastAPI.

    Args:
        session_factory: Готовая фабрика сессий (например, в тестах).
                         Если не передана, создается в lifespan.

    Returns:
        Настроенный экземпляр FastAPI.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(lifespan=lifespan)
    application.state.session_factory = session_factory

    application.add_exception_handler(
        InventoryError, inventory_error_handler  # type: ignore[arg-type]
    )
    application.add_exception_handler(
        RequestValidationError, validation_error_handler  # type: ignore[arg-type]
    )

    application.include_router(products.router)
    application.include_router(orders.router)
    return application


# --- Приложение FastAPI ---
app = create_app()


# --- Точка входа для локального запуска ---
if __name__ == "__main__":
    uvicorn.run(
        "inventory_service.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
