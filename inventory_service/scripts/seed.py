"""
Заполнение базы синтетическими товарами и заказами.

Примеры:
    python -m inventory_service.scripts.seed products --total 1000 --batch 100
    python -m inventory_service.scripts.seed orders --total 10000
"""

import argparse
import asyncio
import logging
import random
from decimal import Decimal

from sqlalchemy import func, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from inventory_service.core.config import settings
from inventory_service.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
)
from inventory_service.db.models import Product
from inventory_service.db.session import (
    STORAGE_ERRORS,
    create_engine,
    create_session_factory,
)
from inventory_service.services import order_service


async def seed_products(
    session_factory: async_sessionmaker[AsyncSession],
    total: int = 1000,
    batch: int = 100,
    rng: random.Random | None = None,
) -> int:
    """
    Вставляет товары пачками, одна транзакция на пачку.

    Ошибка вставки пачки логируется, остальные пачки продолжают вставляться.

    Args:
        session_factory: Фабрика сессий.
        total: Сколько товаров создать.
        batch: Размер пачки.
        rng: Генератор случайных чисел (для воспроизводимости).

    Returns:
        Количество реально вставленных товаров.
    """
    rng = rng or random.Random()
    inserted = 0

    for start in range(0, total, batch):
        end = min(start + batch, total)
        rows = [
            {
                "nombre": f"Producto_{n + 1}",
                "precio": Decimal(rng.randint(1, 100)),
                "stock": rng.randint(1, 50),
            }
            for n in range(start, end)
        ]
        try:
            async with session_factory() as session, session.begin():
                await session.execute(insert(Product), rows)
        except STORAGE_ERRORS:
            logging.exception("Failed to insert products %s to %s", start + 1, end)
            continue
        inserted += len(rows)
        logging.info("Inserted products %s to %s", start + 1, end)

    return inserted


async def seed_orders(
    session_factory: async_sessionmaker[AsyncSession],
    total: int = 10000,
    rng: random.Random | None = None,
) -> int:
    """
    Оформляет синтетические заказы через обычное оформление заказа.

    Заказы на отсутствующие товары и сверх остатка пропускаются.

    Returns:
        Количество оформленных заказов.
    """
    rng = rng or random.Random()

    async with session_factory() as session:
        products_count = await session.scalar(select(func.count()).select_from(Product))
    if not products_count:
        logging.warning("No products found, nothing to order")
        return 0

    placed = 0
    for i in range(1, total + 1):
        product_id = (i % products_count) + 1
        quantity = rng.randint(1, 5)
        try:
            await order_service.place_order(session_factory, product_id, quantity)
        except (ProductNotFoundError, InsufficientStockError) as e:
            logging.warning("Order %s skipped: %s", i, e.message)
            continue
        placed += 1
        if i % 1000 == 0:
            logging.info("Processed %s orders", i)

    return placed


async def run(command: str, total: int, batch: int) -> None:
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        if command == "products":
            count = await seed_products(session_factory, total=total, batch=batch)
            logging.info("Seeding complete: %s products", count)
        else:
            count = await seed_orders(session_factory, total=total)
            logging.info("Seeding complete: %s orders", count)
    finally:
        await engine.dispose()


def positive_int(value: str) -> int:
    """Тип аргумента argparse: целое число больше нуля."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than zero")
    return number


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fill the database with test data.")
    parser.add_argument("command", choices=["products", "orders"])
    parser.add_argument("--total", type=positive_int, default=None)
    parser.add_argument("--batch", type=positive_int, default=100)
    args = parser.parse_args(argv)

    if args.total is None:
        args.total = 1000 if args.command == "products" else 10000

    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(run(args.command, args.total, args.batch))


if __name__ == "__main__":
    main()
