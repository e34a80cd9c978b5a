"""
Сервисный слой для оформления заказов.

Оформление заказа выполняется одной транзакцией: условное списание остатка,
затем вставка заказа, затем commit. Достаточность остатка проверяет сама БД
в WHERE того же UPDATE, поэтому два параллельных заказа не могут оба
увидеть достаточный остаток и увести его в минус.
"""

import asyncio
import logging
from collections.abc import Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from inventory_service.core.config import settings
from inventory_service.core.exceptions import (
    InsufficientStockError,
    InvalidOrderError,
    InventoryError,
    ProductNotFoundError,
    StorageFailureError,
)
from inventory_service.db.models import Order, Product
from inventory_service.db.session import STORAGE_ERRORS, storage_errors


async def place_order(
    session_factory: async_sessionmaker[AsyncSession],
    product_id: int,
    quantity: int,
    timeout: float | None = None,
) -> Order:
    """
    Оформляет заказ и списывает остаток товара как одно атомарное действие.

    Для каждого вызова из пула берется отдельное соединение, которое
    возвращается в пул при любом исходе.

    Args:
        session_factory: Фабрика сессий, которой владеет вызывающий код.
        product_id: ID заказываемого товара.
        quantity: Количество, строго больше нуля.
        timeout: Предельное время на всю транзакцию в секундах.
                 По умолчанию берется из настроек.

    Returns:
        Созданный заказ с ID и временем, проставленным сервером БД.

    Raises:
        InvalidOrderError: Если количество не является положительным целым.
        ProductNotFoundError: Если товара с таким ID нет.
        InsufficientStockError: Если остатка не хватает.
        StorageFailureError: При сбое БД или истечении таймаута.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidOrderError("La cantidad debe ser un entero mayor que cero")

    if timeout is None:
        timeout = settings.ORDER_TIMEOUT

    try:
        async with asyncio.timeout(timeout):
            order = await _place_order_tx(session_factory, product_id, quantity)
    except InventoryError:
        raise
    except TimeoutError as e:
        logging.error(
            "Order for product %s timed out after %ss", product_id, timeout
        )
        raise StorageFailureError("Tiempo de espera agotado") from e
    except STORAGE_ERRORS as e:
        logging.exception("Storage failure while placing order for %s", product_id)
        raise StorageFailureError() from e

    logging.info(
        "Order %s placed: product %s, quantity %s", order.id, product_id, quantity
    )
    return order


async def _place_order_tx(
    session_factory: async_sessionmaker[AsyncSession],
    product_id: int,
    quantity: int,
) -> Order:
    async with session_factory() as session, session.begin():
        # Проверка и списание одним оператором
        statement = (
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(statement)

        if result.rowcount == 0:
            exists = await session.scalar(
                select(Product.id).where(Product.id == product_id)
            )
            if exists is None:
                logging.info("Order rejected: product %s not found", product_id)
                raise ProductNotFoundError(product_id)
            logging.info(
                "Order rejected: insufficient stock for product %s (requested %s)",
                product_id,
                quantity,
            )
            raise InsufficientStockError(product_id, quantity)

        order = Order(producto_id=product_id, cantidad=quantity)
        session.add(order)
        await session.flush()
        await session.refresh(order)

    return order


async def get_all_orders(session: AsyncSession) -> Sequence[Order]:
    """
    Возвращает список всех заказов.

    Args:
        session: Сессия базы данных.

    Returns:
        Последовательность объектов Order.
    """
    statement = select(Order).order_by(Order.id)
    with storage_errors():
        result = await session.execute(statement)
    return result.scalars().all()
