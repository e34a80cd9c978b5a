"""Сервисный слой для управления товарами."""

import logging
from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from inventory_service.core.exceptions import ProductInUseError, ProductNotFoundError
from inventory_service.db.models import Order, Product, ProductCreate, ProductUpdate
from inventory_service.db.session import storage_errors


async def create_product(session: AsyncSession, data: ProductCreate) -> Product:
    """
    Создает новый товар в базе данных.

    Args:
        session: Сессия базы данных.
        data: Название, цена и начальный остаток товара.

    Returns:
        Созданный объект товара.

    Raises:
        StorageFailureError: При сбое БД.
    """
    db_product = Product.model_validate(data)
    with storage_errors():
        session.add(db_product)
        await session.commit()
        await session.refresh(db_product)
    logging.info("Product %s created with stock %s", db_product.id, db_product.stock)
    return db_product


async def get_all_products(session: AsyncSession) -> Sequence[Product]:
    """
    Возвращает список всех товаров.

    Args:
        session: Сессия базы данных.

    Returns:
        Последовательность объектов Product.
    """
    statement = select(Product).order_by(Product.id)
    with storage_errors():
        result = await session.execute(statement)
    return result.scalars().all()


async def get_low_stock_products(
    session: AsyncSession, threshold: int
) -> Sequence[Product]:
    """
    Возвращает товары, остаток которых меньше порога.

    Args:
        session: Сессия базы данных.
        threshold: Порог остатка (не включительно).

    Returns:
        Последовательность объектов Product.
    """
    statement = select(Product).where(Product.stock < threshold).order_by(Product.id)
    with storage_errors():
        result = await session.execute(statement)
    return result.scalars().all()


async def update_product(
    session: AsyncSession, product_id: int, data: ProductUpdate
) -> Product:
    """
    Полностью заменяет название, цену и остаток товара.

    Это административная правка; оформление заказов остаток через нее
    не меняет.

    Raises:
        ProductNotFoundError: Если товар не найден.
        StorageFailureError: При сбое БД.
    """
    with storage_errors():
        db_product = await session.get(Product, product_id)
        if not db_product:
            raise ProductNotFoundError(product_id)

        db_product.sqlmodel_update(data.model_dump())
        session.add(db_product)
        await session.commit()
        await session.refresh(db_product)
    return db_product


async def delete_product(session: AsyncSession, product_id: int) -> None:
    """
    Удаляет товар, если на него не ссылается ни один заказ.

    Raises:
        ProductNotFoundError: Если товар не найден.
        ProductInUseError: Если по товару уже есть заказы.
        StorageFailureError: При сбое БД, в том числе если заказ появился
                             между проверкой и удалением (его отсекает FK).
    """
    with storage_errors():
        db_product = await session.get(Product, product_id)
        if not db_product:
            raise ProductNotFoundError(product_id)

        orders_count = await session.scalar(
            select(func.count())
            .select_from(Order)
            .where(Order.producto_id == product_id)
        )
        if orders_count:
            raise ProductInUseError(product_id)

        await session.delete(db_product)
        await session.commit()
    logging.info("Product %s deleted", product_id)
