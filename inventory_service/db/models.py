"""Модели базы данных проекта."""

import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, func
from sqlmodel import Field, SQLModel


class ProductBase(SQLModel):
    """Общие поля товара для таблицы и входящих запросов."""

    nombre: str = Field(max_length=100)
    precio: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0)


class Product(ProductBase, table=True):
    """Модель товара на складе."""

    __tablename__ = "Productos"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_productos_stock_non_negative"),
        CheckConstraint("precio >= 0", name="ck_productos_precio_non_negative"),
    )

    id: int | None = Field(default=None, primary_key=True)


class ProductCreate(ProductBase):
    """Тело запроса на создание товара."""


class ProductUpdate(ProductBase):
    """Тело запроса на полную замену полей товара."""


class OrderCreate(SQLModel):
    """Тело запроса на оформление заказа."""

    producto_id: int
    cantidad: int = Field(gt=0)


class Order(SQLModel, table=True):
    """
    Модель заказа.

    Заказ создается только вместе со списанием остатка в той же транзакции
    и после создания не изменяется.
    """

    __tablename__ = "Pedidos"
    __table_args__ = (
        CheckConstraint("cantidad > 0", name="ck_pedidos_cantidad_positive"),
    )

    id: int | None = Field(default=None, primary_key=True)
    producto_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("Productos.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )
    )
    cantidad: int
    # Время проставляет сервер БД
    fecha: datetime.datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
