"""HTTP-обработчики для заказов."""

from typing import Any

from fastapi import APIRouter

from inventory_service.db.models import Order, OrderCreate
from inventory_service.db.session import SessionDep, SessionFactoryDep
from inventory_service.services import order_service

router = APIRouter(prefix="/pedidos", tags=["pedidos"])


@router.post("")
async def handle_place_order(
    data: OrderCreate, session_factory: SessionFactoryDep
) -> dict[str, Any]:
    """
    Оформляет заказ со списанием остатка.

    Ошибки (нет товара, не хватает остатка, сбой БД) превращаются
    в ответ {"error": ...} обработчиками исключений приложения.
    """
    order = await order_service.place_order(
        session_factory, data.producto_id, data.cantidad
    )
    return {"id": order.id, "mensaje": "Pedido registrado"}


@router.get("")
async def handle_list_orders(session: SessionDep) -> list[Order]:
    """
    Показывает список всех заказов.
    """
    return list(await order_service.get_all_orders(session))
