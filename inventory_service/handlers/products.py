"""HTTP-обработчики для управления товарами."""

from typing import Any

from fastapi import APIRouter

from inventory_service.core.config import settings
from inventory_service.db.models import Product, ProductCreate, ProductUpdate
from inventory_service.db.session import SessionDep
from inventory_service.services import product_service

router = APIRouter(prefix="/productos", tags=["productos"])


@router.post("")
async def handle_create_product(
    data: ProductCreate, session: SessionDep
) -> dict[str, Any]:
    """
    Создает новый товар.
    """
    product = await product_service.create_product(session, data)
    return {"id": product.id, "mensaje": "Producto creado"}


@router.get("")
async def handle_list_products(session: SessionDep) -> list[Product]:
    """
    Показывает список всех товаров на складе.
    """
    return list(await product_service.get_all_products(session))


@router.get("/bajo-stock")
async def handle_list_low_stock(session: SessionDep) -> list[Product]:
    """
    Показывает товары, остаток которых ниже порога из настроек.
    """
    products = await product_service.get_low_stock_products(
        session, settings.LOW_STOCK_THRESHOLD
    )
    return list(products)


@router.put("/{product_id}")
async def handle_update_product(
    product_id: int, data: ProductUpdate, session: SessionDep
) -> dict[str, str]:
    await product_service.update_product(session, product_id, data)
    return {"mensaje": "Producto actualizado"}


@router.delete("/{product_id}")
async def handle_delete_product(
    product_id: int, session: SessionDep
) -> dict[str, str]:
    await product_service.delete_product(session, product_id)
    return {"mensaje": "Producto eliminado"}
