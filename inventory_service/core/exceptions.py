"""
Иерархия исключений сервиса складского учета.

Все ошибки бизнес-логики наследуются от `InventoryError`. Обработчики
FastAPI превращают их в ответ вида {"error": <сообщение>}, поэтому текст
сообщения предназначен для конечного пользователя и передается как есть.
"""


class InventoryError(Exception):
    """
    Базовое исключение сервиса.

    Атрибуты:
        code: Машиночитаемый код ошибки.
        status_code: HTTP-статус, с которым ошибка уходит клиенту.
        message: Сообщение для пользователя.
    """

    code: str = "inventory_error"
    status_code: int = 400
    default_message: str = "Error de inventario"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidOrderError(InventoryError):
    """Некорректные входные данные заказа. Отклоняется до обращения к БД."""

    code = "invalid_order"
    default_message = "Datos del pedido inválidos"


class ProductNotFoundError(InventoryError):
    """Товар с указанным ID не существует."""

    code = "product_not_found"
    status_code = 404
    default_message = "Producto no encontrado"

    def __init__(self, product_id: int, message: str | None = None) -> None:
        self.product_id = product_id
        super().__init__(message)


class InsufficientStockError(InventoryError):
    """
    Остатка товара не хватает для списания запрошенного количества.

    Сообщение фиксированное: интерфейс показывает его пользователю напрямую.
    """

    code = "insufficient_stock"
    status_code = 409
    default_message = "Stock insuficiente"

    def __init__(self, product_id: int, requested: int) -> None:
        self.product_id = product_id
        self.requested = requested
        super().__init__()


class ProductInUseError(InventoryError):
    """На товар ссылаются заказы, поэтому удалить его нельзя."""

    code = "product_in_use"
    status_code = 409
    default_message = "El producto tiene pedidos asociados"

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__()


class StorageFailureError(InventoryError):
    """
    Сбой хранилища: нет соединения, нарушено ограничение, истек таймаут.

    Транзакция к моменту выброса уже откатена.
    """

    code = "storage_failure"
    status_code = 503
    default_message = "Error de almacenamiento"
