"""Настройки конфигурации приложения."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Загружает настройки из файла .env.

    Атрибуты:
        model_config: Конфигурация для Pydantic моделей.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # База данных
    POSTGRES_USER: str = "inventario"
    POSTGRES_PASSWORD: str = "inventario"
    POSTGRES_DB: str = "inventario"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    # Полная строка подключения, перекрывает POSTGRES_* (например, для SQLite)
    DATABASE_URL: str | None = None

    # Пул соединений
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    # Сколько секунд ждать свободное соединение из пула
    DB_POOL_TIMEOUT: float = 5.0

    # Предельное время оформления одного заказа, включая commit
    ORDER_TIMEOUT: float = 10.0

    # Порог для списка товаров с низким остатком
    LOW_STOCK_THRESHOLD: int = 10

    LOG_LEVEL: str = "INFO"

    # HTTP-сервер
    APP_HOST: str = "0.0.0.0"  # noqa: S104
    APP_PORT: int = 3000

    @property
    def database_url(self) -> str:
        """
        Собирает строку подключения к базе данных.

        Returns:
            Строка подключения для SQLAlchemy.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
