# Файл: src/file_record_client/config.py

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

# --- 1. Настройки хранилища записей (PostgreSQL) ---
class PostgresConfig(BaseModel):
    user: str = "postgres"
    password: str = "postgres"
    host: str = "localhost"
    port: int = 5432
    db: str = "file_records"
    # Полный async-URL SQLAlchemy, перекрывает поля выше (например sqlite+aiosqlite:///records.db)
    dsn: str | None = None

    pool_size: int = 5
    max_overflow: int = 5
    pool_timeout: int = 30
    pool_recycle: int = 1800
    pool_pre_ping: bool = True
    application_name: str = "file_record_client"

    def get_pg_dsn(self) -> str:
        """Собирает DSN для SQLAlchemy из полей этого объекта."""
        if self.dsn:
            return self.dsn
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"


# --- 2. Правила схемы записей ---
class RecordsConfig(BaseModel):
    accepted_formats: list[str] = Field(default_factory=lambda: ["pdf"])


# --- 3. Явная конфигурация для фабрики ---
class FileRecordClientConfig(BaseModel):
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    records: RecordsConfig = Field(default_factory=RecordsConfig)


# --- 4. Settings читает .env и переменные окружения ---
class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter='__',
        extra='ignore'
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    records: RecordsConfig = Field(default_factory=RecordsConfig)


_cached_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """
    Возвращает синглтон-экземпляр настроек, создавая его при первом вызове.
    Это предотвращает ошибки валидации при импорте.
    """
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = Settings()
    return _cached_settings


def reset_settings() -> None:
    """Сбрасывает кэш, следующий get_settings() перечитает окружение."""
    global _cached_settings
    _cached_settings = None
