# Файл: src/file_record_client/__init__.py

from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from .config import get_settings, FileRecordClientConfig, PostgresConfig, RecordsConfig
from .db.base import create_engine_from_config
from .models import FileKey, FileRecord
from .repositories import FileRecordRepository
from .service import FileRecordService
from .validation import DEFAULT_FORMATS, ValidationRule, collect_violations, validate
from .exceptions import *


def create_file_record_service(config: Optional[FileRecordClientConfig] = None) -> FileRecordService:
    """
    Фабричная функция для создания и конфигурации FileRecordService.

    :param config: Единый объект с настройками.
                   Если не предоставлен, используются переменные окружения.
    :return: Сконфигурированный экземпляр FileRecordService.
    """
    if config is None:
        s = get_settings()
        config = FileRecordClientConfig(postgres=s.postgres, records=s.records)

    engine = create_engine_from_config(config.postgres)
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)

    return FileRecordService(
        repository=FileRecordRepository(session_factory),
        accepted_formats=config.records.accepted_formats,
        engine=engine,
    )


__all__ = [
    "FileRecordService", "create_file_record_service",
    "FileRecordClientConfig", "PostgresConfig", "RecordsConfig",
    "FileKey", "FileRecord", "FileRecordRepository",
    "DEFAULT_FORMATS", "ValidationRule", "collect_violations", "validate",
    "FileRecordClientError", "ValidationError", "StoreError",
]
