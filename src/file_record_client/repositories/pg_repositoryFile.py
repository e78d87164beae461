import asyncio
import logging
from typing import Optional

from sqlalchemy import delete, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from file_record_client.db.base import get_session
from file_record_client.db.file_orm import FileRecordORM
from file_record_client.exceptions import StoreError
from file_record_client.models.file_record import FileKey, FileRecord

logger = logging.getLogger(__name__)

# Диалекты с нативным INSERT .. ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Сбои хранилища; OverflowError поднимает драйвер SQLite на значениях вне INTEGER
_STORE_FAILURES = (SQLAlchemyError, OSError, asyncio.TimeoutError, OverflowError)


class FileRecordRepository:
    """Хранилище записей о файлах, ключ (checksum, format). Валидацию не выполняет."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def check_connection(self):
        """Проверяет соединение с базой данных, выполняя простой запрос."""
        logger.debug("Checking store connection...")
        async with get_session(self._session_factory) as session:
            try:
                await session.execute(text("SELECT 1"))
                logger.debug("Store connection successful.")
            except _STORE_FAILURES as e:
                logger.error(f"Store connection failed: {e}")
                raise StoreError("Failed to connect to the record store.") from e

    async def put(self, record: FileRecord) -> FileRecord:
        """Безусловный upsert по ключу записи, последний писатель побеждает."""
        logger.debug("put %s", record.key)
        async with get_session(self._session_factory) as session:
            dialect = session.get_bind().dialect.name
            if dialect not in _UPSERT_INSERTS:
                raise StoreError(f"Upsert is not supported for dialect {dialect!r}")
            try:
                stmt = _UPSERT_INSERTS[dialect](FileRecordORM).values(
                    checksum=record.checksum,
                    format=record.format,
                    created_at=record.created_at,
                    expires=record.expires,
                    path=record.path,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["checksum", "format"],
                    set_={
                        "created_at": stmt.excluded.created_at,
                        "expires": stmt.excluded.expires,
                        "path": stmt.excluded.path,
                    },
                )
                await session.execute(stmt)
                await session.commit()
                return record
            except _STORE_FAILURES as e:
                await session.rollback()
                logger.error("put failed for %s: %s", record.key, e)
                raise StoreError(f"Failed to save file record: {e}") from e

    async def get(self, key: FileKey) -> Optional[FileRecord]:
        logger.debug("get %s", key)
        async with get_session(self._session_factory) as session:
            try:
                res = await session.execute(
                    select(FileRecordORM).where(
                        FileRecordORM.checksum == key.checksum,
                        FileRecordORM.format == key.format,
                    )
                )
                orm = res.scalar_one_or_none()
                return orm.to_pydantic() if orm else None
            except _STORE_FAILURES as e:
                logger.error("get failed for %s: %s", key, e)
                raise StoreError(f"Failed to read file record: {e}") from e

    async def update(self, record: FileRecord) -> FileRecord:
        # Полная замена записи, без слияния полей
        return await self.put(record)

    async def delete(self, key: FileKey) -> bool:
        logger.debug("delete %s", key)
        async with get_session(self._session_factory) as session:
            try:
                res = await session.execute(
                    delete(FileRecordORM).where(
                        FileRecordORM.checksum == key.checksum,
                        FileRecordORM.format == key.format,
                    )
                )
                await session.commit()
                return res.rowcount > 0
            except _STORE_FAILURES as e:
                await session.rollback()
                logger.error("delete failed for %s: %s", key, e)
                raise StoreError(f"Failed to delete file record: {e}") from e
