import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from file_record_client.exceptions import StoreError
from file_record_client.models.file_record import FileKey, FileRecord
from file_record_client.repositories import FileRecordRepository
from file_record_client.validation import DEFAULT_FORMATS, Candidate, validate

logger = logging.getLogger(__name__)


class FileRecordService:
    """
    Единая точка доступа к записям о файлах.

    create/update валидируют запись до первого обращения к хранилищу,
    get/destroy работают только по ключу.
    """

    def __init__(
        self,
        repository: FileRecordRepository,
        accepted_formats: Iterable[str] = DEFAULT_FORMATS,
        engine: AsyncEngine | None = None,
    ):
        self.repo = repository
        self.accepted_formats = frozenset(accepted_formats)
        self._engine = engine

    async def check_connections(self) -> dict[str, str]:
        statuses = {}
        try:
            await self.repo.check_connection()
            statuses["postgres"] = "ok"
        except StoreError as e:
            statuses["postgres"] = f"failed: {e}"
        return statuses

    async def create(self, candidate: Candidate) -> FileRecord:
        record = validate(candidate, self.accepted_formats)
        await self.repo.put(record)
        logger.info("Created file record %s/%s", record.checksum, record.format, extra={"file_key": record.key})
        return record

    async def get(self, key: FileKey) -> Optional[FileRecord]:
        return await self.repo.get(key)

    async def update(self, candidate: Candidate) -> FileRecord:
        record = validate(candidate, self.accepted_formats)
        await self.repo.update(record)
        logger.info("Updated file record %s/%s", record.checksum, record.format, extra={"file_key": record.key})
        return record

    async def destroy(self, key: FileKey) -> bool:
        removed = await self.repo.delete(key)
        if removed:
            logger.info("Deleted file record %s/%s", key.checksum, key.format, extra={"file_key": key})
        else:
            logger.debug("File record %s/%s already absent", key.checksum, key.format, extra={"file_key": key})
        return removed

    async def aclose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
