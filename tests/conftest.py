import time

import pytest
import pytest_asyncio

from file_record_client import FileRecordService, create_file_record_service
from file_record_client.config import FileRecordClientConfig, PostgresConfig, RecordsConfig, reset_settings
from file_record_client.db.base import create_engine_from_config, create_tables


@pytest.fixture
def sqlite_dsn(tmp_path) -> str:
    """Отдельный файл SQLite на каждый тест."""
    return f"sqlite+aiosqlite:///{tmp_path / 'records.db'}"


@pytest.fixture
def file() -> dict:
    return {
        "checksum": "aoewigh3240239r3rhf0m30fj0324",
        "format": "pdf",
        "createdAt": int(time.time() * 1000),
        "expires": 1735948800000,
        "path": "mytenant/aoewigh3240239r3rhf0m30fj0324.pdf",
    }


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest_asyncio.fixture
async def service(sqlite_dsn) -> FileRecordService:
    """
    Сервис, собранный фабрикой, как в реальном приложении,
    поверх пустой таблицы files.
    """
    config = FileRecordClientConfig(
        postgres=PostgresConfig(dsn=sqlite_dsn),
        records=RecordsConfig(accepted_formats=["pdf"]),
    )
    engine = create_engine_from_config(config.postgres)
    await create_tables(engine)
    await engine.dispose()

    service = create_file_record_service(config)
    yield service
    await service.aclose()
