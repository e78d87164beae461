"""Те же сценарии на настоящем PostgreSQL (нужен Docker): FILE_RECORDS_PG_TESTS=1 pytest -m postgres"""
import os

import pytest
import pytest_asyncio

from file_record_client import create_file_record_service
from file_record_client.config import FileRecordClientConfig, PostgresConfig
from file_record_client.db.base import create_engine_from_config, create_tables
from file_record_client.exceptions import ValidationError
from file_record_client.models.file_record import FileKey

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.asyncio,
    pytest.mark.skipif(os.environ.get("FILE_RECORDS_PG_TESTS") != "1", reason="FILE_RECORDS_PG_TESTS is not set"),
]


@pytest.fixture(scope="module")
def pg_config():
    postgres_module = pytest.importorskip("testcontainers.postgres")
    postgres = postgres_module.PostgresContainer("postgres:15")
    postgres.start()
    try:
        yield PostgresConfig(
            user=postgres.username,
            password=postgres.password,
            db=postgres.dbname,
            host=postgres.get_container_host_ip(),
            port=int(postgres.get_exposed_port(5432)),
        )
    finally:
        postgres.stop()


@pytest_asyncio.fixture
async def pg_service(pg_config):
    engine = create_engine_from_config(pg_config)
    await create_tables(engine)
    await engine.dispose()

    service = create_file_record_service(FileRecordClientConfig(postgres=pg_config))
    yield service
    await service.aclose()


async def test_lifecycle_on_postgres(pg_service, file):
    key = FileKey(file["checksum"], file["format"])
    await pg_service.destroy(key)

    await pg_service.create(file)
    assert (await pg_service.get(key)).to_wire() == file

    file["path"] = "mytenant/updated.pdf"
    await pg_service.update(file)
    assert (await pg_service.get(key)).path == "mytenant/updated.pdf"

    assert await pg_service.destroy(key) is True
    assert await pg_service.get(key) is None


async def test_invalid_record_never_reaches_postgres(pg_service, file):
    key = FileKey(file["checksum"], file["format"])
    await pg_service.destroy(key)
    file["createdAt"] = "2015-03-25T12:00:00"

    with pytest.raises(ValidationError):
        await pg_service.create(file)
    assert await pg_service.get(key) is None
