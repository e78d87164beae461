import json
import logging
import sys

from file_record_client.logging import JsonFormatter
from file_record_client.models.file_record import FileKey


def test_json_formatter_renders_message_and_exception():
    try:
        raise RuntimeError("store is down")
    except RuntimeError:
        record = logging.LogRecord(
            "file_record_client.repositories", logging.ERROR, __file__, 1,
            "put failed for %s", ("abc/pdf",), exc_info=sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert payload["name"] == "file_record_client.repositories"
    assert payload["msg"] == "put failed for abc/pdf"
    assert "RuntimeError: store is down" in payload["exc_info"]


def test_json_formatter_adds_file_key_from_extra():
    logger = logging.getLogger("file_record_client.service")
    record = logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "Created file record", (), None,
        extra={"file_key": FileKey("abc", "pdf")},
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["file_key"] == {"checksum": "abc", "format": "pdf"}
    assert "exc_info" not in payload
