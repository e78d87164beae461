import logging, sys, json
from typing import Optional

from .config import get_settings


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        file_key = getattr(record, "file_key", None)
        if file_key is not None:
            base["file_key"] = {"checksum": file_key[0], "format": file_key[1]}
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure(level: Optional[str] = None):
    level_name = level or get_settings().log_level
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=getattr(logging, level_name.upper(), logging.INFO), handlers=[handler])
