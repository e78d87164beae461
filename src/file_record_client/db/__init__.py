from .base import Base, create_engine_from_config, create_tables, get_session
from .file_orm import FileRecordORM

__all__ = ["Base", "FileRecordORM", "create_engine_from_config", "create_tables", "get_session"]
