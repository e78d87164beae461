from .pg_repositoryFile import FileRecordRepository

__all__ = ["FileRecordRepository"]
