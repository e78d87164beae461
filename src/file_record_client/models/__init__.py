from .file_record import DEFAULT_FORMATS, FileKey, FileRecord

__all__ = ["DEFAULT_FORMATS", "FileKey", "FileRecord"]
