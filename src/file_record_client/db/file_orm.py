from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from file_record_client.db.base import Base
from file_record_client.models.file_record import FileRecord


class FileRecordORM(Base):
    __tablename__ = "files"

    checksum: Mapped[str] = mapped_column(String(128), primary_key=True)
    format: Mapped[str] = mapped_column(String(32), primary_key=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires: Mapped[int] = mapped_column(BigInteger, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)

    def to_pydantic(self) -> FileRecord:
        # Набор форматов мог измениться с момента записи строки
        return FileRecord.model_validate(
            {
                "checksum": self.checksum,
                "format": self.format,
                "createdAt": self.created_at,
                "expires": self.expires,
                "path": self.path,
            },
            context={"accepted_formats": {self.format}},
        )
