from __future__ import annotations

import math
from typing import Any, Dict, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

DEFAULT_FORMATS = frozenset({"pdf"})

# BIGINT в хранилище
TIMESTAMP_MIN = -(2 ** 63)
TIMESTAMP_MAX = 2 ** 63 - 1


class FileKey(NamedTuple):
    """Composite primary key of a file record."""
    checksum: str
    format: str


class FileRecord(BaseModel):
    """
    Metadata of one file kept in the object store.

    Timestamps are epoch milliseconds. On the wire ``created_at`` is ``createdAt``.
    Accepted formats come from the validation context
    (``context={"accepted_formats": ...}``), ``DEFAULT_FORMATS`` otherwise.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, from_attributes=True)

    checksum: str = Field(strict=True, min_length=1)
    format: str = Field(strict=True, min_length=1)
    created_at: int = Field(alias="createdAt", ge=TIMESTAMP_MIN, le=TIMESTAMP_MAX)
    expires: int = Field(ge=TIMESTAMP_MIN, le=TIMESTAMP_MAX)
    path: str = Field(strict=True, min_length=1)

    @field_validator("created_at", "expires", mode="before")
    @classmethod
    def check_epoch_millis(cls, value: Any) -> int:
        # bool is an int subclass; date strings are never accepted
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PydanticCustomError("timestamp_type", "timestamp must be a number of epoch milliseconds")
        if isinstance(value, float):
            if not (math.isfinite(value) and value.is_integer()):
                raise PydanticCustomError("timestamp_type", "timestamp must be a whole number of milliseconds")
            return int(value)
        return value

    @field_validator("format")
    @classmethod
    def check_accepted_format(cls, value: str, info: ValidationInfo) -> str:
        formats = (info.context or {}).get("accepted_formats", DEFAULT_FORMATS)
        if value not in formats:
            raise PydanticCustomError(
                "format_not_accepted",
                "format '{format}' is not one of {accepted}",
                {"format": value, "accepted": sorted(formats)},
            )
        return value

    @property
    def key(self) -> FileKey:
        return FileKey(self.checksum, self.format)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
