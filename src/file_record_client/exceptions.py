from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from file_record_client.validation import ValidationRule


class FileRecordClientError(Exception):
    """Base class."""


class ValidationError(FileRecordClientError):
    """A candidate record broke one or more schema rules. Raised before the store is touched."""

    def __init__(self, violations: Sequence["ValidationRule"]):
        if not violations:
            raise ValueError("ValidationError needs at least one violated rule")
        self.violations = list(violations)
        self.rule = self.violations[0]
        super().__init__(f"File record failed validation: {', '.join(v.value for v in self.violations)}")


class StoreError(FileRecordClientError):
    pass


__all__ = ["FileRecordClientError", "ValidationError", "StoreError"]
