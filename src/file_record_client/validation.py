"""
Schema rules for file records.

The rules live on :class:`FileRecord`; this module runs them with the
accepted-format set in the validation context and maps pydantic errors to
:class:`ValidationRule`. :func:`validate` reports the first violation in rule
order and keeps the full list on the raised error.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from file_record_client.exceptions import ValidationError
from file_record_client.models.file_record import DEFAULT_FORMATS, FileRecord

Candidate = Union[Mapping[str, Any], FileRecord]


class ValidationRule(str, Enum):
    MISSING_CHECKSUM = "MissingChecksum"
    MISSING_FORMAT = "MissingFormat"
    INVALID_FORMAT = "InvalidFormat"
    MISSING_CREATED_AT = "MissingCreatedAt"
    NON_NUMERIC_CREATED_AT = "NonNumericCreatedAt"
    MISSING_EXPIRATION = "MissingExpiration"
    NON_NUMERIC_EXPIRATION = "NonNumericExpiration"
    MISSING_PATH = "MissingPath"


_RULE_ORDER = list(ValidationRule)

# wire name -> python name
_ALIASES = {"createdAt": "created_at"}

# field -> (rule when absent, rule when present but wrong)
_FIELD_RULES = {
    "checksum": (ValidationRule.MISSING_CHECKSUM, ValidationRule.MISSING_CHECKSUM),
    "format": (ValidationRule.MISSING_FORMAT, ValidationRule.INVALID_FORMAT),
    "createdAt": (ValidationRule.MISSING_CREATED_AT, ValidationRule.NON_NUMERIC_CREATED_AT),
    "created_at": (ValidationRule.MISSING_CREATED_AT, ValidationRule.NON_NUMERIC_CREATED_AT),
    "expires": (ValidationRule.MISSING_EXPIRATION, ValidationRule.NON_NUMERIC_EXPIRATION),
    "path": (ValidationRule.MISSING_PATH, ValidationRule.MISSING_PATH),
}


def _as_payload(candidate: Candidate) -> Dict[str, Any]:
    if isinstance(candidate, FileRecord):
        return candidate.to_wire()
    if not isinstance(candidate, Mapping):
        raise TypeError(f"File record candidate must be a mapping or FileRecord, got {type(candidate).__name__}")
    payload = dict(candidate)
    for wire, name in _ALIASES.items():
        python_value = payload.pop(name, None)
        if payload.get(wire) is None and python_value is not None:
            payload[wire] = python_value
    return payload


def _is_absent(error: Mapping[str, Any]) -> bool:
    return (
        error["type"] in ("missing", "string_too_short")
        or error.get("input", "") is None
    )


def _rules_from(exc: PydanticValidationError) -> List[ValidationRule]:
    found = set()
    for error in exc.errors():
        absent_rule, invalid_rule = _FIELD_RULES[error["loc"][0]]
        found.add(absent_rule if _is_absent(error) else invalid_rule)
    return [rule for rule in _RULE_ORDER if rule in found]


def _run(candidate: Candidate, accepted_formats: Iterable[str]) -> FileRecord:
    return FileRecord.model_validate(
        _as_payload(candidate),
        context={"accepted_formats": frozenset(accepted_formats)},
    )


def collect_violations(candidate: Candidate, accepted_formats: Iterable[str] = DEFAULT_FORMATS) -> List[ValidationRule]:
    """Return every violated rule in rule order; empty list means the candidate is valid."""
    try:
        _run(candidate, accepted_formats)
    except PydanticValidationError as e:
        return _rules_from(e)
    return []


def validate(candidate: Candidate, accepted_formats: Iterable[str] = DEFAULT_FORMATS) -> FileRecord:
    """
    Check ``candidate`` against the file record schema.

    :param candidate: mapping with wire (``createdAt``) or python (``created_at``) keys, or a FileRecord.
    :param accepted_formats: formats a record may carry.
    :return: the validated record, field values unchanged.
    :raises ValidationError: ``rule`` names the first violated rule.
    """
    try:
        return _run(candidate, accepted_formats)
    except PydanticValidationError as e:
        raise ValidationError(_rules_from(e)) from e
