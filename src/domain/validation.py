import re
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any, List, Type

from pydantic import AnyUrl, TypeAdapter, ValidationError

from src.domain.models import Category, Complexity, Language

REQUIRED_FIELDS = (
    "id", "name", "description", "author", "repository",
    "category", "language", "complexity", "features", "lastUpdated",
)
ID_PATTERN = re.compile(r"[a-z0-9-]+")
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

_url_adapter = TypeAdapter(AnyUrl)


def _is_missing(value: Any) -> bool:
    # Falsy scalars count as missing; an empty list is still present.
    if value is None:
        return True
    if isinstance(value, (str, bool, int, float)):
        return not value
    return False


def is_valid_url(value: Any) -> bool:
    """True when ``value`` parses as an absolute URL."""
    if not isinstance(value, str):
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_date(value: Any) -> bool:
    """
    True when ``value`` is a canonical ``YYYY-MM-DD`` string naming a real
    calendar date, e.g. rejects ``2025-02-30`` and ``2025-2-5``.
    """
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return False
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False
    return parsed.isoformat() == value


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and ID_PATTERN.fullmatch(value) is not None


def _check_enum(candidate: Mapping, field: str, enum_cls: Type[Enum], errors: List[str]) -> None:
    value = candidate.get(field)
    if _is_missing(value):
        return
    valid = [member.value for member in enum_cls]
    if value not in valid:
        errors.append(f"Invalid {field}: {value}. Must be one of: {', '.join(valid)}")


def validate_record(candidate: Any) -> List[str]:
    """
    Checks a raw catalog document against the record schema.

    Every check runs; the returned list holds one human-readable message per
    violation and is empty when the record is valid. Never raises for bad input.

    Args:
        candidate (Any): The decoded JSON document for one record.

    Returns:
        List[str]: Validation error messages.
    """
    if not isinstance(candidate, Mapping):
        return ["Record must be a JSON object"]

    errors: List[str] = []

    for field in REQUIRED_FIELDS:
        if _is_missing(candidate.get(field)):
            errors.append(f"Missing required field: {field}")

    _check_enum(candidate, "category", Category, errors)
    _check_enum(candidate, "language", Language, errors)
    _check_enum(candidate, "complexity", Complexity, errors)

    for field, label in (("features", "Features"), ("tags", "Tags")):
        value = candidate.get(field)
        if not _is_missing(value) and not isinstance(value, list):
            errors.append(f"{label} must be an array")

    for field in ("repository", "documentation"):
        value = candidate.get(field)
        if not _is_missing(value) and not is_valid_url(value):
            errors.append(f"Invalid {field} URL: {value}")

    last_updated = candidate.get("lastUpdated")
    if not _is_missing(last_updated) and not is_valid_date(last_updated):
        errors.append(f"Invalid date format: {last_updated}. Expected YYYY-MM-DD")

    record_id = candidate.get("id")
    if not _is_missing(record_id) and not is_valid_id(record_id):
        errors.append(
            f"Invalid ID format: {record_id}. Must be lowercase letters, numbers, and hyphens only"
        )

    return errors
