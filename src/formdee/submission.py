"""Check a respondent's submitted values against a form before they are stored."""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from formdee.rules.source import field_error_message, validate_field_value
from formdee.schemas.field import FieldDefinition, FieldType
from formdee.schemas.form import FieldError, FormConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 1000

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")


def sanitize_text(value: object, max_length: int = DEFAULT_MAX_TEXT_LENGTH) -> str:
    """Strip control characters and truncate to ``max_length``."""
    text = value if isinstance(value, str) else str("" if value is None else value)
    return _CONTROL_CHARS.sub("", text)[:max_length]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _check_number(field: FieldDefinition, value: Any) -> str | None:
    if isinstance(value, bool):
        return f"{field.label} must be a number"
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return f"{field.label} must be a number"
    if not isinstance(value, (int, float)) or (isinstance(value, float) and not math.isfinite(value)):
        return f"{field.label} must be a number"
    if field.min is not None and value < field.min:
        return f"{field.label} must be at least {field.min:g}"
    if field.max is not None and value > field.max:
        return f"{field.label} must be at most {field.max:g}"
    return None


def _check_choice(field: FieldDefinition, value: Any) -> str | None:
    options = field.options or []
    if field.type is FieldType.CHECKBOX:
        if not options:
            return None if isinstance(value, bool) else f"{field.label} must be checked or unchecked"
        if not isinstance(value, list):
            return f"{field.label} must be a list of options"
        unknown = [v for v in value if v not in options]
        if unknown:
            return f"Invalid option for {field.label}: {', '.join(map(str, unknown))}"
        return None
    if value not in options:
        return f"Invalid option for {field.label}: {value}"
    return None


def check_field(field: FieldDefinition, value: Any) -> str | None:
    """Return an error message for ``value``, or ``None`` if it is acceptable."""
    if _is_empty(value):
        if field.required and field.type is not FieldType.CHECKBOX:
            return f"{field.label} is required"
        return None

    if field.type is FieldType.FILE:
        return None
    if field.type is FieldType.NUMBER:
        return _check_number(field, value)
    if field.type in (FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX):
        return _check_choice(field, value)

    if not isinstance(value, str):
        return f"{field.label} must be text"
    if field.type is FieldType.EMAIL:
        return None if _EMAIL_PATTERN.match(value) else "Invalid email address"
    if field.type in (FieldType.TEXT, FieldType.TEXTAREA):
        if not validate_field_value(field, value):
            return field_error_message(field)
    return None


def validate_submission(form: FormConfig, values: dict[str, Any]) -> list[FieldError]:
    """Validate every field of ``form`` against ``values``.

    Keys in ``values`` that the form does not define are ignored.
    """
    errors: list[FieldError] = []
    for field in form.fields:
        message = check_field(field, values.get(field.key))
        if message:
            errors.append(FieldError(key=field.key, message=message))
    if errors:
        logger.debug("Submission for %s rejected: %d field error(s)", form.ref_key, len(errors))
    return errors


def clean_submission(
    form: FormConfig,
    values: dict[str, Any],
    max_length: int = DEFAULT_MAX_TEXT_LENGTH,
) -> dict[str, Any]:
    """Return the form's values with string entries sanitized; unknown keys dropped."""
    cleaned: dict[str, Any] = {}
    for field in form.fields:
        if field.key not in values:
            continue
        value = values[field.key]
        if isinstance(value, str):
            value = sanitize_text(value, max_length)
        elif isinstance(value, list):
            value = [sanitize_text(v, max_length) if isinstance(v, str) else v for v in value]
        cleaned[field.key] = value
    return cleaned
