"""Pydantic model for a single form field (the persisted ``FormField`` record)."""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from formdee.rules.resolver import resolve_pattern
from formdee.schemas.rules import RuleId

KEY_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")
_FILE_TYPE_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

MIN_FILE_SIZE = 1024 * 1024  # 1 MiB
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MiB


class FieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"
    FILE = "file"


CHOICE_TYPES = {FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX}
RANGE_TYPES = {FieldType.NUMBER, FieldType.DATE}

# Attribute groups that only mean something for certain field types.
VALIDATION_ATTRS = ("validation_rule", "custom_pattern", "validation_domain", "pattern")
FILE_ATTRS = ("accepted_types", "max_file_size", "allow_multiple")
RANGE_ATTRS = ("min", "max")


def clear_irrelevant(data: dict[str, Any], field_type: FieldType | str) -> dict[str, Any]:
    """Return a copy of ``data`` with attributes the given type does not use set to None.

    ``data`` uses the Python attribute names (``validation_rule``, not
    ``validationRule``).
    """
    field_type = FieldType(field_type)
    cleared = dict(data)
    cleared["type"] = field_type
    stale: list[str] = []
    if field_type is not FieldType.TEXT:
        stale.extend(VALIDATION_ATTRS)
    if field_type not in CHOICE_TYPES:
        stale.append("options")
    if field_type is not FieldType.FILE:
        stale.extend(FILE_ATTRS)
    if field_type not in RANGE_TYPES:
        stale.extend(RANGE_ATTRS)
    for name in stale:
        cleared[name] = None
    return cleared


class FieldDefinition(BaseModel):
    """Configuration of one form field.

    Serialized with camelCase keys (``validationRule``, ``maxFileSize``, ...)
    to match the stored form JSON. Both spellings are accepted on input.

    ``pattern`` is a cache of the resolved regex. Records written before the
    rule system existed carry only ``pattern``; see
    :func:`formdee.rules.source.pattern_source` for how those are read.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    placeholder: str | None = None
    help_text: str | None = None

    # text only
    validation_rule: RuleId | None = None
    custom_pattern: str | None = None
    validation_domain: str | None = None
    pattern: str | None = None

    # select / radio / checkbox
    options: list[str] | None = None

    # number / date
    min: int | float | None = None
    max: int | float | None = None

    # file
    accepted_types: list[str] | None = None
    max_file_size: int | None = None  # bytes
    allow_multiple: bool | None = None

    @field_validator("key")
    @classmethod
    def check_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field key is required")
        if not KEY_PATTERN.match(v):
            raise ValueError(
                "Field key must start with a letter and contain only letters, numbers, and underscores"
            )
        return v

    @field_validator("label")
    @classmethod
    def check_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field label is required")
        return v

    @field_validator("accepted_types", mode="before")
    @classmethod
    def normalize_accepted_types(cls, v: object) -> object:
        # The builder stores extensions with a leading dot; accept "pdf" or ".pdf".
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            return v
        normalized = []
        for item in v:
            if not isinstance(item, str):
                return v
            item = item.strip()
            if not item:
                continue
            bare = item[1:] if item.startswith(".") else item
            if not _FILE_TYPE_PATTERN.match(bare):
                raise ValueError(
                    "File types must contain only letters and numbers (e.g., pdf, jpg, docx)"
                )
            normalized.append(f".{bare}")
        return normalized

    @model_validator(mode="after")
    def check_options(self) -> "FieldDefinition":
        if self.type not in CHOICE_TYPES:
            return self
        if not self.options:
            raise ValueError(f"{self.type.value.capitalize()} fields must have at least one option")
        if any(not opt.strip() for opt in self.options):
            raise ValueError("All options must have values. Please remove empty options.")
        unique = {opt.strip().lower() for opt in self.options}
        if len(unique) != len(self.options):
            raise ValueError("Options must be unique. Please remove duplicate options.")
        return self

    @model_validator(mode="after")
    def check_range(self) -> "FieldDefinition":
        if self.min is not None and self.max is not None and self.min >= self.max:
            raise ValueError("Minimum value must be less than maximum value")
        return self

    @model_validator(mode="after")
    def check_file_size(self) -> "FieldDefinition":
        if self.max_file_size is not None and not (
            MIN_FILE_SIZE <= self.max_file_size <= MAX_FILE_SIZE
        ):
            raise ValueError("Max file size must be between 1MB and 100MB")
        return self

    def with_type(self, field_type: FieldType | str) -> "FieldDefinition":
        """Return a copy switched to ``field_type`` with stale attributes cleared."""
        data = clear_irrelevant(self.model_dump(), field_type)
        return self.model_copy(update=data)

    def derive(self) -> "FieldDefinition":
        """Return the normalized record that gets persisted.

        Clears attributes the field type does not use, drops the inactive
        rule parameters and recomputes ``pattern`` from the rule choice. A
        field with no rule choice keeps its ``pattern`` untouched (legacy raw
        pattern).
        """
        data = clear_irrelevant(self.model_dump(), self.type)
        rule = data["validation_rule"]
        if rule is not None and rule is not RuleId.NONE:
            if rule is not RuleId.CUSTOM_REGEX:
                data["custom_pattern"] = None
            if rule is not RuleId.EMAIL_DOMAIN:
                data["validation_domain"] = None
            data["pattern"] = resolve_pattern(
                rule, data["custom_pattern"], data["validation_domain"]
            )
        elif rule is RuleId.NONE:
            data["custom_pattern"] = None
            data["validation_domain"] = None
        return self.model_copy(update=data)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape (camelCase keys, absent attributes omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def serialized(self) -> str:
        """Canonical JSON string, used to detect unchanged re-emissions."""
        return json.dumps(self.to_record(), sort_keys=True)
