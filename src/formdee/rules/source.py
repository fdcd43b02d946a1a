"""Decide where a stored field's regex comes from.

Fields saved by the builder carry a rule choice (``validationRule`` plus its
parameters) and the resolved ``pattern`` as a cache. Records saved before
rules existed carry only ``pattern``. Rule-driven fields are always
re-resolved; legacy raw patterns are used verbatim.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from formdee.rules.resolver import resolve_pattern
from formdee.rules.validator import error_message, matches, validate_value
from formdee.schemas.field import FieldDefinition
from formdee.schemas.rules import RuleId

LEGACY_ERROR_MESSAGE = "Invalid format"


class Resolved(BaseModel):
    """The field validates through a catalog rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["resolved"] = "resolved"
    rule_id: RuleId
    custom_pattern: str | None = None
    domain: str | None = None


class LegacyRaw(BaseModel):
    """The field only has a stored regex and no rule choice."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["legacy"] = "legacy"
    pattern: str


PatternSource = Resolved | LegacyRaw


def pattern_source(field: FieldDefinition) -> PatternSource:
    """Where the field's regex comes from: its rule choice or a legacy stored pattern."""
    rule = field.validation_rule
    if (rule is None or rule is RuleId.NONE) and field.pattern:
        return LegacyRaw(pattern=field.pattern)
    return Resolved(
        rule_id=rule or RuleId.NONE,
        custom_pattern=field.custom_pattern,
        domain=field.validation_domain,
    )


def effective_pattern(field: FieldDefinition) -> str | None:
    """The regex a submitted value for ``field`` is checked against."""
    source = pattern_source(field)
    if isinstance(source, LegacyRaw):
        return source.pattern
    return resolve_pattern(source.rule_id, source.custom_pattern, source.domain)


def validate_field_value(field: FieldDefinition, value: str) -> bool:
    """Validate ``value`` with the field's rule choice or its legacy pattern."""
    source = pattern_source(field)
    if isinstance(source, LegacyRaw):
        return matches(source.pattern, value)
    return validate_value(value, source.rule_id, source.custom_pattern, source.domain)


def field_error_message(field: FieldDefinition) -> str:
    """Message shown when a value fails the field's pattern."""
    source = pattern_source(field)
    if isinstance(source, LegacyRaw):
        return LEGACY_ERROR_MESSAGE
    return error_message(source.rule_id)
