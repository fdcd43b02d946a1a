"""Tests for choosing between rule-driven and legacy raw patterns."""

from formdee.rules.source import (
    LEGACY_ERROR_MESSAGE,
    LegacyRaw,
    Resolved,
    effective_pattern,
    field_error_message,
    pattern_source,
    validate_field_value,
)
from formdee.schemas.field import FieldDefinition
from formdee.schemas.rules import RuleId


class TestPatternSource:
    def test_legacy_record_without_rule(self) -> None:
        field = FieldDefinition.model_validate({"key": "zip", "label": "ZIP", "pattern": "^[0-9]{5}$"})
        assert pattern_source(field) == LegacyRaw(pattern="^[0-9]{5}$")

    def test_legacy_record_with_none_rule(self) -> None:
        field = FieldDefinition(key="zip", label="ZIP", validation_rule="none", pattern="^[0-9]{5}$")
        assert isinstance(pattern_source(field), LegacyRaw)

    def test_rule_driven_ignores_stored_cache(self) -> None:
        field = FieldDefinition(key="n", label="N", validation_rule="numbers_only", pattern="^stale$")
        source = pattern_source(field)
        assert source == Resolved(rule_id=RuleId.NUMBERS_ONLY)
        assert effective_pattern(field) == "^[0-9]+$"

    def test_no_rule_no_pattern(self) -> None:
        field = FieldDefinition(key="n", label="N")
        assert pattern_source(field) == Resolved(rule_id=RuleId.NONE)
        assert effective_pattern(field) is None

    def test_parameters_carried(self) -> None:
        field = FieldDefinition(key="e", label="E", validation_rule="email_domain", validation_domain="acme.io")
        assert pattern_source(field).domain == "acme.io"


class TestValidateFieldValue:
    def test_legacy_record_compatibility(self) -> None:
        field = FieldDefinition.model_validate({"key": "zip", "label": "ZIP", "pattern": "^[0-9]{5}$"})
        assert validate_field_value(field, "12345") is True
        assert validate_field_value(field, "1234") is False
        assert validate_field_value(field, "12345\n") is False
        assert field_error_message(field) == LEGACY_ERROR_MESSAGE

    def test_legacy_invalid_pattern_fails_open(self) -> None:
        field = FieldDefinition(key="zip", label="ZIP", pattern="([0-9")
        assert validate_field_value(field, "anything") is True

    def test_rule_driven(self) -> None:
        field = FieldDefinition(key="user", label="User", validation_rule="username")
        assert validate_field_value(field, "user_name123") is True
        assert validate_field_value(field, "ab") is False
        assert field_error_message(field).startswith("Username must be")

    def test_custom_regex(self) -> None:
        field = FieldDefinition(key="c", label="C", validation_rule="custom_regex", custom_pattern=r"^[A-Z]+$")
        assert validate_field_value(field, "ABC") is True
        assert validate_field_value(field, "abc") is False

    def test_no_validation(self) -> None:
        field = FieldDefinition(key="free", label="Free")
        assert validate_field_value(field, "\x00 anything") is True
