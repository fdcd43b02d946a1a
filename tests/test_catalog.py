"""Tests for the validation rule catalog."""

import pytest
from pydantic import ValidationError

from formdee.rules.catalog import VALIDATION_RULES, UnknownRuleError, list_by_category, lookup
from formdee.schemas.rules import RuleCategory, RuleId


class TestLookup:
    def test_every_rule_id_is_in_catalog(self) -> None:
        assert set(VALIDATION_RULES) == set(RuleId)

    def test_lookup_by_enum_and_string(self) -> None:
        assert lookup(RuleId.USERNAME) is lookup("username")

    def test_unknown_rule_raises(self) -> None:
        with pytest.raises(UnknownRuleError, match="not_a_rule"):
            lookup("not_a_rule")

    def test_unknown_rule_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            lookup("")

    def test_templates_match_published_table(self) -> None:
        expected = {
            RuleId.LETTERS_ONLY: r"^[A-Za-z]+$",
            RuleId.LETTERS_NUMBERS: r"^[A-Za-z0-9]+$",
            RuleId.LETTERS_NUMBERS_SPACES: r"^[A-Za-z0-9\s]+$",
            RuleId.PHONE_NUMBER: r"^[\+]?[0-9\s\-\(\)]{7,15}$",
            RuleId.POSTAL_CODE: r"^[A-Za-z0-9\s\-]{3,10}$",
            RuleId.NUMBERS_ONLY: r"^[0-9]+$",
            RuleId.URL: r"^https?://[\w\-]+(\.[\w\-]+)+[/#?]?.*$",
            RuleId.EMAIL_DOMAIN: r"^[\w\.-]+@DOMAIN$",
            RuleId.NO_SPECIAL_CHARS: r"^[A-Za-z0-9\s\-_]+$",
            RuleId.USERNAME: r"^[A-Za-z0-9_-]{3,20}$",
        }
        for rule_id, template in expected.items():
            assert lookup(rule_id).pattern_template == template

    def test_none_and_custom_have_no_template(self) -> None:
        assert lookup(RuleId.NONE).pattern_template is None
        assert lookup(RuleId.CUSTOM_REGEX).pattern_template is None

    def test_entries_are_frozen(self) -> None:
        with pytest.raises(ValidationError):
            lookup(RuleId.URL).label = "changed"


class TestListByCategory:
    def test_all_categories_present(self) -> None:
        groups = list_by_category()
        assert list(groups) == list(RuleCategory)

    def test_declaration_order_within_category(self) -> None:
        groups = list_by_category()
        assert [r.id for r in groups[RuleCategory.TEXT]] == [
            RuleId.NONE,
            RuleId.LETTERS_ONLY,
            RuleId.LETTERS_NUMBERS,
            RuleId.LETTERS_NUMBERS_SPACES,
            RuleId.NO_SPECIAL_CHARS,
            RuleId.USERNAME,
        ]
        assert [r.id for r in groups[RuleCategory.CONTACT]] == [
            RuleId.PHONE_NUMBER,
            RuleId.POSTAL_CODE,
            RuleId.EMAIL_DOMAIN,
        ]
        assert [r.id for r in groups[RuleCategory.CUSTOM]] == [RuleId.CUSTOM_REGEX]

    def test_groups_cover_catalog_once(self) -> None:
        ids = [r.id for rules in list_by_category().values() for r in rules]
        assert sorted(ids) == sorted(RuleId)

    def test_fresh_lists_each_call(self) -> None:
        first = list_by_category()
        first[RuleCategory.WEB].clear()
        assert len(list_by_category()[RuleCategory.WEB]) == 1
