"""Static catalog of the validation rules a text field can choose from."""

from __future__ import annotations

from formdee.schemas.rules import RuleCategory, RuleId, ValidationRule


class UnknownRuleError(ValueError):
    """Raised when a rule id outside the catalog is used."""

    def __init__(self, rule_id: object) -> None:
        super().__init__(f"Unknown validation rule: {rule_id!r}")
        self.rule_id = rule_id


# Placeholder substituted by the resolver for the email_domain rule.
DOMAIN_PLACEHOLDER = "DOMAIN"

_RULES = [
    ValidationRule(
        id=RuleId.NONE,
        label="No validation",
        description="Accept any input",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.LETTERS_ONLY,
        label="Letters only",
        description="Only alphabetic characters (A-Z, a-z)",
        pattern_template=r"^[A-Za-z]+$",
        example="John",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.LETTERS_NUMBERS,
        label="Letters and numbers",
        description="Only letters and numbers (no spaces or symbols)",
        pattern_template=r"^[A-Za-z0-9]+$",
        example="User123",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.LETTERS_NUMBERS_SPACES,
        label="Letters, numbers, and spaces",
        description="Letters, numbers, and spaces only",
        pattern_template=r"^[A-Za-z0-9\s]+$",
        example="John Doe 123",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.PHONE_NUMBER,
        label="Phone number",
        description="Phone number format with optional country code",
        pattern_template=r"^[\+]?[0-9\s\-\(\)]{7,15}$",
        example="+1 (555) 123-4567",
        category=RuleCategory.CONTACT,
    ),
    ValidationRule(
        id=RuleId.POSTAL_CODE,
        label="Postal/ZIP code",
        description="Postal code or ZIP code format",
        pattern_template=r"^[A-Za-z0-9\s\-]{3,10}$",
        example="12345 or SW1A 1AA",
        category=RuleCategory.CONTACT,
    ),
    ValidationRule(
        id=RuleId.NUMBERS_ONLY,
        label="Numbers only",
        description="Only numeric digits (0-9)",
        pattern_template=r"^[0-9]+$",
        example="12345",
        category=RuleCategory.NUMERIC,
    ),
    ValidationRule(
        id=RuleId.URL,
        label="Website URL",
        description="Valid website URL starting with http:// or https://",
        pattern_template=r"^https?://[\w\-]+(\.[\w\-]+)+[/#?]?.*$",
        example="https://example.com",
        category=RuleCategory.WEB,
    ),
    ValidationRule(
        id=RuleId.EMAIL_DOMAIN,
        label="Email domain restriction",
        description="Email must be from specific domain (set in help text)",
        pattern_template=r"^[\w\.-]+@" + DOMAIN_PLACEHOLDER + "$",
        example="user@company.com",
        category=RuleCategory.CONTACT,
    ),
    ValidationRule(
        id=RuleId.NO_SPECIAL_CHARS,
        label="No special characters",
        description="Letters, numbers, spaces, hyphens, and underscores only",
        pattern_template=r"^[A-Za-z0-9\s\-_]+$",
        example="My-Project_Name",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.USERNAME,
        label="Username format",
        description="Valid username: letters, numbers, underscore, hyphen (3-20 chars)",
        pattern_template=r"^[A-Za-z0-9_-]{3,20}$",
        example="user_name123",
        category=RuleCategory.TEXT,
    ),
    ValidationRule(
        id=RuleId.CUSTOM_REGEX,
        label="Custom pattern",
        description="Enter your own regular expression pattern",
        category=RuleCategory.CUSTOM,
    ),
]

VALIDATION_RULES: dict[RuleId, ValidationRule] = {rule.id: rule for rule in _RULES}


def to_rule_id(rule_id: RuleId | str) -> RuleId:
    """Coerce a rule id string to :class:`RuleId`, raising ``UnknownRuleError``."""
    if isinstance(rule_id, RuleId):
        return rule_id
    try:
        return RuleId(rule_id)
    except ValueError:
        raise UnknownRuleError(rule_id) from None


def lookup(rule_id: RuleId | str) -> ValidationRule:
    """Return the catalog entry for ``rule_id``."""
    return VALIDATION_RULES[to_rule_id(rule_id)]


def list_by_category() -> dict[RuleCategory, list[ValidationRule]]:
    """Group the catalog for a picker. Order within a category is declaration order."""
    groups: dict[RuleCategory, list[ValidationRule]] = {cat: [] for cat in RuleCategory}
    for rule in VALIDATION_RULES.values():
        groups[rule.category].append(rule)
    return groups
