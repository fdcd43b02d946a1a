"""Pydantic models for validation rule catalog entries."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RuleId(str, Enum):
    """Closed set of validation rule identifiers a text field can use."""

    NONE = "none"
    LETTERS_ONLY = "letters_only"
    LETTERS_NUMBERS = "letters_numbers"
    LETTERS_NUMBERS_SPACES = "letters_numbers_spaces"
    PHONE_NUMBER = "phone_number"
    POSTAL_CODE = "postal_code"
    NUMBERS_ONLY = "numbers_only"
    URL = "url"
    EMAIL_DOMAIN = "email_domain"
    NO_SPECIAL_CHARS = "no_special_chars"
    USERNAME = "username"
    CUSTOM_REGEX = "custom_regex"


class RuleCategory(str, Enum):
    """Grouping used by the builder's rule picker."""

    TEXT = "text"
    CONTACT = "contact"
    NUMERIC = "numeric"
    WEB = "web"
    CUSTOM = "custom"


class ValidationRule(BaseModel):
    """A single catalog entry. Frozen: the catalog is never mutated."""

    model_config = ConfigDict(frozen=True)

    id: RuleId
    label: str
    description: str
    category: RuleCategory
    pattern_template: str | None = None  # absent for none / custom_regex
    example: str = ""
