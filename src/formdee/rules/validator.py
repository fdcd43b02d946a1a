"""Apply a rule choice to a submitted value.

Validation fails open: a pattern that does not compile accepts every value.
A broken validator must never block a submission; the builder warns about it
at edit time instead (see :func:`check_pattern`).
"""

from __future__ import annotations

import logging
import re

from formdee.rules.catalog import lookup, to_rule_id
from formdee.rules.resolver import resolve_pattern
from formdee.schemas.rules import RuleId

logger = logging.getLogger(__name__)

_ERROR_MESSAGES: dict[RuleId, str] = {
    RuleId.LETTERS_ONLY: "Only letters are allowed",
    RuleId.LETTERS_NUMBERS: "Only letters and numbers are allowed",
    RuleId.LETTERS_NUMBERS_SPACES: "Only letters, numbers, and spaces are allowed",
    RuleId.PHONE_NUMBER: "Please enter a valid phone number",
    RuleId.POSTAL_CODE: "Please enter a valid postal/ZIP code",
    RuleId.NUMBERS_ONLY: "Only numbers are allowed",
    RuleId.URL: "Please enter a valid website URL (starting with http:// or https://)",
    RuleId.EMAIL_DOMAIN: "Email must be from the specified domain",
    RuleId.NO_SPECIAL_CHARS: "Special characters are not allowed",
    RuleId.USERNAME: (
        "Username must be 3-20 characters long and contain only letters, "
        "numbers, underscore, or hyphen"
    ),
}


def check_pattern(pattern: str) -> str | None:
    """Return the compile error for ``pattern``, or ``None`` if it compiles."""
    try:
        re.compile(_strict_end(pattern), re.ASCII)
    except re.error as exc:
        return str(exc)
    return None


def _strict_end(pattern: str) -> str:
    """Rewrite unescaped ``$`` outside character classes as ``\\Z``.

    Python's ``$`` also matches before a final newline; form patterns are
    written for an end anchor that matches only at the end of the value.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            out.append(ch)
            i += 1
            # "]" first in a class (after an optional "^") is literal
            if pattern[i:i + 1] == "^":
                out.append("^")
                i += 1
            if pattern[i:i + 1] == "]":
                out.append("]")
                i += 1
            continue
        elif ch == "$":
            out.append(r"\Z")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def matches(pattern: str, value: str) -> bool:
    """Search ``value`` with ``pattern``; ``True`` if the pattern does not compile.

    Classes like ``\\w`` and ``\\d`` are ASCII-only and ``$`` anchors at the
    very end of ``value``.
    """
    try:
        regex = re.compile(_strict_end(pattern), re.ASCII)
    except re.error as exc:
        logger.debug("Ignoring invalid pattern %r: %s", pattern, exc)
        return True
    return regex.search(value) is not None


def validate_value(
    value: str,
    rule_id: RuleId | str,
    custom_pattern: str | None = None,
    domain: str | None = None,
) -> bool:
    """Return whether ``value`` satisfies the rule choice."""
    rule_id = to_rule_id(rule_id)
    if rule_id is RuleId.NONE:
        return True

    pattern = resolve_pattern(rule_id, custom_pattern, domain)
    if not pattern:
        return True

    return matches(pattern, value)


def error_message(rule_id: RuleId | str) -> str:
    """User-facing message shown when a value fails ``rule_id``."""
    rule = lookup(rule_id)
    if rule.id in _ERROR_MESSAGES:
        return _ERROR_MESSAGES[rule.id]
    return f"Please match the required format: {rule.description}"
