"""Turn a rule choice into the concrete regex a field is validated with."""

from __future__ import annotations

import re

from formdee.rules.catalog import DOMAIN_PLACEHOLDER, lookup, to_rule_id
from formdee.schemas.rules import RuleId

# Characters escaped in a domain before it is spliced into the email_domain template.
_DOMAIN_METACHARS = re.compile(r"[.*+?^${}()|\[\]\\/]")


def escape_domain(domain: str) -> str:
    """Backslash-escape regex metacharacters in ``domain``."""
    return _DOMAIN_METACHARS.sub(lambda m: "\\" + m.group(0), domain)


def resolve_pattern(
    rule_id: RuleId | str,
    custom_pattern: str | None = None,
    domain: str | None = None,
) -> str | None:
    """Return the regex for a rule choice, or ``None`` when nothing is checked.

    - ``none`` resolves to ``None``.
    - ``custom_regex`` returns ``custom_pattern`` verbatim (possibly ``None``).
    - ``email_domain`` substitutes the escaped ``domain`` for the placeholder.
      Without a domain the template is returned unchanged, placeholder and all.
    - every other rule returns its catalog template.
    """
    rule_id = to_rule_id(rule_id)
    if rule_id is RuleId.NONE:
        return None
    if rule_id is RuleId.CUSTOM_REGEX:
        return custom_pattern

    template = lookup(rule_id).pattern_template
    if template is None:
        return None

    if rule_id is RuleId.EMAIL_DOMAIN and domain:
        return template.replace(DOMAIN_PLACEHOLDER, escape_domain(domain), 1)

    return template
