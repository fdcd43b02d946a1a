"""Builder-side editing of one field, with structural checks and debounced auto-save."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from formdee.editor.debounce import DEFAULT_DEBOUNCE_MS, Debouncer
from formdee.rules.validator import check_pattern
from formdee.schemas.config import FormDeeSettings
from formdee.schemas.field import FieldDefinition, FieldType, clear_irrelevant
from formdee.schemas.rules import RuleId

logger = logging.getLogger(__name__)

_RULE_ATTRS = {"validation_rule", "custom_pattern", "validation_domain"}


class EditorState(str, Enum):
    """Where the draft stands relative to what was last saved.

    - ``PRISTINE``: no edit applied yet.
    - ``EDITING``: the draft is valid and matches the last saved value.
    - ``VALID_DIRTY``: the draft is valid and differs; a save is pending.
    - ``INVALID_DIRTY``: the draft has structural errors; saving is withheld.
    """

    PRISTINE = "pristine"
    EDITING = "editing"
    VALID_DIRTY = "valid_dirty"
    INVALID_DIRTY = "invalid_dirty"


def _format_error(err: dict[str, Any]) -> str:
    msg = err["msg"].removeprefix("Value error, ")
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {msg}" if loc else msg


def _rule_warning(field: FieldDefinition) -> str | None:
    """Advisory message about a rule choice that will not validate anything useful."""
    if field.type is not FieldType.TEXT:
        return None
    if field.validation_rule is RuleId.CUSTOM_REGEX:
        if not field.custom_pattern:
            return "Enter a pattern for the custom rule; without one no validation is applied"
        err = check_pattern(field.custom_pattern)
        if err:
            return f"Custom pattern is not a valid regular expression ({err}); it will not be enforced"
    if field.validation_rule is RuleId.EMAIL_DOMAIN and not field.validation_domain:
        return "Enter a domain for the email domain rule"
    return None


class FieldEditor:
    """Draft state for one field being edited in the builder.

    Edits never raise for bad input. Each edit re-validates the draft; a
    valid draft arms a debounce timer that hands the derived
    :class:`FieldDefinition` to ``on_save``. A derived value identical to the
    last one saved is not handed over again.

    Each editor owns its own timer, so it must be used from inside a running
    event loop (or given one). Call :meth:`close` on teardown.
    """

    def __init__(
        self,
        on_save: Callable[[FieldDefinition], None],
        value: FieldDefinition | None = None,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._on_save = on_save
        self._debouncer = Debouncer(debounce_ms, loop=loop)
        self.draft: dict[str, Any] = (
            value.model_dump() if value is not None else {"key": "", "label": "", "type": FieldType.TEXT}
        )
        self.state = EditorState.PRISTINE
        self.errors: list[str] = []
        self.pattern_warning: str | None = None
        self.last_saved: FieldDefinition | None = value.derive() if value is not None else None
        self._last_serialized = self.last_saved.serialized() if self.last_saved else None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        on_save: Callable[[FieldDefinition], None],
        settings: FormDeeSettings,
        value: FieldDefinition | None = None,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> "FieldEditor":
        """Build an editor using the configured quiet period."""
        return cls(on_save, value, debounce_ms=settings.debounce_ms, loop=loop)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def update(self, **changes: Any) -> EditorState:
        """Apply attribute edits (Python attribute names) and re-validate."""
        if self._closed:
            logger.debug("Ignoring edit on closed editor: %s", sorted(changes))
            return self.state

        unknown = set(changes) - set(FieldDefinition.model_fields)
        if unknown:
            raise TypeError(f"Unknown field attribute(s): {', '.join(sorted(unknown))}")

        draft = {**self.draft, **changes}

        if "type" in changes:
            try:
                new_type = FieldType(changes["type"])
            except ValueError:
                new_type = None  # reported by validation below
            if new_type is not None:
                draft = clear_irrelevant(draft, new_type)

        # A new rule choice makes the cached pattern stale.
        if changes.keys() & _RULE_ATTRS and draft.get("validation_rule") is not None:
            draft["pattern"] = None

        self.draft = draft
        self._revalidate()
        return self.state

    def set_rule(
        self,
        rule_id: RuleId | str,
        custom_pattern: str | None = None,
        domain: str | None = None,
    ) -> EditorState:
        """Choose a validation rule; the parameters the rule does not use are cleared."""
        try:
            rule_id = RuleId(rule_id)
        except ValueError:
            pass  # reported by validation
        return self.update(
            validation_rule=rule_id,
            custom_pattern=custom_pattern if rule_id is RuleId.CUSTOM_REGEX else None,
            validation_domain=domain if rule_id is RuleId.EMAIL_DOMAIN else None,
        )

    def flush(self) -> bool:
        """Save a pending change immediately. Returns whether one was pending."""
        return self._debouncer.flush()

    def close(self) -> None:
        """Cancel any pending save; later edits are ignored."""
        self._debouncer.cancel()
        self._closed = True

    def _revalidate(self) -> None:
        try:
            field = FieldDefinition.model_validate(self.draft)
        except ValidationError as exc:
            self.errors = [_format_error(err) for err in exc.errors()]
            self.state = EditorState.INVALID_DIRTY
            if self._debouncer.pending:
                logger.debug("Withholding save for %r: %s", self.draft.get("key"), self.errors)
            self._debouncer.cancel()
            return

        self.errors = []
        derived = field.derive()

        warning = _rule_warning(derived)
        if warning and warning != self.pattern_warning:
            logger.warning("Field %s: %s", derived.key, warning)
        self.pattern_warning = warning

        if derived.serialized() == self._last_serialized:
            self._debouncer.cancel()
            self.state = EditorState.EDITING
            return

        self.state = EditorState.VALID_DIRTY
        self._debouncer.arm(lambda: self._emit(derived))

    def _emit(self, field: FieldDefinition) -> None:
        serialized = field.serialized()
        self.state = EditorState.EDITING
        if serialized == self._last_serialized:
            return
        self._last_serialized = serialized
        self.last_saved = field
        logger.debug("Saving field %s", field.key)
        self._on_save(field)
