"""Settings schema — validates formdee.yml."""

from pydantic import BaseModel, field_validator

from formdee.editor.debounce import DEFAULT_DEBOUNCE_MS
from formdee.submission import DEFAULT_MAX_TEXT_LENGTH


class FormDeeSettings(BaseModel):
    """Tunables for the builder and the submission checks.

    Every key is optional; an empty file gives the defaults.
    """

    # Quiet period before an edited field is auto-saved.
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    # Submitted strings are truncated to this many characters.
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH

    @field_validator("debounce_ms", "max_text_length")
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v
