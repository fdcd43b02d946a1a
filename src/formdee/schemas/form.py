"""Form configuration and submission models."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from formdee.schemas.field import FieldDefinition

REF_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9_\-]+$")


class FormConfig(BaseModel):
    """A named form and the fields it owns.

    ``refKey`` identifies the form in URLs and in the responses table.
    At least one field is required and field keys must be unique.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ref_key: str
    title: str
    description: str | None = None
    response_sheet_url: str | None = None
    slack_webhook_url: str | None = None
    fields: list[FieldDefinition]
    created_at: str | None = None
    updated_at: str | None = None
    prev_ref_key: str | None = None  # set when a form is saved under a new refKey

    @field_validator("ref_key")
    @classmethod
    def check_ref_key(cls, v: str) -> str:
        if not v:
            raise ValueError("Reference key is required")
        if not REF_KEY_PATTERN.match(v):
            raise ValueError(
                "Reference key must contain only letters, numbers, underscores, and hyphens"
            )
        return v

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Form title is required")
        return v

    @field_validator("slack_webhook_url")
    @classmethod
    def check_webhook_url(cls, v: str | None) -> str | None:
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("Invalid Slack webhook URL")
        return v

    @model_validator(mode="after")
    def check_fields(self) -> "FormConfig":
        if not self.fields:
            raise ValueError("At least one field is required")
        seen: set[str] = set()
        for field in self.fields:
            if field.key in seen:
                raise ValueError(f"Duplicate field key: {field.key}")
            seen.add(field.key)
        return self

    def get_field(self, key: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.key == key:
                return field
        return None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FormSubmission(BaseModel):
    """Values posted by a respondent for one form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ref_key: str = Field(min_length=1)
    values: dict[str, Any]
    metadata: dict[str, Any] = {}


class FieldError(BaseModel):
    """A submitted value that failed its field's checks."""

    key: str
    message: str
