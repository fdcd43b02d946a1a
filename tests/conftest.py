"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from formdee.schemas.field import FieldDefinition
from formdee.schemas.form import FormConfig


@pytest.fixture
def contact_form() -> FormConfig:
    """A small form covering the common field types."""
    return FormConfig(
        ref_key="contact-us",
        title="Contact us",
        fields=[
            FieldDefinition(key="name", label="Name", required=True, validation_rule="letters_numbers_spaces"),
            FieldDefinition(key="email", label="Email", type="email", required=True),
            FieldDefinition(key="phone", label="Phone", validation_rule="phone_number"),
            FieldDefinition(key="age", label="Age", type="number", min=18, max=120),
            FieldDefinition(key="topic", label="Topic", type="select", options=["Sales", "Support"]),
            FieldDefinition(key="extras", label="Extras", type="checkbox", options=["Newsletter", "Call me"]),
            FieldDefinition(key="zip", label="ZIP", pattern=r"^[0-9]{5}$"),
            FieldDefinition(key="cv", label="CV", type="file", accepted_types=["pdf"]),
        ],
    )


@pytest.fixture
def form_file(tmp_path: Path, contact_form: FormConfig) -> Path:
    """Write ``contact_form`` as stored JSON and return its path."""
    path = tmp_path / "form.json"
    path.write_text(json.dumps(contact_form.to_record(), indent=2))
    return path
