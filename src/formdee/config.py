"""Loaders — read formdee.yml into FormDeeSettings and form files into FormConfig."""

import json
from pathlib import Path
from typing import Any

import yaml

from formdee.schemas.config import FormDeeSettings
from formdee.schemas.form import FormConfig, FormSubmission


def _read_mapping(path: Path, what: str, *, allow_empty: bool = False) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")

    text = path.read_text()
    if path.suffix == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    if raw is None and allow_empty:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{what} must be a mapping, got {type(raw).__name__}")
    return raw


def load_settings(path: str | Path | None = None) -> FormDeeSettings:
    """Load settings from a YAML file, or return the defaults when ``path`` is None.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the content is invalid.
    """
    if path is None:
        return FormDeeSettings()

    raw = _read_mapping(Path(path), "Settings file", allow_empty=True)

    # Keys left empty in YAML load as None; treat them as unset.
    return FormDeeSettings(**{k: v for k, v in raw.items() if v is not None})


def load_form(path: str | Path) -> FormConfig:
    """Load a form definition from a ``.json`` or YAML file."""
    return FormConfig.model_validate(_read_mapping(Path(path), "Form file"))


def load_submission(path: str | Path, ref_key: str) -> FormSubmission:
    """Load submitted values from a ``.json`` or YAML file.

    Accepts either a bare mapping of field key to value, or a submission
    object (``refKey``, ``values``, ``metadata``). ``ref_key`` fills in a
    missing ``refKey``.
    """
    raw = _read_mapping(Path(path), "Values file")
    if isinstance(raw.get("values"), dict):
        return FormSubmission.model_validate({"refKey": ref_key, **raw})
    return FormSubmission(ref_key=ref_key, values=raw)
