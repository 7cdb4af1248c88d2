"""YAML (de)serialization of resource documents for the editor."""

from typing import Any

import yaml

from knative_dashboard.utils.errors import ValidationError

DOCUMENT_START = "---\n"


def dump_document(document: dict[str, Any]) -> str:
    """Serialize a document for the editor with sorted keys and a start marker."""
    return DOCUMENT_START + yaml.safe_dump(
        document,
        sort_keys=True,
        default_flow_style=False,
        allow_unicode=True,
    )


def load_document(text: str | None, field_name: str = "document") -> dict[str, Any]:
    """Parse a YAML document submitted by the user.

    Raises:
        ValidationError: If the text is empty, not YAML, or not a mapping.
    """
    if not text:
        raise ValidationError(f"Missing {field_name}")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValidationError(f"Failed to parse {field_name} YAML: {e}") from e
    if not isinstance(document, dict):
        raise ValidationError(f"{field_name} must be a YAML mapping")
    return document
