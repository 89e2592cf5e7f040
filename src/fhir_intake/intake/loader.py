"""Intake record loading.

This module builds FlatIntake records from JSON files or mappings, applying
the same normalization the intake form applies when collecting its fields.
"""

import json
from pathlib import Path
from typing import Any, Mapping

from fhir_intake.logging_audit import get_logger
from fhir_intake.models.intake import FORM_FIELD_NAMES, FlatIntake
from fhir_intake.utils.exceptions import IntakeFormatError


logger = get_logger(__name__)

# Accept both form (camelCase) and attribute (snake_case) keys
_KEY_ALIASES: dict[str, str] = {
    **{form_name: attr for attr, form_name in FORM_FIELD_NAMES.items()},
    **{attr: attr for attr in FORM_FIELD_NAMES},
}

# Picker values are passed through as-is
UNTRIMMED_FIELDS = {"dob", "gender"}
UPPERCASE_FIELDS = {"state"}

DEMO_INTAKE: dict[str, str] = {
    "firstName": "María",
    "lastName": "García",
    "dob": "1985-03-15",
    "gender": "female",
    "phone": "(555) 123-4567",
    "email": "maria.garcia@example.com",
    "addressLine": "123 Medical Center Blvd",
    "city": "Los Angeles",
    "state": "CA",
    "postalCode": "90001",
    "emergencyName": "Carlos García",
    "emergencyRelationship": "Spouse",
    "emergencyPhone": "(555) 987-6543",
}


def intake_from_mapping(data: Mapping[str, Any]) -> FlatIntake:
    """Build a FlatIntake from a mapping of form field values.

    Text fields are trimmed and state is upper-cased; dob and gender are kept
    as given. Missing keys and None values become empty strings. Unknown keys
    are logged and ignored.

    Args:
        data: Field values keyed by camelCase form names or snake_case names

    Returns:
        Normalized FlatIntake

    Raises:
        IntakeFormatError: If data is not a mapping or a field value is not a string
    """
    if not isinstance(data, Mapping):
        raise IntakeFormatError(
            f"Intake must be a JSON object, got {type(data).__name__}"
        )

    values: dict[str, str] = {}
    unknown_keys = []

    for key, raw_value in data.items():
        attr = _KEY_ALIASES.get(key)
        if attr is None:
            unknown_keys.append(key)
            continue
        if raw_value is None:
            raw_value = ""
        if not isinstance(raw_value, str):
            raise IntakeFormatError(
                f"Field '{key}' must be a string, got {type(raw_value).__name__}. "
                f"Quote numeric values such as postal codes and phone numbers."
            )
        value = raw_value if attr in UNTRIMMED_FIELDS else raw_value.strip()
        if attr in UPPERCASE_FIELDS:
            value = value.upper()
        values[attr] = value

    if unknown_keys:
        logger.warning(
            f"Intake contains unknown fields that will be ignored: {', '.join(unknown_keys)}"
        )

    return FlatIntake(**values)


def load_intake(file_path: Path) -> FlatIntake:
    """Load an intake record from a UTF-8 JSON file.

    Args:
        file_path: Path to a JSON object with form field values

    Returns:
        Normalized FlatIntake

    Raises:
        IntakeFormatError: If the file cannot be read or is not a valid intake object
    """
    logger.info(f"Loading intake from {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise IntakeFormatError(f"Intake file not found: {file_path}") from e
    except json.JSONDecodeError as e:
        raise IntakeFormatError(
            f"Invalid JSON in intake file: {file_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise IntakeFormatError(
            f"Failed to read intake file {file_path}. "
            f"Ensure the file is UTF-8 encoded JSON. Error: {e}"
        ) from e

    return intake_from_mapping(data)


def demo_intake() -> FlatIntake:
    """Return the synthetic demo patient used to try out the converter."""
    return intake_from_mapping(DEMO_INTAKE)
