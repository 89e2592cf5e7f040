"""Intake module.

This module provides loading, validation and identifier generation for
flat patient intake records.
"""

from fhir_intake.intake.loader import demo_intake, intake_from_mapping, load_intake
from fhir_intake.intake.validator import ErrorKind, ValidationResult, validate

__all__ = [
    "demo_intake",
    "intake_from_mapping",
    "load_intake",
    "ErrorKind",
    "ValidationResult",
    "validate",
]
