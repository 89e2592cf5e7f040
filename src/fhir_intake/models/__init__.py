"""Models module.

This module provides data models and dataclasses for the application.
"""

from fhir_intake.models.intake import FlatIntake
from fhir_intake.models.patient import PatientRecord

__all__ = [
    "FlatIntake",
    "PatientRecord",
]
