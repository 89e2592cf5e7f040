"""FHIR module.

This module maps validated intake data to FHIR R4 Patient resources and
exports them as JSON.
"""

from fhir_intake.fhir.export import serialize_record, suggested_filename, write_record
from fhir_intake.fhir.mapper import map_to_patient

__all__ = [
    "map_to_patient",
    "serialize_record",
    "suggested_filename",
    "write_record",
]
