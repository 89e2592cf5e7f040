"""FHIR Intake Converter.

Converts bilingual patient intake forms into HL7 FHIR R4 Patient resources.
"""

__version__ = "0.1.0"
