"""Intake conversion examples.

This module demonstrates converting patient intake records to FHIR R4
Patient resources with the library API: validation in both languages,
conversion, export, and recovering from export errors.
"""

import logging
from pathlib import Path

from fhir_intake.config import load_config
from fhir_intake.converter import IntakeConverter
from fhir_intake.intake import demo_intake, intake_from_mapping
from fhir_intake.utils.exceptions import ExportError

# Configure logging to see audit events
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def example_1_convert_demo_patient():
    """Example 1: Convert the built-in demo patient and print the JSON."""
    print("=" * 80)
    print("EXAMPLE 1: Converting the Demo Patient")
    print("=" * 80)
    print()

    converter = IntakeConverter(load_config())
    outcome = converter.convert(demo_intake())

    print(f"Record id: {outcome.record.record_id}")
    print(f"MRN:       {outcome.record.mrn}")
    print()
    print(converter.export_json())
    print()


def example_2_localized_validation():
    """Example 2: Report validation errors in English and Spanish.

    Field problems are returned as data; the converter never raises for a
    missing name or a malformed email.
    """
    print("=" * 80)
    print("EXAMPLE 2: Localized Validation Errors")
    print("=" * 80)
    print()

    intake = intake_from_mapping(
        {
            "firstName": "Ana",
            "lastName": "",
            "dob": "1992-07-04",
            "gender": "female",
            "email": "ana at example",
            "phone": "555-0100",
        }
    )
    converter = IntakeConverter()

    for locale in ("en", "es"):
        outcome = converter.convert(intake, locale=locale)
        print(f"[{locale}]")
        print(outcome.validation.format_report())
        print()

    print(f"Current record after failed attempts: {converter.current_record}")
    print()


def example_3_export_and_retry():
    """Example 3: Export a record, retrying in another directory on failure."""
    print("=" * 80)
    print("EXAMPLE 3: Export With Retry")
    print("=" * 80)
    print()

    converter = IntakeConverter()
    converter.convert(demo_intake())

    # A regular file where a directory is expected makes the first export fail
    blocker = Path("output") / "not-a-directory"
    blocker.parent.mkdir(parents=True, exist_ok=True)
    blocker.write_text("placeholder")

    try:
        converter.download(blocker)
    except ExportError as e:
        print(f"Export failed: {e}")
        path = converter.download(Path("output"))
        print(f"Retried and saved to {path}")
    finally:
        blocker.unlink()
    print()


if __name__ == "__main__":
    example_1_convert_demo_patient()
    example_2_localized_validation()
    example_3_export_and_retry()
