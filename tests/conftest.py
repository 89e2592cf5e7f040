"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import json
import logging
from pathlib import Path
from typing import Generator

import pytest

from fhir_intake.logging_audit import PIIRedactingFormatter
from fhir_intake.models.intake import FlatIntake


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def src_dir(project_root: Path) -> Path:
    """Return the src directory path."""
    return project_root / "src"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """
    Remove log handlers added during a test.

    configure_logging() attaches handlers to the root logger; CLI tests would
    otherwise leave handlers bound to closed CliRunner streams.
    """
    root_logger = logging.getLogger()
    original_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, PIIRedactingFormatter):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep FHIR_INTAKE_* variables and ./config, ./logs, ./output out of tests."""
    for name in [
        "FHIR_INTAKE_LOCALE",
        "FHIR_INTAKE_FILENAME_PREFIX",
        "FHIR_INTAKE_OUTPUT_DIR",
        "FHIR_INTAKE_LOG_LEVEL",
        "FHIR_INTAKE_LOG_FILE",
        "FHIR_INTAKE_REDACT_PII",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def demo_form() -> dict:
    """
    Return the demo intake as submitted by the form (camelCase keys).

    Returns:
        dict: Intake form values for María García.
    """
    return {
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


@pytest.fixture
def full_intake() -> FlatIntake:
    """Return a complete, valid intake record."""
    return FlatIntake(
        first_name="María",
        last_name="García",
        dob="1985-03-15",
        gender="female",
        phone="(555) 123-4567",
        email="maria.garcia@example.com",
        address_line="123 Medical Center Blvd",
        city="Los Angeles",
        state="CA",
        postal_code="90001",
        emergency_name="Carlos García",
        emergency_relationship="Spouse",
        emergency_phone="(555) 987-6543",
    )


@pytest.fixture
def minimal_intake() -> FlatIntake:
    """Return a valid intake with only the required fields."""
    return FlatIntake(
        first_name="John",
        last_name="Doe",
        dob="1980-01-01",
        gender="male",
    )


@pytest.fixture
def intake_file(tmp_path: Path, demo_form: dict) -> Path:
    """Write the demo intake to a JSON file and return its path."""
    path = tmp_path / "intake.json"
    path.write_text(json.dumps(demo_form, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def invalid_intake_file(tmp_path: Path) -> Path:
    """Write an intake missing required fields with a bad email."""
    path = tmp_path / "invalid.json"
    path.write_text(
        json.dumps({"firstName": "  ", "lastName": "Doe", "email": "not-an-email"}),
        encoding="utf-8",
    )
    return path
