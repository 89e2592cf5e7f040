"""Unit tests for the exception hierarchy."""

import pytest

from fhir_intake.utils.exceptions import (
    ConfigurationError,
    ExportError,
    FhirIntakeError,
    IntakeFormatError,
    ValidationError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [ValidationError, IntakeFormatError, ConfigurationError, ExportError],
    )
    def test_all_inherit_from_base(self, exc_class):
        assert issubclass(exc_class, FhirIntakeError)

    def test_intake_format_error_is_validation_error(self):
        assert issubclass(IntakeFormatError, ValidationError)

    def test_catch_all(self):
        with pytest.raises(FhirIntakeError, match="nothing to export"):
            raise ExportError("nothing to export")
