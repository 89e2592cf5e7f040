"""Custom exception classes for the FHIR Intake Converter.

All exceptions inherit from FhirIntakeError to allow catching all custom exceptions.

Field-level validation failures (missing first name, malformed email, ...) are
not exceptions: they are reported as data through
``fhir_intake.intake.validator.ValidationResult``.
"""


class FhirIntakeError(Exception):
    """Base exception for all FHIR Intake Converter custom exceptions."""

    pass


class ValidationError(FhirIntakeError):
    """Raised when input data cannot be accepted at all.

    Examples:
        - Intake file is not a JSON object
        - Intake field holds a non-string value
    """

    pass


class IntakeFormatError(ValidationError):
    """Raised when an intake record is structurally malformed.

    Examples:
        - Intake file not found or not valid JSON
        - Field value is a number, list or object instead of a string
    """

    pass


class ConfigurationError(FhirIntakeError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Unsupported default locale
    """

    pass


class ExportError(FhirIntakeError):
    """Raised when exporting a produced record fails.

    Export failures are recoverable: the in-memory record is kept and the
    export can be retried.

    Examples:
        - No record has been produced yet
        - Output directory not writable
    """

    pass
