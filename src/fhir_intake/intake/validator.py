"""Validation for patient intake records.

This module checks a flat intake record for required fields and contact
formats, collecting every issue before reporting so all offending fields can
be flagged at once.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from fhir_intake.i18n import DEFAULT_LOCALE, check_locale, field_label, get_message
from fhir_intake.logging_audit import get_logger
from fhir_intake.models.intake import FORM_FIELD_NAMES, FlatIntake


logger = get_logger(__name__)


class ErrorKind(Enum):
    """Language-independent kind of a field validation failure.

    The value is the translation key of the localized message.
    """

    REQUIRED = "error_required"
    BAD_EMAIL = "error_email"
    BAD_PHONE = "error_phone"


@dataclass
class ValidationResult:
    """Per-field validation outcome.

    Attributes:
        locale: Locale used for the messages
        errors: Field name (snake_case attribute) -> localized message
        kinds: Field name -> ErrorKind, same keys as errors
    """

    locale: str = DEFAULT_LOCALE
    errors: dict[str, str] = field(default_factory=dict)
    kinds: dict[str, ErrorKind] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True iff no field failed validation."""
        return len(self.errors) == 0

    def add(self, field_name: str, kind: ErrorKind) -> None:
        """Record a failure for field_name with the localized message for kind."""
        self.kinds[field_name] = kind
        self.errors[field_name] = get_message(kind.value, self.locale)

    def format_report(self) -> str:
        """Format validation results as a human-readable report.

        Returns:
            Multi-line string with one line per offending field, labelled in
            the result's locale
        """
        if self.is_valid:
            return "✓ " + get_message("form_title", self.locale)

        lines = [get_message("error_validation", self.locale)]
        for field_name, message in self.errors.items():
            lines.append(f"  - {field_label(field_name, self.locale)}: {message}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Export validation results for JSON serialization.

        Errors are keyed by form (camelCase) field names.
        """
        return {
            "isValid": self.is_valid,
            "locale": self.locale,
            "errors": {
                FORM_FIELD_NAMES[name]: {
                    "kind": self.kinds[name].name.lower(),
                    "message": message,
                }
                for name, message in self.errors.items()
            },
        }


# One "@", at least one "." after it, no whitespace anywhere
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# ASCII digits, whitespace, hyphens and parentheses only
PHONE_PATTERN = re.compile(r"[0-9\s\-()]+")
NON_DIGIT_PATTERN = re.compile(r"[^0-9]")
MIN_PHONE_DIGITS = 10

REQUIRED_FIELDS = ["first_name", "last_name", "dob", "gender"]
# Names are checked after trimming; dob and gender come from pickers
TRIMMED_REQUIRED_FIELDS = {"first_name", "last_name"}
PHONE_FIELDS = ["phone", "emergency_phone"]


def is_valid_email(email: str) -> bool:
    """Check an email address has the simple local@domain.tld shape."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    """Check a phone number uses only allowed characters and has 10+ digits.

    Args:
        phone: Free-text phone number, e.g. "(555) 123-4567"

    Returns:
        True if the number is acceptable
    """
    digits = NON_DIGIT_PATTERN.sub("", phone)
    return PHONE_PATTERN.fullmatch(phone) is not None and len(digits) >= MIN_PHONE_DIGITS


def validate(intake: FlatIntake, locale: str = DEFAULT_LOCALE) -> ValidationResult:
    """Validate an intake record before FHIR conversion.

    All rules are evaluated independently (not fail-fast):
    - first_name, last_name: required, whitespace-only counts as empty
    - dob, gender: required
    - email: if provided, must look like local@domain.tld
    - phone, emergency_phone: if provided, digits/space/hyphen/parentheses
      only and at least 10 digits

    Args:
        intake: Flat intake record
        locale: Locale for the error messages (en, es)

    Returns:
        ValidationResult with one entry per offending field

    Raises:
        ValueError: If locale is not supported
    """
    result = ValidationResult(locale=check_locale(locale))

    for field_name in REQUIRED_FIELDS:
        value = getattr(intake, field_name)
        if field_name in TRIMMED_REQUIRED_FIELDS:
            value = value.strip()
        if not value:
            result.add(field_name, ErrorKind.REQUIRED)

    if intake.email and not is_valid_email(intake.email):
        result.add("email", ErrorKind.BAD_EMAIL)

    for field_name in PHONE_FIELDS:
        value = getattr(intake, field_name)
        if value and not is_valid_phone(value):
            result.add(field_name, ErrorKind.BAD_PHONE)

    if result.is_valid:
        logger.debug("Intake validation passed")
    else:
        logger.info(
            f"Intake validation failed for fields: {', '.join(result.errors)}"
        )

    return result
