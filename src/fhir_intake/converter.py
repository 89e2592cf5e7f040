"""Intake conversion session.

This module ties the validator, mapper and exporter together the way the
intake form uses them: validate, convert on success, keep the most recently
produced record for download or copy.
"""

import time
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from fhir_intake.config.schema import Config
from fhir_intake.fhir.export import serialize_record, write_record
from fhir_intake.fhir.mapper import map_to_patient
from fhir_intake.i18n import check_locale
from fhir_intake.intake.validator import ValidationResult, validate
from fhir_intake.logging_audit import get_logger, log_audit_event
from fhir_intake.models.intake import FlatIntake
from fhir_intake.models.patient import PatientRecord
from fhir_intake.utils.exceptions import ExportError


logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of one conversion attempt.

    Attributes:
        validation: Per-field validation result
        record: Produced record, or None when validation failed
    """

    validation: ValidationResult
    record: Optional[PatientRecord] = None

    @property
    def is_success(self) -> bool:
        return self.record is not None


class IntakeConverter:
    """Validate-then-map converter holding the last produced record.

    A successful conversion replaces ``current_record``; a failed one leaves
    it untouched. Export failures never discard the current record.

    Attributes:
        config: Application configuration
        current_record: Most recently produced record, or None

    Example:
        >>> converter = IntakeConverter(load_config())
        >>> outcome = converter.convert(demo_intake(), locale="es")
        >>> outcome.is_success
        True
        >>> path = converter.download(Path("output"))
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        self.current_record: Optional[PatientRecord] = None

    def convert(
        self,
        intake: FlatIntake,
        locale: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ConversionOutcome:
        """Validate an intake and map it to a FHIR Patient if valid.

        Args:
            intake: Flat intake record
            locale: Locale for validation messages. Defaults to the
                    configured default locale.
            now: Generation time passed to the mapper

        Returns:
            ConversionOutcome with the validation result and, on success, the record

        Raises:
            ValueError: If locale is not supported
        """
        start_time = time.time()
        locale = check_locale(locale or self.config.converter.default_locale)

        validation = validate(intake, locale=locale)
        if not validation.is_valid:
            log_audit_event(
                "VALIDATION_FAILED",
                {
                    "status": "failure",
                    "locale": locale,
                    "error_count": len(validation.errors),
                    "error_fields": ",".join(validation.errors),
                },
            )
            return ConversionOutcome(validation=validation)

        record = map_to_patient(intake, now=now)
        self.current_record = record

        log_audit_event(
            "PATIENT_CONVERTED",
            {
                "status": "success",
                "record_id": record.record_id,
                "locale": locale,
                "duration": time.time() - start_time,
            },
        )
        return ConversionOutcome(validation=validation, record=record)

    def _require_record(self) -> PatientRecord:
        if self.current_record is None:
            raise ExportError(
                "No record to export. Convert a valid intake first."
            )
        return self.current_record

    def export_json(self) -> str:
        """Return the current record as pretty-printed JSON.

        Raises:
            ExportError: If no record has been produced yet
        """
        return serialize_record(self._require_record())

    def download(
        self, directory: Optional[Path] = None, today: Optional[date] = None
    ) -> Path:
        """Write the current record to the output directory.

        Args:
            directory: Output directory. Defaults to the configured output_dir.
            today: Date used in the filename

        Returns:
            Path to the written file

        Raises:
            ExportError: If no record exists or the file cannot be written.
                         The current record is kept either way.
        """
        record = self._require_record()
        directory = directory or self.config.converter.output_dir

        try:
            path = write_record(
                record,
                directory,
                prefix=self.config.converter.filename_prefix,
                today=today,
            )
        except ExportError as e:
            log_audit_event(
                "EXPORT_FAILED",
                {
                    "status": "failure",
                    "record_id": record.record_id,
                    "error_message": str(e),
                },
            )
            raise

        log_audit_event(
            "RECORD_EXPORTED",
            {"status": "success", "record_id": record.record_id, "output_file": path},
        )
        return path
