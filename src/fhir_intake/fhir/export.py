"""Export of converted FHIR records.

This module produces the pretty-printed JSON payload handed to download and
clipboard collaborators, the suggested download filename, and writes records
to disk.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from fhir_intake.logging_audit import get_logger
from fhir_intake.models.patient import PatientRecord
from fhir_intake.utils.exceptions import ExportError

logger = get_logger(__name__)

DEFAULT_FILENAME_PREFIX = "fhir-patient"


def serialize_record(record: PatientRecord) -> str:
    """Serialize a record as pretty-printed JSON.

    Keys keep the resource's insertion order and non-ASCII text is written
    as-is, so equal records always serialize to identical strings.

    Args:
        record: Converted patient record

    Returns:
        JSON string indented by two spaces
    """
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def suggested_filename(
    prefix: str = DEFAULT_FILENAME_PREFIX, today: Optional[date] = None
) -> str:
    """Return the download filename <prefix>-<YYYY-MM-DD>.json.

    Example:
        >>> suggested_filename(today=date(2025, 3, 15))
        'fhir-patient-2025-03-15.json'
    """
    if today is None:
        today = date.today()
    return f"{prefix}-{today.isoformat()}.json"


def write_record(
    record: PatientRecord,
    directory: Path,
    prefix: str = DEFAULT_FILENAME_PREFIX,
    today: Optional[date] = None,
) -> Path:
    """Write a record to <directory>/<prefix>-<YYYY-MM-DD>.json.

    The directory is created if needed. An existing file with the same name
    is overwritten.

    Args:
        record: Converted patient record
        directory: Output directory
        prefix: Filename prefix
        today: Date for the filename. Defaults to today.

    Returns:
        Path to the written file

    Raises:
        ExportError: If the directory or file cannot be written
    """
    file_path = directory / suggested_filename(prefix, today)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        file_path.write_text(serialize_record(record) + "\n", encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write record file %s: %s", file_path, e)
        raise ExportError(
            f"Failed to write record file: {file_path}. "
            f"Ensure write permissions are available. Error: {e}"
        ) from e

    logger.info("Wrote FHIR record to %s", file_path)
    return file_path
