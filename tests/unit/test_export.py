"""Unit tests for record export."""

import json
from datetime import date
from unittest.mock import patch

import pytest

from fhir_intake.fhir.export import serialize_record, suggested_filename, write_record
from fhir_intake.fhir.mapper import map_to_patient
from fhir_intake.models.patient import PatientRecord
from fhir_intake.utils.exceptions import ExportError


@pytest.fixture
def record(full_intake) -> PatientRecord:
    return map_to_patient(full_intake)


class TestSerializeRecord:
    def test_round_trips_to_resource(self, record):
        assert json.loads(serialize_record(record)) == record.to_dict()

    def test_pretty_printed_with_two_spaces(self, record):
        payload = serialize_record(record)

        assert payload.startswith('{\n  "resourceType": "Patient",\n  "id": ')

    def test_non_ascii_written_verbatim(self, record):
        assert "García" in serialize_record(record)

    def test_serialization_is_stable(self, record):
        """Test the same record always yields byte-identical output."""
        assert serialize_record(record) == serialize_record(record)
        assert serialize_record(PatientRecord(record.to_dict())) == serialize_record(record)


class TestSuggestedFilename:
    def test_default_prefix(self):
        assert suggested_filename(today=date(2025, 3, 15)) == "fhir-patient-2025-03-15.json"

    def test_custom_prefix(self):
        assert suggested_filename("intake", date(2024, 12, 1)) == "intake-2024-12-01.json"

    def test_defaults_to_today(self):
        assert suggested_filename() == f"fhir-patient-{date.today().isoformat()}.json"


class TestWriteRecord:
    def test_writes_file(self, record, tmp_path):
        # Act
        path = write_record(record, tmp_path / "out", today=date(2025, 3, 15))

        # Assert
        assert path == tmp_path / "out" / "fhir-patient-2025-03-15.json"
        assert json.loads(path.read_text(encoding="utf-8")) == record.to_dict()

    def test_overwrites_existing_file(self, record, full_intake, tmp_path):
        first = write_record(record, tmp_path, today=date(2025, 3, 15))
        newer = map_to_patient(full_intake)

        second = write_record(newer, tmp_path, today=date(2025, 3, 15))

        assert first == second
        assert json.loads(second.read_text(encoding="utf-8"))["id"] == newer.record_id

    def test_os_error_raises_export_error(self, record, tmp_path):
        with patch("pathlib.Path.write_text", side_effect=PermissionError("denied")):
            with pytest.raises(ExportError, match="denied"):
                write_record(record, tmp_path)

    def test_directory_is_a_file(self, record, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(ExportError):
            write_record(record, blocker)
