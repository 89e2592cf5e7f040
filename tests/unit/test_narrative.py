"""Unit tests for narrative generation."""

import pytest

from fhir_intake.fhir.narrative import (
    NarrativeError,
    escape_xml_value,
    patient_narrative,
    validate_xhtml_div,
)


class TestEscapeXmlValue:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Fish & Chips", "Fish &amp; Chips"),
            ("<tag>", "&lt;tag&gt;"),
            ('say "hi"', "say &quot;hi&quot;"),
            ("O'Brien", "O&apos;Brien"),
            ("María", "María"),
            ("bell\x07", "bell"),
        ],
    )
    def test_escape(self, raw, expected):
        assert escape_xml_value(raw) == expected


class TestValidateXhtmlDiv:
    def test_valid_div(self):
        assert validate_xhtml_div('<div xmlns="http://www.w3.org/1999/xhtml">ok</div>')

    def test_malformed_markup(self):
        with pytest.raises(NarrativeError, match="Malformed"):
            validate_xhtml_div('<div xmlns="http://www.w3.org/1999/xhtml">open <b></div>')

    def test_missing_namespace(self):
        with pytest.raises(NarrativeError, match="XHTML div"):
            validate_xhtml_div("<div>no namespace</div>")


class TestPatientNarrative:
    def test_generated_narrative(self):
        narrative = patient_narrative("María", "García")

        assert narrative == {
            "status": "generated",
            "div": '<div xmlns="http://www.w3.org/1999/xhtml">Patient: María García</div>',
        }
