"""Unit tests for the bilingual translation table."""

import pytest

from fhir_intake.i18n import (
    SUPPORTED_LOCALES,
    check_locale,
    field_label,
    gender_label,
    get_message,
)
from fhir_intake.i18n.translations import TRANSLATIONS
from fhir_intake.intake.validator import ErrorKind
from fhir_intake.models.intake import FORM_FIELD_NAMES


class TestTranslationTable:
    def test_supported_locales(self):
        assert SUPPORTED_LOCALES == ("en", "es")

    def test_locales_define_same_keys(self):
        assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["es"])

    def test_every_error_kind_has_message(self):
        for locale in SUPPORTED_LOCALES:
            for kind in ErrorKind:
                assert get_message(kind.value, locale)

    def test_every_intake_field_has_label(self):
        for locale in SUPPORTED_LOCALES:
            for field_name in FORM_FIELD_NAMES:
                assert field_label(field_name, locale)

    def test_every_key_is_referenced(self, src_dir):
        """Test each key is looked up by the package, directly or by prefix."""
        # Arrange - label_* and option_* keys are built by field_label and gender_label
        package_dir = src_dir / "fhir_intake"
        source = "".join(
            path.read_text(encoding="utf-8")
            for path in package_dir.rglob("*.py")
            if path.name != "translations.py"
        )

        # Act
        unused = [
            key for key in TRANSLATIONS["en"]
            if not key.startswith(("label_", "option_")) and f'"{key}"' not in source
            and f"'{key}'" not in source
        ]

        # Assert
        assert not unused, f"Unused translation keys: {unused}"
        assert {key for key in TRANSLATIONS["en"] if key.startswith("option_")} == {
            f"option_{gender}" for gender in ("male", "female", "other", "unknown")
        }


class TestGetMessage:
    def test_english(self):
        assert get_message("error_phone", "en") == "Please enter a valid phone number"

    def test_spanish(self):
        assert get_message("error_email", "es") == "Por favor ingrese un correo electrónico válido"

    def test_default_locale_is_english(self):
        assert get_message("error_required") == "This field is required"

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            get_message("no_such_key", "en")

    def test_unknown_locale_raises(self):
        with pytest.raises(ValueError, match="Must be one of: en, es"):
            get_message("error_required", "de")


class TestCheckLocale:
    @pytest.mark.parametrize("raw,expected", [("en", "en"), ("ES", "es"), (" es ", "es")])
    def test_normalizes(self, raw, expected):
        assert check_locale(raw) == expected


class TestGenderLabel:
    @pytest.mark.parametrize(
        "gender,locale,expected",
        [
            ("female", "en", "Female"),
            ("male", "es", "Masculino"),
            ("unknown", "es", "Desconocido"),
            ("other", "en", "Other"),
        ],
    )
    def test_translated_options(self, gender, locale, expected):
        assert gender_label(gender, locale) == expected

    def test_free_text_passed_through(self):
        assert gender_label("F", "es") == "F"

    def test_unknown_locale_raises(self):
        with pytest.raises(ValueError):
            gender_label("female", "fr")
