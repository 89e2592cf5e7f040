"""Bilingual translation table.

This module holds the English and Spanish strings used for validation
messages, notices and CLI labels. Strings are requested by a fixed logical key
and an explicit locale; there is no process-wide "current language".
"""

from fhir_intake.logging_audit import get_logger


logger = get_logger(__name__)

DEFAULT_LOCALE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "form_title": "Patient Information",
        "label_first_name": "First Name",
        "label_last_name": "Last Name",
        "label_dob": "Date of Birth",
        "label_gender": "Gender",
        "label_phone": "Phone Number",
        "label_email": "Email Address",
        "label_address_line": "Street Address",
        "label_city": "City",
        "label_state": "State",
        "label_postal_code": "Postal Code",
        "label_emergency_name": "Contact Name",
        "label_emergency_relationship": "Relationship",
        "label_emergency_phone": "Contact Phone",
        "option_male": "Male",
        "option_female": "Female",
        "option_other": "Other",
        "option_unknown": "Unknown",
        "output_title": "FHIR R4 JSON Output",
        "meta_resource": "Resource Type:",
        "meta_standard": "FHIR Standard:",
        "meta_timestamp": "Generated:",
        "error_required": "This field is required",
        "error_email": "Please enter a valid email address",
        "error_phone": "Please enter a valid phone number",
        "error_validation": "Please fill in all required fields correctly",
        "error_export": "Export failed",
        "success_download": "JSON saved to",
    },
    "es": {
        "form_title": "Información del Paciente",
        "label_first_name": "Nombre",
        "label_last_name": "Apellido",
        "label_dob": "Fecha de Nacimiento",
        "label_gender": "Género",
        "label_phone": "Número de Teléfono",
        "label_email": "Correo Electrónico",
        "label_address_line": "Dirección",
        "label_city": "Ciudad",
        "label_state": "Estado",
        "label_postal_code": "Código Postal",
        "label_emergency_name": "Nombre del Contacto",
        "label_emergency_relationship": "Relación",
        "label_emergency_phone": "Teléfono del Contacto",
        "option_male": "Masculino",
        "option_female": "Femenino",
        "option_other": "Otro",
        "option_unknown": "Desconocido",
        "output_title": "Salida JSON FHIR R4",
        "meta_resource": "Tipo de Recurso:",
        "meta_standard": "Estándar FHIR:",
        "meta_timestamp": "Generado:",
        "error_required": "Este campo es obligatorio",
        "error_email": "Por favor ingrese un correo electrónico válido",
        "error_phone": "Por favor ingrese un número de teléfono válido",
        "error_validation": "Por favor complete todos los campos requeridos correctamente",
        "error_export": "La exportación falló",
        "success_download": "JSON guardado en",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(TRANSLATIONS)


def check_locale(locale: str) -> str:
    """Normalize and verify a locale identifier.

    Args:
        locale: Locale identifier, case-insensitive (e.g. "en", "ES")

    Returns:
        Lower-case supported locale identifier

    Raises:
        ValueError: If locale is not one of SUPPORTED_LOCALES
    """
    normalized = locale.strip().lower()
    if normalized not in TRANSLATIONS:
        raise ValueError(
            f"Unsupported locale: {locale}. "
            f"Must be one of: {', '.join(SUPPORTED_LOCALES)}"
        )
    return normalized


def get_message(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Look up a translated string.

    Args:
        key: Logical message key (e.g. "error_required")
        locale: Locale identifier

    Returns:
        Translated string

    Raises:
        ValueError: If locale is unsupported
        KeyError: If key is not defined in the table

    Example:
        >>> get_message("error_required", "es")
        'Este campo es obligatorio'
    """
    table = TRANSLATIONS[check_locale(locale)]
    try:
        return table[key]
    except KeyError:
        logger.error(f"Missing translation key '{key}' for locale '{locale}'")
        raise


def field_label(field_name: str, locale: str = DEFAULT_LOCALE) -> str:
    """Return the form label for an intake field (snake_case attribute name)."""
    return get_message(f"label_{field_name}", locale)


def gender_label(gender: str, locale: str = DEFAULT_LOCALE) -> str:
    """Return the display label for an administrative gender code.

    Codes without a translated option (free text from an intake file) are
    returned unchanged.

    Example:
        >>> gender_label("female", "es")
        'Femenino'
    """
    return TRANSLATIONS[check_locale(locale)].get(f"option_{gender}", gender)
