"""I18n module.

This module provides the bilingual (English/Spanish) translation table.
"""

from .translations import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    check_locale,
    field_label,
    gender_label,
    get_message,
)

__all__ = [
    "DEFAULT_LOCALE",
    "SUPPORTED_LOCALES",
    "check_locale",
    "field_label",
    "gender_label",
    "get_message",
]
