"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from fhir_intake.i18n import SUPPORTED_LOCALES

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Filename prefixes end up in file names; keep them to safe characters
FILENAME_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class ConverterConfig(BaseModel):
    """Configuration for intake conversion and export.

    Attributes:
        default_locale: Locale for validation messages when none is given
        filename_prefix: Prefix for exported JSON files
        output_dir: Default directory for exported JSON files
    """

    default_locale: str = Field(
        default="en",
        description="Locale for messages: en or es"
    )
    filename_prefix: str = Field(
        default="fhir-patient",
        description="Exported file name prefix"
    )
    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for exported records"
    )

    @field_validator("default_locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate locale is supported.

        Args:
            v: Locale identifier

        Returns:
            Validated locale (lowercase)

        Raises:
            ValueError: If locale is not supported
        """
        v_lower = v.strip().lower()
        if v_lower not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Invalid locale: {v}. Must be one of: {', '.join(SUPPORTED_LOCALES)}"
            )
        return v_lower

    @field_validator("filename_prefix")
    @classmethod
    def validate_filename_prefix(cls, v: str) -> str:
        if not FILENAME_PREFIX_PATTERN.match(v):
            raise ValueError(
                f"Invalid filename_prefix: {v}. "
                f"Use letters, digits, '.', '_' or '-' only"
            )
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact PII from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/fhir-intake.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact PII from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        converter: Conversion and export configuration
        logging: Logging configuration

    Example:
        >>> config = Config(converter=ConverterConfig(default_locale="es"))
        >>> config.converter.default_locale
        'es'
    """

    converter: ConverterConfig = ConverterConfig()
    logging: LoggingConfig = LoggingConfig()
