"""Config module.

This module provides configuration management functionality.
"""

from fhir_intake.config.manager import load_config
from fhir_intake.config.schema import (
    Config,
    ConverterConfig,
    LoggingConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Configuration models
    "Config",
    "ConverterConfig",
    "LoggingConfig",
]
