"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "converter": {
        # Locale for validation messages and CLI labels
        "default_locale": "en",
        # Exported files are named <prefix>-<YYYY-MM-DD>.json
        "filename_prefix": "fhir-patient",
        "output_dir": "output",
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/fhir-intake.log",
        # Intake data is PHI; redaction is opt-in like the rest of the logging options
        "redact_pii": False,
    },
}

DEFAULT_CONFIG_PATH = "config/config.json"
