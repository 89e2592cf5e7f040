"""Custom log formatters for the FHIR Intake Converter.

This module provides specialized formatters for logging, including PII redaction.
"""

import logging
import re
from typing import List, Tuple


class PIIRedactingFormatter(logging.Formatter):
    """Custom formatter that redacts Personally Identifiable Information (PII) from log messages.

    This formatter applies regex-based pattern matching to identify and redact
    sensitive intake data such as patient names, email addresses, phone numbers
    and medical record numbers.

    Attributes:
        redact_pii: Whether to enable PII redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = PIIRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_pii=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_pii: bool = False,
    ) -> None:
        """Initialize the PIIRedactingFormatter.

        Args:
            fmt: Log message format string
            datefmt: Date format string (optional)
            redact_pii: Whether to enable PII redaction
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_pii = redact_pii

        # Define redaction patterns: (regex, replacement_text)
        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # Email addresses
            (re.compile(r"[^\s@\"']+@[^\s@\"']+\.[^\s@\"']+"), "[EMAIL-REDACTED]"),

            # Medical record numbers: MRN123456
            (re.compile(r"\bMRN\d{6}\b"), "[MRN-REDACTED]"),

            # Phone numbers: (555) 123-4567, 555-123-4567, 5551234567
            (re.compile(r"\(?\b\d{3}\)?[\s-]?\d{3}-?\d{4}\b"), "[PHONE-REDACTED]"),

            # Matches: name="María García", name='Jane Smith', name=Bob
            (re.compile(r"name=[\"']?([^\"'|]+)[\"']?"), "name=[NAME-REDACTED]"),

            # Matches: "Patient: María García", "Contact: Carlos García"
            (re.compile(r"(Patient|Contact):\s+(\w+(?:\s+\w+)+)"),
             r"\1: [NAME-REDACTED]"),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional PII redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with PII redacted if enabled
        """
        original = super().format(record)

        if self.redact_pii:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
