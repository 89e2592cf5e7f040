"""Audit trail functionality for the FHIR Intake Converter.

This module provides structured audit logging for conversions and exports.
"""

import time
import uuid
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)

# Key fields emitted first, in this order
FIELD_ORDER = [
    "status",
    "record_id",
    "locale",
    "error_count",
    "error_fields",
    "output_file",
    "duration",
    "error_message",
    "correlation_id",
]


def log_audit_event(event_type: str, details: Dict[str, Any]) -> str:
    """Log an audit trail event.

    Creates a structured audit log entry. Audit events are logged at INFO
    level, or ERROR level when ``details["status"]`` is "failure".

    Args:
        event_type: Type of operation (e.g., "PATIENT_CONVERTED",
                   "VALIDATION_FAILED", "RECORD_EXPORTED", "EXPORT_FAILED")
        details: Dictionary with event details. Common fields include:
                - status: "success" or "failure"
                - record_id: Generated FHIR resource id
                - locale: Locale used for messages
                - error_count / error_fields: Validation failure summary
                - output_file: Export destination
                - duration: Operation duration in seconds
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for related events

    Returns:
        The correlation ID attached to the event

    Example:
        >>> log_audit_event("PATIENT_CONVERTED", {
        ...     "status": "success",
        ...     "record_id": "patient-1760000000000-k3j9x0a1b",
        ...     "duration": 0.002,
        ... })
    """
    details = dict(details)
    details.setdefault("timestamp", time.time())
    details.setdefault("correlation_id", str(uuid.uuid4()))

    message_parts = [f"AUDIT [{event_type}]"]

    for field in FIELD_ORDER:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.3f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in FIELD_ORDER and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)

    return details["correlation_id"]
