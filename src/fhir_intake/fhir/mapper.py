"""Mapping of intake records to FHIR R4 Patient resources.

Target: HL7 FHIR R4 (v4.0.1) Patient, US Core patient profile.

The mapper assumes the intake already passed validation. It does not re-check
required fields, but optional structures (telecom entries, address, emergency
contact) are only emitted for non-empty input.
"""

import calendar
import random
from datetime import datetime, timezone
from typing import Any, Optional

from fhir_intake.fhir.narrative import patient_narrative
from fhir_intake.intake.id_generator import generate_mrn, generate_record_id
from fhir_intake.logging_audit import get_logger
from fhir_intake.models.intake import FlatIntake
from fhir_intake.models.patient import PatientRecord


logger = get_logger(__name__)

FHIR_VERSION = "4.0.1"
RESOURCE_TYPE = "Patient"
META_VERSION_ID = "1"
US_CORE_PATIENT_PROFILE = "http://hl7.org/fhir/us/core/StructureDefinition/us-core-patient"
MRN_SYSTEM = "urn:oid:2.16.840.1.113883.4.1"
ADDRESS_COUNTRY = "US"

# HL7 v2 table 0131 (contact role)
CONTACT_ROLE_SYSTEM = "http://terminology.hl7.org/CodeSystem/v2-0131"
EMERGENCY_CONTACT_CODE = "C"
EMERGENCY_CONTACT_DISPLAY = "Emergency Contact"


def format_instant(moment: datetime) -> str:
    """Format a datetime as a FHIR instant: UTC, millisecond precision, Z suffix.

    Example:
        >>> format_instant(datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        '2025-01-02T03:04:05.678Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch, truncated like ``format_instant``.

    Naive datetimes are taken as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return calendar.timegm(utc.utctimetuple()) * 1000 + utc.microsecond // 1000


def split_contact_name(full_name: str) -> dict[str, Any]:
    """Split a contact's full name into FHIR HumanName parts.

    Splits on single spaces: the last token is the family name and all
    preceding tokens are given names. Single-token names yield an empty given
    list; repeated spaces produce empty tokens.

    Example:
        >>> split_contact_name("Carlos García")
        {'family': 'García', 'given': ['Carlos']}
    """
    parts = full_name.split(" ")
    return {"family": parts[-1], "given": parts[:-1]}


def _telecom(intake: FlatIntake) -> list[dict[str, str]]:
    telecom = []
    if intake.phone:
        telecom.append({"system": "phone", "value": intake.phone, "use": "home"})
    if intake.email:
        telecom.append({"system": "email", "value": intake.email, "use": "home"})
    return telecom


def _address(intake: FlatIntake) -> list[dict[str, Any]]:
    if not intake.has_address:
        return []

    address: dict[str, Any] = {"use": "home", "type": "both"}
    if intake.address_line:
        address["line"] = [intake.address_line]
    if intake.city:
        address["city"] = intake.city
    if intake.state:
        address["state"] = intake.state
    if intake.postal_code:
        address["postalCode"] = intake.postal_code
    address["country"] = ADDRESS_COUNTRY
    return [address]


def _emergency_contact(intake: FlatIntake) -> list[dict[str, Any]]:
    if not intake.has_emergency_contact:
        return []

    contact: dict[str, Any] = {
        "relationship": [
            {
                "coding": [
                    {
                        "system": CONTACT_ROLE_SYSTEM,
                        "code": EMERGENCY_CONTACT_CODE,
                        "display": intake.emergency_relationship
                        or EMERGENCY_CONTACT_DISPLAY,
                    }
                ]
            }
        ]
    }
    if intake.emergency_name:
        contact["name"] = split_contact_name(intake.emergency_name)
    if intake.emergency_phone:
        contact["telecom"] = [
            {"system": "phone", "value": intake.emergency_phone, "use": "mobile"}
        ]
    return [contact]


def map_to_patient(
    intake: FlatIntake,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> PatientRecord:
    """Map a validated intake record to a FHIR R4 Patient resource.

    A fresh record id and MRN are generated on every call, so two calls with
    the same intake differ only in id, identifier value and meta.lastUpdated.

    Args:
        intake: Intake record that passed ``validate``
        now: Generation time. Defaults to the current UTC time.
        rng: Random generator for the synthetic identifiers

    Returns:
        Immutable PatientRecord

    Example:
        >>> record = map_to_patient(demo_intake())
        >>> [t["system"] for t in record["telecom"]]
        ['phone', 'email']
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now_ms = epoch_millis(now)

    resource: dict[str, Any] = {
        "resourceType": RESOURCE_TYPE,
        "id": generate_record_id(now_ms=now_ms, rng=rng),
        "meta": {
            "versionId": META_VERSION_ID,
            "lastUpdated": format_instant(now),
            "profile": [US_CORE_PATIENT_PROFILE],
        },
        "text": patient_narrative(intake.first_name, intake.last_name),
        "identifier": [
            {
                "use": "official",
                "system": MRN_SYSTEM,
                "value": generate_mrn(rng=rng),
            }
        ],
        "active": True,
        "name": [
            {
                "use": "official",
                "family": intake.last_name,
                "given": [intake.first_name],
            }
        ],
        "telecom": _telecom(intake),
        "gender": intake.gender,
        "birthDate": intake.dob,
        "address": _address(intake),
        "contact": _emergency_contact(intake),
    }

    record = PatientRecord(resource)
    logger.debug(f"Mapped intake to FHIR Patient {record.record_id} with {record.mrn}")
    return record
