"""Flat patient intake data model.

This module defines the FlatIntake dataclass that carries the single-level
record collected from the intake form, before any mapping to FHIR.
"""

from dataclasses import asdict, dataclass


# Form (camelCase) field name for each dataclass attribute
FORM_FIELD_NAMES: dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "dob": "dob",
    "gender": "gender",
    "phone": "phone",
    "email": "email",
    "address_line": "addressLine",
    "city": "city",
    "state": "state",
    "postal_code": "postalCode",
    "emergency_name": "emergencyName",
    "emergency_relationship": "emergencyRelationship",
    "emergency_phone": "emergencyPhone",
}


@dataclass(frozen=True)
class FlatIntake:
    """Patient intake form contents.

    Every attribute is a plain string; an empty string means the form field
    was left blank.

    Attributes:
        first_name: Patient's given name (required)
        last_name: Patient's family name (required)
        dob: Date of birth as ISO 8601 date string, e.g. 1985-03-15 (required)
        gender: Administrative gender: male, female, other, unknown (required)
        phone: Home phone number, free text
        email: Home email address, free text
        address_line: Street address
        city: City
        state: State code
        postal_code: Postal / ZIP code
        emergency_name: Emergency contact full name
        emergency_relationship: Emergency contact relationship text
        emergency_phone: Emergency contact phone number
    """

    first_name: str = ""
    last_name: str = ""
    dob: str = ""
    gender: str = ""
    phone: str = ""
    email: str = ""
    address_line: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    emergency_name: str = ""
    emergency_relationship: str = ""
    emergency_phone: str = ""

    def to_form_dict(self) -> dict[str, str]:
        """Return the intake keyed by form (camelCase) field names."""
        return {FORM_FIELD_NAMES[key]: value for key, value in asdict(self).items()}

    @property
    def has_address(self) -> bool:
        return bool(self.address_line or self.city or self.state or self.postal_code)

    @property
    def has_emergency_contact(self) -> bool:
        return bool(self.emergency_name or self.emergency_phone)
