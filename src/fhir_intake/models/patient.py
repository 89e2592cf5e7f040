"""FHIR Patient record data model.

This module defines the PatientRecord type produced by the mapper. The record
wraps the FHIR R4 Patient resource tree and is read-only once created.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator


@dataclass(frozen=True)
class PatientRecord(Mapping):
    """Immutable FHIR R4 Patient resource.

    The resource tree is stored privately and exposed through the read-only
    Mapping interface. Callers that need a mutable tree (for serialization or
    further editing) get a deep copy from ``to_dict()``.

    Attributes:
        resource: FHIR Patient resource as nested dicts/lists, key order preserved

    Example:
        >>> record = map_to_patient(intake)
        >>> record["resourceType"]
        'Patient'
        >>> record.record_id.startswith("patient-")
        True
    """

    resource: Mapping[str, Any] = field(repr=False)

    def __post_init__(self) -> None:
        """Freeze a private deep copy of the resource tree."""
        object.__setattr__(
            self, "resource", MappingProxyType(copy.deepcopy(dict(self.resource)))
        )

    def __getitem__(self, key: str) -> Any:
        return copy.deepcopy(self.resource[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self.resource)

    def __len__(self) -> int:
        return len(self.resource)

    @property
    def record_id(self) -> str:
        """Generated resource id."""
        return self.resource["id"]

    @property
    def mrn(self) -> str:
        """Generated medical record number."""
        return self.resource["identifier"][0]["value"]

    @property
    def last_updated(self) -> str:
        """Generation timestamp (ISO 8601)."""
        return self.resource["meta"]["lastUpdated"]

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the resource tree.

        Returns:
            Dictionary ready for JSON serialization
        """
        return copy.deepcopy(dict(self.resource))
