"""
findings.py
-----------
Types describing what the error detector reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class Category(str, Enum):
    ESTIMATION = "estimation"
    OVERCHARGE = "overcharge"
    UNDERCHARGE = "undercharge"
    CONSUMPTION_SPIKE = "consumption-spike"
    CONSUMPTION_DROP = "consumption-drop"
    ALLOCATION_UNDERUSE = "allocation-underuse"
    DISABILITY_ELIGIBILITY = "disability-eligibility"
    METER_READING_NOTE = "meter-reading-note"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FindingKind(str, Enum):
    """Report section a finding belongs to. Declaration order is display order."""

    ERROR = "error"
    WARNING = "warning"
    RECOMMENDATION = "recommendation"


KIND_ORDER = {kind: position for position, kind in enumerate(FindingKind)}


@dataclass(frozen=True)
class Finding:
    kind: FindingKind
    category: Category
    severity: Severity
    title: str
    description: str
    recommended_action: str
    # read-only, left out of the hash
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "recommended_action": self.recommended_action,
        }


class BillingBasis(str, Enum):
    """How the utility determined the billed consumption."""

    ESTIMATED = "estimated"
    MEASURED = "measured"
