"""
family_event.py - Significant life events in the family history.

Events are the evidence the pattern rules reason over. Each carries a kind,
the side of the family it is attributed to (lineage), a 1-5 severity and an
optional owning member.

Module: genogram_patterns.family_event
"""

__all__ = ['EventKind', 'FamilyEvent', 'Lineage']

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .genogram_date import PartialDate, coerce_date, date_to_json
from .member import new_id

logger = logging.getLogger(__name__)

MIN_SEVERITY = 1
MAX_SEVERITY = 5


class Lineage(str, Enum):
    PATERNAL = "paternal"
    MATERNAL = "maternal"
    MIXED = "mixed"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return f"{self.value} line"


class EventKind(str, Enum):
    DIVORCE = "divorce"
    ABSENCE = "absence"
    MIGRATION = "migration"
    DEATH = "death"
    DISEASE = "disease"
    SECRET = "secret"
    TRAUMA = "trauma"
    VIOLENCE = "violence"
    ADDICTION = "addiction"
    BANKRUPTCY = "bankruptcy"
    INFIDELITY = "infidelity"
    CHILD_LOSS = "child_loss"
    ABORTION = "abortion"
    WAR = "war"
    POVERTY = "poverty"
    SUCCESS = "success"
    EDUCATION = "education"
    CAREER = "career"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ')

    @property
    def is_traumatic(self) -> bool:
        return self in _TRAUMATIC_KINDS

    @property
    def is_family_secret(self) -> bool:
        """Kinds that families typically keep hidden."""
        return self in _SECRET_KINDS


_TRAUMATIC_KINDS = frozenset({
    EventKind.DEATH, EventKind.TRAUMA, EventKind.VIOLENCE,
    EventKind.CHILD_LOSS, EventKind.ABORTION, EventKind.WAR,
})
_SECRET_KINDS = frozenset({
    EventKind.SECRET, EventKind.ABORTION, EventKind.CHILD_LOSS,
    EventKind.INFIDELITY, EventKind.ADDICTION,
})


def clamp_severity(severity: Any) -> int:
    """Clamp a severity rating into 1..5."""
    return max(MIN_SEVERITY, min(MAX_SEVERITY, int(severity)))


@dataclass(frozen=True)
class FamilyEvent:
    """
    A life event attributed to a member and/or a lineage.

    Attributes:
        kind (EventKind): Category of the event.
        lineage (Lineage): Side of the family the event belongs to.
        member_id (Optional[str]): Owning member; None for events attached to a whole line.
        date (Optional[PartialDate]): When it happened.
        location (Optional[str]): Free-text place (used for migrations).
        severity (int): Subjective impact 1-5, clamped on construction.
        notes (str): Free-text notes.
        is_secret (bool): Whether the event was kept secret in the family.
        id (str): Opaque identifier.
    """
    kind: EventKind
    lineage: Lineage
    member_id: Optional[str] = None
    date: Optional[PartialDate] = None
    location: Optional[str] = None
    severity: int = MIN_SEVERITY
    notes: str = ""
    is_secret: bool = False
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        object.__setattr__(self, 'kind', EventKind(self.kind))
        object.__setattr__(self, 'lineage', Lineage(self.lineage))
        object.__setattr__(self, 'date', coerce_date(self.date))
        severity = clamp_severity(self.severity)
        if severity != self.severity:
            logger.debug(f"Event {self.id}: severity {self.severity} clamped to {severity}")
        object.__setattr__(self, 'severity', severity)

    def __str__(self) -> str:
        return f"FamilyEvent({self.kind.value}, {self.lineage.value}, member={self.member_id}, date={self.date})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'lineage': self.lineage.value,
            'member_id': self.member_id,
            'date': date_to_json(self.date),
            'location': self.location,
            'severity': self.severity,
            'notes': self.notes,
            'is_secret': self.is_secret,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FamilyEvent":
        return cls(
            kind=data['kind'],
            lineage=data.get('lineage', Lineage.UNKNOWN),
            member_id=data.get('member_id'),
            date=data.get('date'),
            location=data.get('location'),
            severity=data.get('severity') or MIN_SEVERITY,
            notes=data.get('notes', ""),
            is_secret=data.get('is_secret', False),
            id=data.get('id') or new_id(),
        )
