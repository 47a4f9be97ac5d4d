"""
relationship.py - Directed relationships between genogram members.

Module: genogram_patterns.relationship
"""

__all__ = ['Relationship', 'RelationshipType']

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .genogram_date import PartialDate, coerce_date, date_to_json
from .member import new_id


class RelationshipType(str, Enum):
    PARENT = "parent"
    PARTNER = "partner"
    SIBLING = "sibling"
    CHILD = "child"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    UNCLE = "uncle"
    AUNT = "aunt"
    COUSIN = "cousin"
    NEPHEW = "nephew"
    NIECE = "niece"
    EX_PARTNER = "ex_partner"

    @property
    def is_direct_lineage(self) -> bool:
        return self in (RelationshipType.PARENT, RelationshipType.CHILD,
                        RelationshipType.GRANDPARENT, RelationshipType.GRANDCHILD)


@dataclass(frozen=True)
class Relationship:
    """
    A directed edge between two members.

    For PARENT edges the edge belongs to the child: ``from_member_id`` is the
    child and ``to_member_id`` is the parent. Ancestry is walked along these
    edges from the child's side.

    Attributes:
        type (RelationshipType): Kind of relationship.
        from_member_id (str): Source member id.
        to_member_id (str): Target member id.
        start_date (Optional[PartialDate]): When the relationship began.
        end_date (Optional[PartialDate]): When it ended (separation, death...).
        notes (str): Free-text notes.
        id (str): Opaque identifier.
    """
    type: RelationshipType
    from_member_id: str
    to_member_id: str
    start_date: Optional[PartialDate] = None
    end_date: Optional[PartialDate] = None
    notes: str = ""
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        object.__setattr__(self, 'type', RelationshipType(self.type))
        object.__setattr__(self, 'start_date', coerce_date(self.start_date))
        object.__setattr__(self, 'end_date', coerce_date(self.end_date))

    @property
    def is_active(self) -> bool:
        """True while the relationship has no end date."""
        return self.end_date is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'from_member_id': self.from_member_id,
            'to_member_id': self.to_member_id,
            'start_date': date_to_json(self.start_date),
            'end_date': date_to_json(self.end_date),
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        return cls(
            type=data['type'],
            from_member_id=data['from_member_id'],
            to_member_id=data['to_member_id'],
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
            notes=data.get('notes', ""),
            id=data.get('id') or new_id(),
        )
