"""
member.py - Family member modeling for genogram data.

Provides the FamilyMember record and the Sex enumeration. Members are created
and edited by the host's genogram editor; the pattern engine only reads them.

Module: genogram_patterns.member
"""

__all__ = ['FamilyMember', 'Sex', 'new_id']

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date as _date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .genogram_date import PartialDate, age_in_years, coerce_date, date_to_json

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid.uuid4())


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "Sex":
        """
        Accept a Sex, its value, or a GEDCOM-style 'M'/'F'/'U' letter.

        Unrecognized values map to UNKNOWN.
        """
        if isinstance(value, Sex):
            return value
        if value is None:
            return cls.UNKNOWN
        text = str(value).strip().lower()
        letters = {'m': cls.MALE, 'f': cls.FEMALE, 'u': cls.UNKNOWN}
        if text in letters:
            return letters[text]
        try:
            return cls(text)
        except ValueError:
            logger.warning(f"Unknown sex value '{value}', using 'unknown'")
            return cls.UNKNOWN


@dataclass(frozen=True)
class FamilyMember:
    """
    A person in the genogram.

    Attributes:
        id (str): Opaque identifier.
        given_name (str): Given name.
        family_name (str): Family name.
        sex (Sex): Biological sex.
        birth_date (Optional[PartialDate]): Birth date (any genogram_date input is accepted).
        death_date (Optional[PartialDate]): Death date.
        is_alive (bool): Whether the member is alive.
        is_present (bool): Whether the member is present in the user's household/life.
        notes (str): Free-text notes (never analyzed).
        tags (Tuple[str, ...]): Free-form labels.
        display_name (str): Name shown to the user; derived from given/family name when empty.
    """
    id: str = field(default_factory=new_id)
    given_name: str = ""
    family_name: str = ""
    sex: Sex = Sex.UNKNOWN
    birth_date: Optional[PartialDate] = None
    death_date: Optional[PartialDate] = None
    is_alive: bool = True
    is_present: bool = True
    notes: str = ""
    tags: Tuple[str, ...] = ()
    display_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'sex', Sex.coerce(self.sex))
        object.__setattr__(self, 'birth_date', coerce_date(self.birth_date))
        object.__setattr__(self, 'death_date', coerce_date(self.death_date))
        object.__setattr__(self, 'tags', tuple(self.tags or ()))
        if not self.display_name:
            object.__setattr__(self, 'display_name', f"{self.given_name} {self.family_name}".strip())

    def __str__(self) -> str:
        return f"FamilyMember(id={self.id}, name={self.display_name})"

    def age_at(self, when: Any = None) -> Optional[int]:
        """
        Age in completed years at a date, or at death if the member has died.

        Args:
            when: Reference date (defaults to today).

        Returns:
            Age in years, or None when the birth date is unknown.
        """
        if self.birth_date is None:
            return None
        end = self.death_date or coerce_date(when) or coerce_date(_date.today())
        return age_in_years(self.birth_date, end)

    @property
    def short_display_name(self) -> str:
        """First two words of the display name."""
        parts = self.display_name.split()
        return " ".join(parts[:2]) if len(parts) > 2 else self.display_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            'id': self.id,
            'given_name': self.given_name,
            'family_name': self.family_name,
            'display_name': self.display_name,
            'sex': self.sex.value,
            'birth_date': date_to_json(self.birth_date),
            'death_date': date_to_json(self.death_date),
            'is_alive': self.is_alive,
            'is_present': self.is_present,
            'notes': self.notes,
            'tags': list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FamilyMember":
        """Create from a dictionary such as one produced by to_dict()."""
        return cls(
            id=data.get('id') or new_id(),
            given_name=data.get('given_name', ""),
            family_name=data.get('family_name', ""),
            sex=data.get('sex'),
            birth_date=data.get('birth_date'),
            death_date=data.get('death_date'),
            is_alive=data.get('is_alive', True),
            is_present=data.get('is_present', True),
            notes=data.get('notes', ""),
            tags=tuple(data.get('tags', ())),
            display_name=data.get('display_name', ""),
        )
