from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from genogram_patterns.family_event import Lineage

MIN_SCORE = 0
MAX_SCORE = 100
HIGH_PRIORITY_SCORE = 70
HIGH_PRIORITY_WEIGHT = 0.8


def clamp_score(value: Any) -> int:
    """Clamp a score into 0..100."""
    return max(MIN_SCORE, min(MAX_SCORE, int(value)))


class EvidenceType(str, Enum):
    EVENT = "event"
    RELATIONSHIP = "relationship"
    GENERATIONAL = "generational"
    TEMPORAL = "temporal"
    STATISTICAL = "statistical"


@dataclass(frozen=True)
class PatternEvidence:
    """
    One atomic justification backing a Pattern.

    Attributes:
        description (str): Human-readable explanation.
        evidence_type (EvidenceType): Whether it stems from an event, a relationship, etc.
        member_id (Optional[str]): Member the evidence refers to.
        event_id (Optional[str]): Originating event.
        relationship_id (Optional[str]): Originating relationship.
        weight (float): Salience in [0, 1] for display emphasis. Not summed into the pattern score.
    """
    description: str
    evidence_type: EvidenceType = EvidenceType.EVENT
    member_id: Optional[str] = None
    event_id: Optional[str] = None
    relationship_id: Optional[str] = None
    weight: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'evidence_type', EvidenceType(self.evidence_type))
        object.__setattr__(self, 'weight', float(self.weight))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'evidence_type': self.evidence_type.value,
            'member_id': self.member_id,
            'event_id': self.event_id,
            'relationship_id': self.relationship_id,
            'weight': self.weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PatternEvidence:
        return cls(
            description=data['description'],
            evidence_type=data.get('evidence_type', EvidenceType.EVENT),
            member_id=data.get('member_id'),
            event_id=data.get('event_id'),
            relationship_id=data.get('relationship_id'),
            weight=data.get('weight', 0.0),
        )


@dataclass(frozen=True)
class Pattern:
    """
    A detected intergenerational pattern.

    Created fresh on every analysis pass and never mutated; use
    dataclasses.replace() to derive a copy (e.g. with unlock content attached).

    Attributes:
        rule_id (str): Id of the rule that emitted the pattern.
        name (str): Display name.
        description (str): Human description of the pattern.
        score (int): Confidence 0-100, clamped on construction.
        lineage (Lineage): Dominant lineage.
        evidence (Tuple[PatternEvidence, ...]): Supporting evidence, in rule order.
        recommendations (Tuple[str, ...]): Suggested reflections for the user.
        unlock_content_ids (Tuple[str, ...]): Content unlocked by this pattern (filled after detection).
    """
    rule_id: str
    name: str
    description: str
    score: int
    lineage: Lineage = Lineage.MIXED
    evidence: Tuple[PatternEvidence, ...] = ()
    recommendations: Tuple[str, ...] = ()
    unlock_content_ids: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, 'score', clamp_score(self.score))
        object.__setattr__(self, 'lineage', Lineage(self.lineage))
        object.__setattr__(self, 'evidence', tuple(self.evidence))
        object.__setattr__(self, 'recommendations', tuple(self.recommendations))
        object.__setattr__(self, 'unlock_content_ids', tuple(self.unlock_content_ids))

    def member_ids(self) -> List[str]:
        """Distinct member ids referenced by the evidence, in evidence order."""
        seen: List[str] = []
        for item in self.evidence:
            if item.member_id is not None and item.member_id not in seen:
                seen.append(item.member_id)
        return seen

    def involves_member(self, member_id: str) -> bool:
        return any(item.member_id == member_id for item in self.evidence)

    def is_high_priority(self, min_score: int = HIGH_PRIORITY_SCORE, min_weight: float = HIGH_PRIORITY_WEIGHT) -> bool:
        """
        Whether the pattern deserves emphasis when displayed.

        True when the score reaches min_score or any evidence entry weighs more
        than min_weight.
        """
        return self.score >= min_score or any(item.weight > min_weight for item in self.evidence)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            'rule_id': self.rule_id,
            'name': self.name,
            'description': self.description,
            'score': self.score,
            'lineage': self.lineage.value,
            'evidence': [item.to_dict() for item in self.evidence],
            'recommendations': list(self.recommendations),
            'unlock_content_ids': list(self.unlock_content_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Pattern:
        return cls(
            rule_id=data['rule_id'],
            name=data['name'],
            description=data.get('description', ""),
            score=data['score'],
            lineage=data.get('lineage', Lineage.MIXED),
            evidence=tuple(PatternEvidence.from_dict(item) for item in data.get('evidence', ())),
            recommendations=tuple(data.get('recommendations', ())),
            unlock_content_ids=tuple(data.get('unlock_content_ids', ())),
        )
