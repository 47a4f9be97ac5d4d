from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import Pattern
from .base import BaseRule, register_rule


@register_rule
@dataclass
class PaternalAbsenceChainRule(BaseRule):
    rule_id: str = "paternal_absence_chain"
    name: str = "Paternal absence chain"
    description: str = "Two or more generations with an absent father"
    priority: int = 9
    lineage: Lineage = Lineage.PATERNAL
    recommendations: Tuple[str, ...] = (
        "Work on the relationship with the father figure",
        "Explore the impact of paternal absence",
        "Identify abandonment patterns in current relationships",
    )
    min_events: int = 2

    def _absences(self, context: PatternContext) -> List[FamilyEvent]:
        return [event for event in context.events_by_kind(EventKind.ABSENCE)
                if event.lineage is Lineage.PATERNAL]

    def predicate(self, context: PatternContext) -> bool:
        return len(self._absences(context)) >= self.min_events

    def score(self, context: PatternContext) -> int:
        absences = self._absences(context)
        base = min(len(absences) * 15, 60)
        severity_bonus = sum(event.severity for event in absences) // 2
        return min(base + severity_bonus, 100)

    def emit(self, context: PatternContext) -> Pattern:
        evidence = [self._evidence_for_event(context, event) for event in self._absences(context)]
        return self._build_pattern(context, evidence)
