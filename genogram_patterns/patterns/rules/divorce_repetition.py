from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from genogram_patterns.family_event import EventKind, Lineage
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import Pattern
from .base import BaseRule, register_rule


@register_rule
@dataclass
class DivorceRepetitionRule(BaseRule):
    rule_id: str = "divorce_repetition"
    name: str = "Divorce repetition"
    description: str = "Three or more divorces in the maternal or paternal line"
    priority: int = 8
    lineage: Lineage = Lineage.MIXED
    recommendations: Tuple[str, ...] = (
        "Explore relationship patterns in the family",
        "Identify fears around commitment",
        "Work on stability in current relationships",
    )
    min_events: int = 3

    def predicate(self, context: PatternContext) -> bool:
        return len(context.events_by_kind(EventKind.DIVORCE)) >= self.min_events

    def score(self, context: PatternContext) -> int:
        divorces = context.events_by_kind(EventKind.DIVORCE)
        base = min(len(divorces) * 12, 50)
        severity_bonus = sum(event.severity for event in divorces) // 3
        return min(base + severity_bonus, 100)

    def emit(self, context: PatternContext) -> Pattern:
        evidence = [self._evidence_for_event(context, event)
                    for event in context.events_by_kind(EventKind.DIVORCE)]
        return self._build_pattern(context, evidence)
