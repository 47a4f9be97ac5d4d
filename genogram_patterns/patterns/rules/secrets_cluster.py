from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage, MAX_SEVERITY
from genogram_patterns.genogram_date import format_date
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import Pattern, PatternEvidence
from .base import BaseRule, register_rule

SECRET_WEIGHT_FACTOR = 1.2


@register_rule
@dataclass
class SecretsClusterRule(BaseRule):
    rule_id: str = "secrets_cluster"
    name: str = "Family secrets cluster"
    description: str = "Secrets, child losses or undisclosed abortions in the family"
    priority: int = 10
    lineage: Lineage = Lineage.MIXED
    recommendations: Tuple[str, ...] = (
        "Create a safe space to talk about secrets",
        "Explore the impact of concealment on the family",
        "Work on transparency in current relationships",
    )
    min_events: int = 2

    def _events(self, context: PatternContext) -> Tuple[List[FamilyEvent], List[FamilyEvent], List[FamilyEvent]]:
        return (
            context.events_by_kind(EventKind.SECRET),
            context.events_by_kind(EventKind.CHILD_LOSS),
            context.events_by_kind(EventKind.ABORTION),
        )

    def predicate(self, context: PatternContext) -> bool:
        secrets, child_losses, abortions = self._events(context)
        return len(secrets) + len(child_losses) + len(abortions) >= self.min_events

    def score(self, context: PatternContext) -> int:
        secrets, child_losses, abortions = self._events(context)
        total = len(secrets) + len(child_losses) + len(abortions)
        score = min(total * 20, 70)
        score += 15 * len(secrets)
        score += 10 * sum(1 for event in child_losses if event.is_secret)
        score += 10 * sum(1 for event in abortions if event.is_secret)
        return min(score, 100)

    def _weighted_evidence(self, context: PatternContext, event: FamilyEvent, label: str) -> PatternEvidence:
        weight = event.severity / MAX_SEVERITY
        label = f"{label} in the {event.lineage.display_name} ({format_date(event.date)})"
        if event.is_secret:
            weight = min(weight * SECRET_WEIGHT_FACTOR, 1.0)
            label = f"{label} (kept secret)"
        return self._evidence_for_event(context, event, description=label, weight=weight)

    def emit(self, context: PatternContext) -> Pattern:
        secrets, child_losses, abortions = self._events(context)
        evidence = [self._evidence_for_event(context, event) for event in secrets]
        evidence.extend(self._weighted_evidence(context, event, "Child loss") for event in child_losses)
        evidence.extend(self._weighted_evidence(context, event, "Abortion") for event in abortions)
        return self._build_pattern(context, evidence)
