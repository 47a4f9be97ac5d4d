from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage, MAX_SEVERITY
from genogram_patterns.genogram_date import format_date
from genogram_patterns.places import CountryResolver, default_resolver
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import EvidenceType, Pattern, PatternEvidence
from .base import BaseRule, register_rule


@register_rule
@dataclass
class MigrationBreaksRule(BaseRule):
    rule_id: str = "migration_breaks"
    name: str = "Migration breaks"
    description: str = "Migrations that correlate with divorces or absences"
    priority: int = 6
    lineage: Lineage = Lineage.MIXED
    recommendations: Tuple[str, ...] = (
        "Explore the impact of migrations on the family",
        "Work on belonging and roots",
        "Identify patterns of adaptation and resistance to change",
    )
    min_migrations: int = 2
    min_correlated: int = 1
    resolver: Optional[CountryResolver] = field(default=None, repr=False)

    def _counts(self, context: PatternContext) -> Tuple[int, int, int]:
        return (
            len(context.events_by_kind(EventKind.MIGRATION)),
            len(context.events_by_kind(EventKind.DIVORCE)),
            len(context.events_by_kind(EventKind.ABSENCE)),
        )

    def predicate(self, context: PatternContext) -> bool:
        migrations, divorces, absences = self._counts(context)
        return migrations >= self.min_migrations and (divorces >= self.min_correlated or absences >= self.min_correlated)

    def score(self, context: PatternContext) -> int:
        migrations, divorces, absences = self._counts(context)
        return min(min(migrations * 10, 40) + 15 * (divorces + absences), 100)

    def _destination(self, event: FamilyEvent) -> str:
        if not event.location:
            return "an unknown location"
        resolver = self.resolver or default_resolver()
        country = resolver.country_name(event.location)
        if country and country.lower() != event.location.strip().lower():
            return f"{event.location} ({country})"
        return event.location

    def emit(self, context: PatternContext) -> Pattern:
        evidence = [
            self._evidence_for_event(
                context, event,
                description=(f"Migration to {self._destination(event)} in the "
                             f"{event.lineage.display_name} ({format_date(event.date)})"),
            )
            for event in context.events_by_kind(EventKind.MIGRATION)
        ]
        for kind in (EventKind.DIVORCE, EventKind.ABSENCE):
            for event in context.events_by_kind(kind):
                evidence.append(PatternEvidence(
                    description=(f"{kind.display_name.capitalize()} in the {event.lineage.display_name} "
                                 f"correlated with migration ({format_date(event.date)})"),
                    evidence_type=EvidenceType.TEMPORAL,
                    member_id=event.member_id,
                    event_id=event.id,
                    weight=event.severity / MAX_SEVERITY,
                ))
        return self._build_pattern(context, evidence)
