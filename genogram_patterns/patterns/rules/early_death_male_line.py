from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage
from genogram_patterns.genogram_date import age_in_years, format_date
from genogram_patterns.member import FamilyMember, Sex
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import Pattern
from .base import BaseRule, register_rule

logger = logging.getLogger(__name__)


@register_rule
@dataclass
class EarlyDeathMaleLineRule(BaseRule):
    rule_id: str = "early_death_male_line"
    name: str = "Early death in the male line"
    description: str = "Two or more male deaths before the age limit in the paternal line"
    priority: int = 7
    lineage: Lineage = Lineage.PATERNAL
    recommendations: Tuple[str, ...] = (
        "Explore the impact of early losses",
        "Work on the fear of premature death",
        "Identify health patterns in the male line",
    )
    min_events: int = 2
    age_limit: int = 40

    def _early_deaths(self, context: PatternContext) -> List[Tuple[FamilyEvent, FamilyMember, int]]:
        """
        Paternal deaths of male members younger than age_limit.

        Events without a known member, birth date or event date are skipped;
        age is never estimated.
        """
        found = []
        for event in context.events_by_kind(EventKind.DEATH):
            if event.lineage is not Lineage.PATERNAL:
                continue
            member = context.member(event.member_id)
            if member is None or member.sex is not Sex.MALE:
                continue
            age = age_in_years(member.birth_date, event.date)
            if age is None or age < 0:
                logger.debug(f"{self.rule_id}: no usable age at death for event {event.id}")
                continue
            if age < self.age_limit:
                found.append((event, member, age))
        return found

    def predicate(self, context: PatternContext) -> bool:
        return len(self._early_deaths(context)) >= self.min_events

    def score(self, context: PatternContext) -> int:
        return min(len(self._early_deaths(context)) * 25, 100)

    def emit(self, context: PatternContext) -> Pattern:
        evidence = [
            self._evidence_for_event(
                context, event,
                description=(f"Early death of {member.display_name or member.id} at age {age} "
                             f"in the {event.lineage.display_name} ({format_date(event.date)})"),
            )
            for event, member, age in self._early_deaths(context)
        ]
        return self._build_pattern(context, evidence)
