"""
Summary statistics over a genogram snapshot and over detected patterns.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from genogram_patterns.family_event import EventKind
from genogram_patterns.places import CountryResolver, default_resolver

from .context import PatternContext
from .model import HIGH_PRIORITY_SCORE, HIGH_PRIORITY_WEIGHT, Pattern


@dataclass
class FamilyTreeStatistics:
    """
    Counts describing a genogram snapshot.

    Attributes:
        total_members: Number of distinct members.
        total_events: Number of events (attached and unattached).
        total_relationships: Number of relationships.
        events_by_kind: Event kind value -> count.
        events_by_lineage: Lineage value -> count.
        unattached_events: Events without an owning member.
        traumatic_events: Events whose kind is traumatic.
        secret_events: Events flagged as kept secret.
        generation_depth: Ancestors of the root member within max_depth.
        migration_countries: Country name -> number of migrations to it.
    """
    total_members: int = 0
    total_events: int = 0
    total_relationships: int = 0
    events_by_kind: Dict[str, int] = field(default_factory=dict)
    events_by_lineage: Dict[str, int] = field(default_factory=dict)
    unattached_events: int = 0
    traumatic_events: int = 0
    secret_events: int = 0
    generation_depth: int = 0
    migration_countries: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_members': self.total_members,
            'total_events': self.total_events,
            'total_relationships': self.total_relationships,
            'events_by_kind': dict(self.events_by_kind),
            'events_by_lineage': dict(self.events_by_lineage),
            'unattached_events': self.unattached_events,
            'traumatic_events': self.traumatic_events,
            'secret_events': self.secret_events,
            'generation_depth': self.generation_depth,
            'migration_countries': dict(self.migration_countries),
        }


def calculate_statistics(context: PatternContext, resolver: Optional[CountryResolver] = None) -> FamilyTreeStatistics:
    """
    Compute FamilyTreeStatistics for a context.

    Args:
        context: Built pattern context.
        resolver: Country resolver for migration destinations (packaged default when None).
    """
    events = context.all_events()
    resolver = resolver or default_resolver()

    migration_countries: Counter = Counter()
    for event in events:
        if event.kind is EventKind.MIGRATION and event.location:
            country = resolver.country_name(event.location)
            if country:
                migration_countries[country] += 1

    return FamilyTreeStatistics(
        total_members=len(context.members_by_id),
        total_events=len(events),
        total_relationships=len(context.all_relationships()),
        events_by_kind=dict(Counter(event.kind.value for event in events)),
        events_by_lineage=dict(Counter(event.lineage.value for event in events)),
        unattached_events=len(context.events_for_member(None)),
        traumatic_events=sum(1 for event in events if event.kind.is_traumatic),
        secret_events=sum(1 for event in events if event.is_secret),
        generation_depth=context.generation_depth(context.root_member_id),
        migration_countries=dict(migration_countries),
    )


@dataclass
class PatternSummary:
    """Counts over a list of detected patterns."""
    total: int = 0
    critical: int = 0
    high_priority: int = 0
    by_rule: Dict[str, int] = field(default_factory=dict)
    average_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'critical': self.critical,
            'high_priority': self.high_priority,
            'by_rule': dict(self.by_rule),
            'average_score': self.average_score,
        }


def summarize_patterns(patterns: Iterable[Pattern], critical_score: int = 80,
                       high_priority_score: int = HIGH_PRIORITY_SCORE,
                       high_priority_weight: float = HIGH_PRIORITY_WEIGHT) -> PatternSummary:
    """
    Summarize detected patterns.

    Args:
        patterns: Patterns, typically the engine's result.
        critical_score: Score at or above which a pattern counts as critical.
        high_priority_score: Score at or above which a pattern is high priority.
        high_priority_weight: Evidence weight above which a pattern is high priority.
    """
    patterns: List[Pattern] = list(patterns)
    if not patterns:
        return PatternSummary()
    return PatternSummary(
        total=len(patterns),
        critical=sum(1 for pattern in patterns if pattern.score >= critical_score),
        high_priority=sum(1 for pattern in patterns if pattern.is_high_priority(high_priority_score, high_priority_weight)),
        by_rule=dict(Counter(pattern.rule_id for pattern in patterns)),
        average_score=round(sum(pattern.score for pattern in patterns) / len(patterns), 1),
    )
