"""
Base classes and registry for pattern rules.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol, Tuple, Type, runtime_checkable

from genogram_patterns.family_event import FamilyEvent, Lineage, MAX_SEVERITY
from genogram_patterns.genogram_date import format_date
from genogram_patterns.patterns.context import PatternContext
from genogram_patterns.patterns.model import EvidenceType, Pattern, PatternEvidence, clamp_score

logger = logging.getLogger(__name__)

MIN_PRIORITY = 1
MAX_PRIORITY = 10

# Rule Registry
_RULE_REGISTRY: Dict[str, Type['BaseRule']] = {}


class PatternRuleError(RuntimeError):
    """Raised when a rule breaks its contract (e.g. emits a pattern without evidence)."""


@runtime_checkable
class PatternRule(Protocol):
    """Capability set every rule provides: metadata plus predicate/score/emit."""
    rule_id: str
    name: str
    description: str
    priority: int

    def predicate(self, context: PatternContext) -> bool: ...

    def score(self, context: PatternContext) -> int: ...

    def emit(self, context: PatternContext) -> Pattern: ...


def register_rule(cls: Type['BaseRule']) -> Type['BaseRule']:
    """
    Decorator to register a rule class in the global registry.

    Usage:
        @register_rule
        @dataclass
        class MyRule(BaseRule):
            rule_id: str = "my_rule"
            ...
    """
    rule_id = getattr(cls, 'rule_id', None)
    if rule_id:
        _RULE_REGISTRY[rule_id] = cls
        logger.debug(f"Registered pattern rule: {rule_id}")
    else:
        logger.warning(f"Rule {cls.__name__} missing 'rule_id' attribute, not registered")
    return cls


def get_rule_registry() -> Dict[str, Type['BaseRule']]:
    """Get a copy of the global rule registry, in registration order."""
    return _RULE_REGISTRY.copy()


@dataclass
class BaseRule(ABC):
    """
    Base class for pattern rules.

    Rules are pure functions of a PatternContext: they hold configuration only,
    never state carried between analysis passes.

    Attributes:
        rule_id: Unique identifier, also the key in config sections.
        name: Display name of the emitted pattern.
        description: Display description of the emitted pattern.
        priority: 1-10, higher rules are evaluated (and win score ties) first.
        lineage: Lineage reported on the emitted pattern.
        recommendations: Suggestions attached to the emitted pattern.
    """
    rule_id: str = ""
    name: str = ""
    description: str = ""
    priority: int = 5
    lineage: Lineage = Lineage.MIXED
    recommendations: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.rule_id:
            raise ValueError(f"{self.__class__.__name__} must define rule_id")
        if not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            raise ValueError(f"{self.rule_id}: priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {self.priority}")
        self.lineage = Lineage(self.lineage)
        self.recommendations = tuple(self.recommendations)

    @abstractmethod
    def predicate(self, context: PatternContext) -> bool:
        """Whether the rule fires for the context."""

    @abstractmethod
    def score(self, context: PatternContext) -> int:
        """Confidence 0-100; only meaningful when predicate() is True."""

    @abstractmethod
    def emit(self, context: PatternContext) -> Pattern:
        """Build the Pattern; only valid when predicate() is True."""

    def _evidence_for_event(
        self,
        context: PatternContext,
        event: FamilyEvent,
        description: Optional[str] = None,
        weight: Optional[float] = None,
    ) -> PatternEvidence:
        """
        Evidence entry for a single event.

        The default description names the event kind, lineage, member (when
        known) and date; the default weight is severity / 5.
        """
        if description is None:
            member = context.member(event.member_id)
            subject = f" of {member.display_name}" if member and member.display_name else ""
            description = (f"{event.kind.display_name.capitalize()}{subject} in the "
                           f"{event.lineage.display_name} ({format_date(event.date)})")
        if weight is None:
            weight = event.severity / MAX_SEVERITY
        return PatternEvidence(
            description=description,
            evidence_type=EvidenceType.EVENT,
            member_id=event.member_id,
            event_id=event.id,
            weight=weight,
        )

    def _build_pattern(self, context: PatternContext, evidence: Iterable[PatternEvidence]) -> Pattern:
        """
        Assemble the Pattern for this rule.

        Raises:
            PatternRuleError: If the rule does not fire for the context or no
                evidence was produced.
        """
        if not self.predicate(context):
            raise PatternRuleError(f"{self.rule_id}: emit() called although the rule does not fire")
        evidence = tuple(evidence)
        if not evidence:
            raise PatternRuleError(f"{self.rule_id}: rule fired but produced no evidence")
        return Pattern(
            rule_id=self.rule_id,
            name=self.name,
            description=self.description,
            score=clamp_score(self.score(context)),
            lineage=self.lineage,
            evidence=evidence,
            recommendations=self.recommendations,
        )

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(rule_id={self.rule_id}, priority={self.priority})"
