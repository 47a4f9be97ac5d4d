"""genogram_patterns package: Exposes the genogram model and the intergenerational pattern detection engine."""

from genogram_patterns.genogram_date import PartialDate, coerce_date
from genogram_patterns.member import FamilyMember, Sex
from genogram_patterns.relationship import Relationship, RelationshipType
from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage
from genogram_patterns.places import CountryResolver
from genogram_patterns.patterns import (
    ContentCatalog,
    Pattern,
    PatternAnalysis,
    PatternConfig,
    PatternDetection,
    PatternEngine,
    PatternEvidence,
)

__all__ = [
    "ContentCatalog",
    "CountryResolver",
    "EventKind",
    "FamilyEvent",
    "FamilyMember",
    "Lineage",
    "PartialDate",
    "Pattern",
    "PatternAnalysis",
    "PatternConfig",
    "PatternDetection",
    "PatternEngine",
    "PatternEvidence",
    "Relationship",
    "RelationshipType",
    "Sex",
    "coerce_date",
]
