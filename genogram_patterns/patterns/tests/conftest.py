"""
Pytest fixtures for pattern detection tests.
"""
from __future__ import annotations

import pytest
from typing import List

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage
from genogram_patterns.member import FamilyMember, Sex
from genogram_patterns.relationship import Relationship, RelationshipType
from genogram_patterns.places import CountryResolver
from genogram_patterns.patterns.config import PatternConfig
from genogram_patterns.patterns.context import build_context


@pytest.fixture
def make_member():
    """Create a FamilyMember with a readable id."""
    def _create_member(member_id: str, name: str = "Test Person", sex=Sex.MALE,
                       birth_date=None, death_date=None) -> FamilyMember:
        given, _, family = name.partition(" ")
        return FamilyMember(id=member_id, given_name=given, family_name=family, sex=sex,
                            birth_date=birth_date, death_date=death_date)

    return _create_member


@pytest.fixture
def make_event():
    """Create a FamilyEvent; ids are derived from kind and a counter for stable assertions."""
    counter = {'n': 0}

    def _create_event(kind: EventKind, lineage: Lineage = Lineage.PATERNAL, member_id=None,
                      severity: int = 3, date=None, location=None, is_secret: bool = False) -> FamilyEvent:
        counter['n'] += 1
        return FamilyEvent(kind=kind, lineage=lineage, member_id=member_id, severity=severity,
                           date=date, location=location, is_secret=is_secret,
                           id=f"E{counter['n']}-{kind.value}")

    return _create_event


@pytest.fixture
def parent_edge():
    """Create a parent edge: child -> parent."""
    def _create_edge(child_id: str, parent_id: str) -> Relationship:
        return Relationship(type=RelationshipType.PARENT, from_member_id=child_id, to_member_id=parent_id,
                            id=f"R-{child_id}-{parent_id}")

    return _create_edge


@pytest.fixture
def root_member(make_member):
    return make_member("ROOT", "Pablo Root", birth_date="1985-06-01")


@pytest.fixture
def context_for(root_member):
    """Build a context around the root member plus extra members/events/relationships."""
    def _build(events: List[FamilyEvent] = (), members: List[FamilyMember] = (),
               relationships: List[Relationship] = (), max_depth: int = 4):
        return build_context([root_member, *members], relationships, events, root_member.id, max_depth=max_depth)

    return _build


@pytest.fixture
def default_config():
    """Default pattern configuration."""
    return PatternConfig()


@pytest.fixture
def offline_resolver():
    """Country resolver using only the packaged substitutions."""
    return CountryResolver()


@pytest.fixture
def three_generations(make_member, parent_edge, root_member):
    """
    Root, father, paternal grandfather and great-grandfather.

    Returns:
        Tuple of (members, relationships).
    """
    father = make_member("F", "Carlos Root", birth_date="1955-02-10")
    grandfather = make_member("GF", "Jose Root", birth_date="1925-09-01")
    great_grandfather = make_member("GGF", "Manuel Root", birth_date="1890")
    members = [root_member, father, grandfather, great_grandfather]
    relationships = [
        parent_edge("ROOT", "F"),
        parent_edge("F", "GF"),
        parent_edge("GF", "GGF"),
    ]
    return members, relationships
