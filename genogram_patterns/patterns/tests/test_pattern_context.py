"""
Tests for the pattern context builder.
"""
from __future__ import annotations

import pytest

from genogram_patterns.family_event import EventKind, Lineage
from genogram_patterns.relationship import Relationship, RelationshipType
from genogram_patterns.patterns.context import build_context


class TestAncestors:
    """Tests for PatternContext.ancestors."""

    @pytest.mark.parametrize("depth,expected", [
        (0, []),
        (1, ["F"]),
        (2, ["F", "GF"]),
        (3, ["F", "GF", "GGF"]),
        (10, ["F", "GF", "GGF"]),
    ])
    def test_walk_is_bounded_by_depth(self, three_generations, depth, expected):
        """Test that ancestors stops after the requested number of generations."""
        members, relationships = three_generations
        context = build_context(members, relationships, [], "ROOT")

        assert context.ancestors("ROOT", depth) == expected

    def test_never_includes_start_member(self, three_generations):
        """Test that the start member is not part of its own ancestry."""
        members, relationships = three_generations
        context = build_context(members, relationships, [], "ROOT")

        assert "GF" not in context.ancestors("GF", 5)
        assert context.ancestors("GF", 5) == ["GGF"]

    def test_both_parents_in_input_order(self, make_member, parent_edge, root_member):
        """Test that both parents are collected in a breadth-first walk."""
        members = [root_member, make_member("F", "Dad X"), make_member("M", "Mum X"), make_member("GF", "Grandpa X")]
        relationships = [parent_edge("ROOT", "F"), parent_edge("ROOT", "M"), parent_edge("F", "GF")]
        context = build_context(members, relationships, [], "ROOT")

        assert context.ancestors("ROOT", 2) == ["F", "M", "GF"]

    def test_cycle_terminates_without_duplicates(self, make_member, parent_edge):
        """Test that an A->B->A parent cycle yields a finite, duplicate-free list."""
        members = [make_member("A", "Ann A"), make_member("B", "Bob B")]
        relationships = [parent_edge("A", "B"), parent_edge("B", "A")]
        context = build_context(members, relationships, [], "A")

        ancestors = context.ancestors("A", 50)

        assert ancestors == ["B"]
        assert len(ancestors) == len(set(ancestors))

    def test_only_parent_edges_are_followed(self, make_member, root_member):
        """Test that partner and sibling edges are ignored."""
        members = [root_member, make_member("P", "Partner X"), make_member("S", "Sibling X")]
        relationships = [
            Relationship(type=RelationshipType.PARTNER, from_member_id="ROOT", to_member_id="P"),
            Relationship(type=RelationshipType.SIBLING, from_member_id="ROOT", to_member_id="S"),
        ]
        context = build_context(members, relationships, [], "ROOT")

        assert context.ancestors("ROOT", 3) == []

    def test_dangling_parent_is_terminal(self, parent_edge, root_member):
        """Test that a parent id missing from members is returned but not expanded."""
        relationships = [parent_edge("ROOT", "GHOST"), parent_edge("GHOST", "OLDER_GHOST")]
        context = build_context([root_member], relationships, [], "ROOT")

        assert context.ancestors("ROOT", 4) == ["GHOST"]

    def test_unknown_member_has_no_ancestors(self, three_generations):
        """Test that an unknown member id yields an empty list."""
        members, relationships = three_generations
        context = build_context(members, relationships, [], "NOBODY")

        assert context.ancestors("NOBODY", 4) == []
        assert context.generation_depth("NOBODY") == 0

    def test_generation_depth_uses_max_depth(self, three_generations):
        """Test that generation_depth counts ancestors within max_depth."""
        members, relationships = three_generations

        assert build_context(members, relationships, [], "ROOT", max_depth=2).generation_depth("ROOT") == 2
        assert build_context(members, relationships, [], "ROOT").generation_depth("ROOT") == 3


class TestEventQueries:
    """Tests for event grouping and queries."""

    def test_unattached_events_are_grouped_under_none(self, make_event, context_for):
        """Test that events without an owner are kept in the None bucket."""
        attached = make_event(EventKind.DIVORCE, member_id="ROOT")
        unattached = make_event(EventKind.ABSENCE)
        context = context_for(events=[attached, unattached])

        assert context.events_for_member(None) == [unattached]
        assert context.events_for_member("ROOT") == [attached]
        assert context.events_for_member("UNKNOWN") == []

    def test_lineage_query_includes_unattached(self, make_event, context_for):
        """Test that lineage queries scan attached and unattached events in input order."""
        first = make_event(EventKind.ABSENCE, Lineage.PATERNAL)
        second = make_event(EventKind.DEATH, Lineage.MATERNAL, member_id="ROOT")
        third = make_event(EventKind.DIVORCE, Lineage.PATERNAL, member_id="ROOT")
        context = context_for(events=[first, second, third])

        assert context.events_by_lineage(Lineage.PATERNAL) == [first, third]
        assert context.events_by_lineage(Lineage.MIXED) == []

    def test_kind_query(self, make_event, context_for):
        """Test filtering events by kind."""
        divorce = make_event(EventKind.DIVORCE)
        absence = make_event(EventKind.ABSENCE)
        context = context_for(events=[divorce, absence])

        assert context.events_by_kind(EventKind.DIVORCE) == [divorce]
        assert context.events_by_kind(EventKind.WAR) == []

    def test_events_referencing_unknown_members_are_kept(self, make_event, context_for):
        """Test that an event with a dangling member id stays visible to queries."""
        event = make_event(EventKind.MIGRATION, member_id="GHOST")
        context = context_for(events=[event])

        assert context.events_by_kind(EventKind.MIGRATION) == [event]
        assert context.member("GHOST") is None


class TestBuildContext:
    """Tests for build_context."""

    def test_duplicate_member_ids_last_wins(self, make_member, caplog):
        """Test that a duplicate member id keeps the last definition and warns."""
        first = make_member("X", "First Name")
        second = make_member("X", "Second Name")

        with caplog.at_level("WARNING"):
            context = build_context([first, second], [], [], "X")

        assert context.member("X").given_name == "Second"
        assert "Duplicate member id" in caplog.text

    def test_relationships_grouped_by_source(self, parent_edge, root_member):
        """Test that relationships are indexed on their from_member_id."""
        edge = parent_edge("ROOT", "F")
        context = build_context([root_member], [edge], [], "ROOT")

        assert context.relationships_by_member_id == {"ROOT": [edge]}
        assert context.all_relationships() == [edge]

    def test_negative_max_depth_rejected(self, root_member):
        """Test that a negative traversal bound is a configuration error."""
        with pytest.raises(ValueError):
            build_context([root_member], [], [], "ROOT", max_depth=-1)

    def test_empty_input(self):
        """Test that an empty snapshot builds an empty context."""
        context = build_context([], [], [], "ROOT")

        assert context.members_by_id == {}
        assert context.all_events() == []
        assert context.ancestors("ROOT", 4) == []
