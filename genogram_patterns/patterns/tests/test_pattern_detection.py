"""
Integration tests for PatternDetection.
"""
from __future__ import annotations

import json

import pytest

from genogram_patterns.family_event import EventKind, Lineage
from genogram_patterns.patterns.detection import PatternDetection


@pytest.fixture
def secrets_snapshot(root_member, make_event):
    events = [
        make_event(EventKind.SECRET, Lineage.MATERNAL, severity=4),
        make_event(EventKind.SECRET, Lineage.MATERNAL, severity=3),
        make_event(EventKind.SECRET, Lineage.PATERNAL, severity=5),
        make_event(EventKind.DIVORCE, Lineage.MATERNAL, severity=4),
        make_event(EventKind.DIVORCE, Lineage.MATERNAL, severity=4),
        make_event(EventKind.DIVORCE, Lineage.PATERNAL, severity=4),
    ]
    return [root_member], [], events


class TestPatternDetection:
    """Tests for the PatternDetection wrapper."""

    def test_analyze(self, secrets_snapshot):
        """Test patterns, content, high-priority flag and statistics in one pass."""
        members, relationships, events = secrets_snapshot

        analysis = PatternDetection().analyze(members, relationships, events, "ROOT")

        assert [(p.rule_id, p.score) for p in analysis.patterns] == [("secrets_cluster", 100), ("divorce_repetition", 40)]
        assert analysis.patterns[0].unlock_content_ids == ("letter.family_secrets", "letter.unacknowledged_child")
        assert analysis.suggested_content_ids == ["letter.family_secrets", "letter.unacknowledged_child"]
        assert [p.rule_id for p in analysis.high_priority] == ["secrets_cluster"]
        assert analysis.requires_professional_attention
        assert [p.rule_id for p in analysis.emphasized] == ["secrets_cluster"]
        assert analysis.statistics.total_events == 6
        assert analysis.summary.critical == 1
        assert analysis.summary.high_priority == 1

    def test_config_overrides(self, secrets_snapshot):
        """Test that dictionary overrides reach the engine."""
        members, relationships, events = secrets_snapshot

        analysis = PatternDetection(config_dict={'min_score': 41}).analyze(members, relationships, events, "ROOT")

        assert [p.rule_id for p in analysis.patterns] == ["secrets_cluster"]

    def test_config_yaml(self, secrets_snapshot, tmp_path):
        """Test loading configuration from a YAML file."""
        path = tmp_path / "patterns.yaml"
        path.write_text("rules_enabled:\n  secrets_cluster: false\n", encoding='utf-8')
        members, relationships, events = secrets_snapshot

        analysis = PatternDetection(config_yaml=path).analyze(members, relationships, events, "ROOT")

        assert [p.rule_id for p in analysis.patterns] == ["divorce_repetition"]
        assert not analysis.requires_professional_attention

    def test_to_dict_serializes_to_json(self, secrets_snapshot):
        """Test that the analysis is JSON-compatible."""
        members, relationships, events = secrets_snapshot
        data = PatternDetection().analyze(members, relationships, events, "ROOT").to_dict()

        assert json.loads(json.dumps(data)) == data

    def test_empty_genogram(self, root_member):
        """Test that an empty genogram produces an empty analysis."""
        analysis = PatternDetection().analyze([root_member], [], [], "ROOT")

        assert analysis.patterns == []
        assert analysis.suggested_content_ids == []
        assert not analysis.requires_professional_attention
