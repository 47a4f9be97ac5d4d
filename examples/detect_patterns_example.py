"""
Example: Detecting intergenerational patterns in a small genogram.

This example demonstrates how to:
1. Describe a family as members, relationships and events
2. Run pattern detection with the default configuration
3. Read the unlocked content and the professional-support flag
4. Export results as JSON
"""

import json
import logging

from genogram_patterns import (
    EventKind,
    FamilyEvent,
    FamilyMember,
    Lineage,
    PatternDetection,
    Relationship,
    RelationshipType,
    Sex,
)


class ConsoleHooks:
    """Minimal AppHooks implementation printing progress to the console."""

    def report_step(self, info="", target=None, reset_counter=False, plus_step=1):
        if info:
            print(f"  ... {info}")

    def stop_requested(self):
        return False


def load_sample_genogram():
    """Build a sample genogram: the user, father, grandfather and great-grandfather."""
    me = FamilyMember(id="me", given_name="Pablo", family_name="García", sex=Sex.MALE, birth_date="1985-06-01")
    father = FamilyMember(id="father", given_name="Carlos", family_name="García", sex=Sex.MALE, birth_date="1955-02-10")
    grandfather = FamilyMember(id="grandfather", given_name="José", family_name="García", sex=Sex.MALE,
                               birth_date="1925-09-01", death_date="1960-01-01", is_alive=False)
    great_grandfather = FamilyMember(id="great_grandfather", given_name="Manuel", family_name="García", sex=Sex.MALE,
                                     birth_date="ABT 1890", death_date="1925", is_alive=False)
    members = [me, father, grandfather, great_grandfather]

    relationships = [
        Relationship(type=RelationshipType.PARENT, from_member_id="me", to_member_id="father"),
        Relationship(type=RelationshipType.PARENT, from_member_id="father", to_member_id="grandfather"),
        Relationship(type=RelationshipType.PARENT, from_member_id="grandfather", to_member_id="great_grandfather"),
    ]

    events = [
        FamilyEvent(kind=EventKind.ABSENCE, lineage=Lineage.PATERNAL, member_id="father", severity=5, date="1992"),
        FamilyEvent(kind=EventKind.ABSENCE, lineage=Lineage.PATERNAL, member_id="grandfather", severity=4),
        FamilyEvent(kind=EventKind.ABSENCE, lineage=Lineage.PATERNAL, member_id="great_grandfather", severity=4),
        FamilyEvent(kind=EventKind.DEATH, lineage=Lineage.PATERNAL, member_id="grandfather", date="1960-01-01"),
        FamilyEvent(kind=EventKind.DEATH, lineage=Lineage.PATERNAL, member_id="great_grandfather", date="1925"),
        FamilyEvent(kind=EventKind.MIGRATION, lineage=Lineage.PATERNAL, member_id="grandfather",
                    location="Buenos Aires, Argentina", date="1950"),
        FamilyEvent(kind=EventKind.MIGRATION, lineage=Lineage.PATERNAL, member_id="great_grandfather",
                    location="Vigo, España", date="1912"),
        FamilyEvent(kind=EventKind.SECRET, lineage=Lineage.MATERNAL, severity=3),
        FamilyEvent(kind=EventKind.CHILD_LOSS, lineage=Lineage.MATERNAL, severity=5, is_secret=True),
    ]
    return members, relationships, events


def example_detect_patterns():
    """Example workflow: detect patterns and print a report."""
    members, relationships, events = load_sample_genogram()
    print(f"Loaded {len(members)} members, {len(relationships)} relationships, {len(events)} events")

    print("\n=== Detecting Patterns ===")
    detection = PatternDetection(app_hooks=ConsoleHooks())
    analysis = detection.analyze(members, relationships, events, root_member_id="me")

    print("\n=== Patterns ===")
    for pattern in analysis.patterns:
        print(f"[{pattern.score:3d}] {pattern.name} ({pattern.lineage.display_name})")
        for evidence in pattern.evidence:
            print(f"        - {evidence.description}")

    print("\n=== Unlocked Content ===")
    for content_id in analysis.suggested_content_ids:
        print(f"  {content_id}")

    if analysis.requires_professional_attention:
        print("\nSome patterns are strong enough that talking to a professional is recommended.")

    print("\n=== Statistics ===")
    stats = analysis.statistics
    print(f"Generations above root: {stats.generation_depth}")
    print(f"Migration destinations: {stats.migration_countries}")

    with open("patterns_report.json", "w", encoding="utf-8") as f:
        json.dump(analysis.to_dict(), f, indent=2, ensure_ascii=False)
    print("\nExported results to patterns_report.json")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_detect_patterns()
