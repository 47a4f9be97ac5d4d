"""
Pattern context: indexed, read-only view over a genogram snapshot.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from genogram_patterns.family_event import EventKind, FamilyEvent, Lineage
from genogram_patterns.member import FamilyMember
from genogram_patterns.relationship import Relationship, RelationshipType

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 4


@dataclass(frozen=True)
class PatternContext:
    """
    Indexed view over members, relationships and events that rules query.

    Attributes:
        members_by_id (Dict[str, FamilyMember]): Members keyed by id.
        events_by_member_id (Dict[Optional[str], List[FamilyEvent]]): Events grouped by
            owning member id; unattached events live under the None key.
        relationships_by_member_id (Dict[str, List[Relationship]]): Relationships grouped
            by their source (``from_member_id``).
        root_member_id (str): The member representing the user.
        max_depth (int): Ancestor traversal bound used by generation_depth().
        events (Tuple[FamilyEvent, ...]): All indexed events in input order.
    """
    members_by_id: Dict[str, FamilyMember]
    events_by_member_id: Dict[Optional[str], List[FamilyEvent]]
    relationships_by_member_id: Dict[str, List[Relationship]]
    root_member_id: str
    max_depth: int = DEFAULT_MAX_DEPTH
    events: Tuple[FamilyEvent, ...] = field(default=())

    def member(self, member_id: Optional[str]) -> Optional[FamilyMember]:
        """Member by id, or None for unknown/absent ids."""
        if member_id is None:
            return None
        return self.members_by_id.get(member_id)

    def ancestors(self, member_id: str, depth: int) -> List[str]:
        """
        Ancestor ids of a member, nearest generation first.

        Breadth-first walk along PARENT edges only, at most ``depth``
        generations. Each id is collected once and the starting member is never
        included, so cyclic data terminates. Parent ids that are not known
        members are returned but have no edges to follow.

        Args:
            member_id: Member to start from.
            depth: Maximum number of generations to walk.

        Returns:
            List of ancestor member ids; empty for unknown members or depth <= 0.
        """
        if member_id not in self.members_by_id:
            return []

        result: List[str] = []
        visited = {member_id}
        frontier = [member_id]
        generation = 0
        while generation < depth and frontier:
            next_generation: List[str] = []
            for current in frontier:
                for relationship in self.relationships_by_member_id.get(current, ()):
                    if relationship.type is not RelationshipType.PARENT:
                        continue
                    parent_id = relationship.to_member_id
                    if parent_id in visited:
                        continue
                    visited.add(parent_id)
                    result.append(parent_id)
                    if parent_id in self.members_by_id:
                        next_generation.append(parent_id)
            frontier = next_generation
            generation += 1
        return result

    def events_by_lineage(self, lineage: Lineage) -> List[FamilyEvent]:
        """All events tagged with a lineage, attached or not."""
        return [event for event in self.events if event.lineage is lineage]

    def events_by_kind(self, kind: EventKind) -> List[FamilyEvent]:
        """All events of a kind, attached or not."""
        return [event for event in self.events if event.kind is kind]

    def events_for_member(self, member_id: Optional[str]) -> List[FamilyEvent]:
        return list(self.events_by_member_id.get(member_id, ()))

    def generation_depth(self, member_id: str) -> int:
        """Number of ancestors within max_depth generations."""
        return len(self.ancestors(member_id, self.max_depth))

    def all_events(self) -> List[FamilyEvent]:
        return list(self.events)

    def all_relationships(self) -> List[Relationship]:
        return [rel for rels in self.relationships_by_member_id.values() for rel in rels]


def build_context(
    members: Iterable[FamilyMember],
    relationships: Iterable[Relationship],
    events: Iterable[FamilyEvent],
    root_member_id: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PatternContext:
    """
    Index a genogram snapshot for rule evaluation.

    Args:
        members: Family members (duplicate ids: the last one wins).
        relationships: Relationships, grouped by source member.
        events: Events, grouped by owning member (None for unattached).
        root_member_id: Member representing the user; need not exist.
        max_depth: Ancestor traversal bound.

    Returns:
        PatternContext over the snapshot.

    Raises:
        ValueError: If max_depth is negative.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    members_by_id: Dict[str, FamilyMember] = {}
    for member in members:
        if member.id in members_by_id:
            logger.warning(f"Duplicate member id {member.id}; keeping the last definition")
        members_by_id[member.id] = member

    events_list = list(events)
    events_by_member_id: Dict[Optional[str], List[FamilyEvent]] = defaultdict(list)
    for event in events_list:
        owner = event.member_id
        if owner is not None and owner not in members_by_id:
            logger.debug(f"Event {event.id} refers to unknown member {owner}")
        events_by_member_id[owner].append(event)

    relationships_by_member_id: Dict[str, List[Relationship]] = defaultdict(list)
    for relationship in relationships:
        relationships_by_member_id[relationship.from_member_id].append(relationship)

    if root_member_id not in members_by_id:
        logger.debug(f"Root member {root_member_id} not found among {len(members_by_id)} members")

    logger.debug(f"Built pattern context: {len(members_by_id)} members, {len(events_list)} events, "
                 f"{sum(len(r) for r in relationships_by_member_id.values())} relationships")

    return PatternContext(
        members_by_id=members_by_id,
        events_by_member_id=dict(events_by_member_id),
        relationships_by_member_id=dict(relationships_by_member_id),
        root_member_id=root_member_id,
        max_depth=max_depth,
        events=tuple(events_list),
    )
