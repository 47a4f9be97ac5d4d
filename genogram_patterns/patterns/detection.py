from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from genogram_patterns.app_hooks import AppHooks
from genogram_patterns.family_event import FamilyEvent
from genogram_patterns.member import FamilyMember
from genogram_patterns.relationship import Relationship

from .config import DEFAULT_CONFIG_PATH, PatternConfig
from .content import ContentCatalog
from .context import build_context
from .defaults import get_default_rules
from .engine import PatternEngine
from .model import Pattern
from .statistics import FamilyTreeStatistics, PatternSummary, calculate_statistics, summarize_patterns

logger = logging.getLogger(__name__)


@dataclass
class PatternAnalysis:
    """Everything a host needs from one analysis pass."""
    patterns: List[Pattern] = field(default_factory=list)
    suggested_content_ids: List[str] = field(default_factory=list)
    high_priority: List[Pattern] = field(default_factory=list)
    emphasized: List[Pattern] = field(default_factory=list)
    statistics: FamilyTreeStatistics = field(default_factory=FamilyTreeStatistics)
    summary: PatternSummary = field(default_factory=PatternSummary)

    @property
    def requires_professional_attention(self) -> bool:
        return bool(self.high_priority)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'patterns': [pattern.to_dict() for pattern in self.patterns],
            'suggested_content_ids': list(self.suggested_content_ids),
            'high_priority': [pattern.to_dict() for pattern in self.high_priority],
            'emphasized': [pattern.to_dict() for pattern in self.emphasized],
            'requires_professional_attention': self.requires_professional_attention,
            'statistics': self.statistics.to_dict(),
            'summary': self.summary.to_dict(),
        }


class PatternDetection:
    def __init__(
        self,
        config_dict: Optional[Dict[str, Any]] = None,
        config_yaml: Optional[Path] = None,
        app_hooks: Optional['AppHooks'] = None,
    ) -> None:
        """
        Initialize pattern detection with optional configuration.

        Args:
            config_dict: Dictionary to override config values
            config_yaml: Path to YAML config file. If None, uses default config.yaml
            app_hooks: Optional application hooks for progress reporting
        """
        self.config = PatternConfig.from_yaml(config_yaml or DEFAULT_CONFIG_PATH)
        if config_dict:
            self.config = PatternConfig.from_dict({**self.config.__dict__, **config_dict})

        self.rules = get_default_rules(self.config)
        self.engine = PatternEngine(config=self.config, rules=self.rules, app_hooks=app_hooks)
        self.catalog = ContentCatalog.from_config(self.config)

    def analyze(
        self,
        members: Iterable[FamilyMember],
        relationships: Iterable[Relationship],
        events: Iterable[FamilyEvent],
        root_member_id: str,
        max_depth: Optional[int] = None,
    ) -> PatternAnalysis:
        """
        Detect patterns, attach unlockable content and compute statistics.

        Returns:
            PatternAnalysis: The result of the analysis pass.
        """
        context = build_context(
            members, relationships, events, root_member_id,
            max_depth=self.config.max_depth if max_depth is None else max_depth,
        )
        patterns = self.catalog.attach(self.engine.run(context))
        logger.debug(f"Attached content to {len(patterns)} patterns")
        return PatternAnalysis(
            patterns=patterns,
            suggested_content_ids=self.engine.suggest_content(patterns),
            high_priority=self.engine.high_priority_patterns(patterns),
            emphasized=self.engine.emphasized_patterns(patterns),
            statistics=calculate_statistics(context),
            summary=summarize_patterns(
                patterns,
                critical_score=self.config.professional_attention_score,
                high_priority_score=self.config.high_priority_score,
                high_priority_weight=self.config.high_priority_weight,
            ),
        )
