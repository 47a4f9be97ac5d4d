"""
Unlockable content mapping.

Rules never know about content: patterns leave the engine with an empty
unlock list and ContentCatalog attaches content ids afterwards, keyed by the
id of the rule that emitted each pattern.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import yaml

from .config import PatternConfig
from .model import Pattern

logger = logging.getLogger(__name__)


class ContentCatalog:
    """
    Maps rule ids to the content ids their patterns unlock.

    Attributes:
        content_by_rule (Dict[str, Tuple[str, ...]]): rule_id -> content ids, in catalog order.
    """

    def __init__(self, content_by_rule: Mapping[str, Sequence[str]]) -> None:
        self.content_by_rule: Dict[str, Tuple[str, ...]] = {}
        for rule_id, content_ids in (content_by_rule or {}).items():
            if isinstance(content_ids, str):
                raise ValueError(f"Content for rule '{rule_id}' must be a list of ids, got a string")
            self.content_by_rule[rule_id] = tuple(content_ids or ())

    @classmethod
    def from_config(cls, config: PatternConfig) -> ContentCatalog:
        return cls(config.content_catalog)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> ContentCatalog:
        """
        Load a catalog from YAML, either a bare mapping or a file with a
        ``content_catalog`` section.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the YAML cannot be parsed.
        """
        if not yaml_path or not yaml_path.exists():
            raise FileNotFoundError(f"Content catalog not found: {yaml_path}")
        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing {yaml_path}: {e}")
        return cls(data.get('content_catalog', data))

    def content_for(self, rule_id: str) -> Tuple[str, ...]:
        return self.content_by_rule.get(rule_id, ())

    def attach(self, patterns: Iterable[Pattern]) -> List[Pattern]:
        """
        Return copies of the patterns with unlock_content_ids filled in.

        Patterns from rules without catalog entries keep an empty unlock list.
        """
        attached = []
        for pattern in patterns:
            content_ids = self.content_for(pattern.rule_id)
            if not content_ids:
                logger.debug(f"No content registered for rule {pattern.rule_id}")
            attached.append(replace(pattern, unlock_content_ids=content_ids))
        return attached

    def __len__(self) -> int:
        return len(self.content_by_rule)
