from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def _load_yaml(yaml_path: Path) -> Dict[str, Any]:
    if not yaml_path or not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")


@dataclass
class PatternConfig:
    """
    Configuration for pattern detection.

    Loads all configuration values from config.yaml in the patterns directory.
    """
    # Score thresholds
    min_score: int = field(init=False)
    content_min_score: int = field(init=False)
    professional_attention_score: int = field(init=False)

    # Display emphasis
    high_priority_score: int = field(init=False)
    high_priority_weight: float = field(init=False)

    # Ancestor traversal bound
    max_depth: int = field(init=False)

    # Rule toggles (nested dict)
    rules_enabled: Dict[str, bool] = field(init=False)

    # Rule constructor overrides (rule_id -> {param: value})
    rule_params: Dict[str, Dict[str, Any]] = field(init=False)

    # Unlockable content (rule_id -> content ids)
    content_catalog: Dict[str, List[str]] = field(init=False)

    def __post_init__(self):
        """Load configuration from the packaged YAML file."""
        config_dict = _load_yaml(DEFAULT_CONFIG_PATH)
        for key in self.__dataclass_fields__.keys():
            if key in config_dict:
                object.__setattr__(self, key, config_dict[key])
            else:
                raise ValueError(f"Required configuration field '{key}' not found in config.yaml")
        self._validate()

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> PatternConfig:
        """
        Load configuration from a specific YAML file.

        Args:
            yaml_path: Path to YAML config file.

        Returns:
            PatternConfig: Configuration instance loaded from YAML.
        """
        return cls.from_dict(_load_yaml(yaml_path))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> PatternConfig:
        """
        Create configuration from a dictionary.

        Keys missing from the dictionary fall back to the packaged config.yaml;
        unknown keys are ignored with a warning.

        Args:
            config_dict (Dict[str, Any]): Dictionary with configuration values.
        Returns:
            PatternConfig: Configuration instance.
        """
        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            logger.warning(f"Ignoring unknown pattern configuration keys: {sorted(unknown)}")

        instance = object.__new__(cls)
        defaults: Optional[Dict[str, Any]] = None
        for key in cls.__dataclass_fields__.keys():
            if key in config_dict:
                object.__setattr__(instance, key, config_dict[key])
                continue
            if defaults is None:
                defaults = _load_yaml(DEFAULT_CONFIG_PATH)
            if key not in defaults:
                raise ValueError(f"Required configuration field '{key}' not found")
            object.__setattr__(instance, key, defaults[key])
        instance._validate()
        return instance

    def _validate(self) -> None:
        for key in ('min_score', 'content_min_score', 'professional_attention_score', 'high_priority_score'):
            value = getattr(self, key)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 100:
                raise ValueError(f"{key} must be an integer between 0 and 100, got {value!r}")
        weight = self.high_priority_weight
        if not isinstance(weight, (int, float)) or isinstance(weight, bool) or not 0 <= weight <= 1:
            raise ValueError(f"high_priority_weight must be a number between 0 and 1, got {weight!r}")
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool) or self.max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")
        # empty YAML sections load as None
        self.rules_enabled = self.rules_enabled or {}
        self.rule_params = self.rule_params or {}
        self.content_catalog = self.content_catalog or {}

    def rule_enabled(self, rule_id: str) -> bool:
        # default: enabled unless explicitly false
        return self.rules_enabled.get(rule_id, True)

    def params_for(self, rule_id: str) -> Dict[str, Any]:
        """Constructor overrides for a rule (empty when none are configured)."""
        return dict(self.rule_params.get(rule_id) or {})
