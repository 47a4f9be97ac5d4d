"""
Default pattern rules configuration.
"""
from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional

from .config import PatternConfig
from .rules import BaseRule, get_rule_registry

logger = logging.getLogger(__name__)

# Metadata that identifies a rule; never overridable from config
PROTECTED_PARAMS = frozenset({'rule_id'})


def get_default_rules(config: Optional[PatternConfig] = None) -> List[BaseRule]:
    """
    Create default pattern rules based on config using the rule registry.

    Automatically discovers all registered rules and instantiates them with
    the matching ``rule_params`` section of the config. Parameters a rule does
    not accept are ignored with a warning.

    Args:
        config: PatternConfig instance with rule parameters (packaged defaults when None).

    Returns:
        List[BaseRule]: Enabled rules from the registry, in registration order.
    """
    config = config or PatternConfig()
    rules = []

    for rule_id, rule_class in get_rule_registry().items():
        if not config.rule_enabled(rule_id):
            logger.debug(f"Pattern rule {rule_id} disabled by config")
            continue

        accepted = {f.name for f in fields(rule_class) if f.init} - PROTECTED_PARAMS
        kwargs: Dict[str, Any] = {}
        for param_name, value in config.params_for(rule_id).items():
            if param_name in accepted:
                kwargs[param_name] = value
            else:
                logger.warning(f"Ignoring unknown parameter '{param_name}' for pattern rule {rule_id}")

        rules.append(rule_class(**kwargs))

    return rules
