"""
Pattern detection: scored, evidenced intergenerational patterns in a genogram.

Usage:
    >>> from genogram_patterns.patterns import PatternEngine
    >>> engine = PatternEngine()
    >>> patterns = engine.detect_patterns(members, relationships, events, root_member_id)
"""
from .config import PatternConfig
from .content import ContentCatalog
from .context import PatternContext, build_context
from .defaults import get_default_rules
from .engine import PatternEngine
from .model import EvidenceType, Pattern, PatternEvidence, clamp_score
from .rules import BaseRule, PatternRule, PatternRuleError, get_rule_registry, register_rule
from .statistics import FamilyTreeStatistics, PatternSummary, calculate_statistics, summarize_patterns
from .detection import PatternAnalysis, PatternDetection

__all__ = [
    'PatternConfig',
    'ContentCatalog',
    'PatternContext',
    'build_context',
    'get_default_rules',
    'PatternEngine',
    'EvidenceType',
    'Pattern',
    'PatternEvidence',
    'clamp_score',
    'BaseRule',
    'PatternRule',
    'PatternRuleError',
    'get_rule_registry',
    'register_rule',
    'FamilyTreeStatistics',
    'PatternSummary',
    'calculate_statistics',
    'summarize_patterns',
    'PatternAnalysis',
    'PatternDetection',
]
