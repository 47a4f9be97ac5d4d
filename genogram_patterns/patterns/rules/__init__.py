"""Pattern rules: intergenerational pattern detection over a genogram.

Built-in rules (highest priority first):
    - SecretsClusterRule: Secrets, child losses and abortions
    - PaternalAbsenceChainRule: Repeated absence of the father in the paternal line
    - DivorceRepetitionRule: Three or more divorces
    - EarlyDeathMaleLineRule: Male deaths before 40 in the paternal line
    - MigrationBreaksRule: Migrations correlated with divorces or absences

Extensibility:
    Create custom rules by:
        1. Subclass BaseRule (or satisfy the PatternRule Protocol)
        2. Implement predicate(ctx), score(ctx) and emit(ctx)
        3. Use @register_rule decorator for automatic registration

Example:
    >>> from genogram_patterns.patterns.rules import BaseRule, register_rule
    >>> @register_rule
    ... @dataclass
    ... class MyRule(BaseRule):
    ...     rule_id: str = "my_rule"
    ...     def predicate(self, context): ...
"""

from .base import PatternRule
from .base import PatternRuleError
from .base import BaseRule
from .base import register_rule
from .base import get_rule_registry
from .secrets_cluster import SecretsClusterRule
from .paternal_absence import PaternalAbsenceChainRule
from .divorce_repetition import DivorceRepetitionRule
from .early_death_male_line import EarlyDeathMaleLineRule
from .migration_breaks import MigrationBreaksRule

__all__ = [
    'PatternRule',
    'PatternRuleError',
    'BaseRule',
    'register_rule',
    'get_rule_registry',
    'SecretsClusterRule',
    'PaternalAbsenceChainRule',
    'DivorceRepetitionRule',
    'EarlyDeathMaleLineRule',
    'MigrationBreaksRule',
]
