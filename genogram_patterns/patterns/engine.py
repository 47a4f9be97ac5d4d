from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from genogram_patterns.app_hooks import AppHooks
from genogram_patterns.family_event import FamilyEvent
from genogram_patterns.member import FamilyMember
from genogram_patterns.relationship import Relationship

from .config import PatternConfig
from .context import PatternContext, build_context
from .defaults import get_default_rules
from .model import Pattern
from .rules.base import PatternRule, PatternRuleError

logger = logging.getLogger(__name__)


class PatternEngine:
    """
    Runs pattern rules over a genogram snapshot and ranks what they find.

    Rules are evaluated highest priority first. Patterns scoring below
    ``config.min_score`` are discarded and the rest are returned sorted by
    score, ties keeping rule priority order. The engine holds only its
    configuration and rule list; every call works on a fresh context.
    """

    def __init__(self, config: Optional[PatternConfig] = None, rules: Optional[Sequence[PatternRule]] = None,
                 app_hooks: Optional['AppHooks'] = None) -> None:
        self.config = config or PatternConfig()
        self.app_hooks = app_hooks
        self.rules: List[PatternRule] = []
        for rule in (get_default_rules(self.config) if rules is None else rules):
            self._check_rule(rule)
            self.rules.append(rule)
        self._sort_rules()

    @staticmethod
    def _check_rule(rule: PatternRule) -> None:
        if not isinstance(rule, PatternRule):
            raise TypeError(f"Expected a PatternRule, got {type(rule).__name__}")

    def _sort_rules(self) -> None:
        # stable: equal priorities keep registration order
        self.rules.sort(key=lambda rule: rule.priority, reverse=True)

    def add_rule(self, rule: PatternRule) -> None:
        """
        Register an additional rule and re-sort by priority.

        Args:
            rule: Object satisfying the PatternRule protocol.

        Raises:
            TypeError: If rule does not satisfy the PatternRule protocol.
        """
        self._check_rule(rule)
        self.rules.append(rule)
        self._sort_rules()
        logger.debug(f"Added pattern rule {rule.rule_id} (priority {rule.priority})")

    def detect_patterns(
        self,
        members: Iterable[FamilyMember],
        relationships: Iterable[Relationship],
        events: Iterable[FamilyEvent],
        root_member_id: str,
        max_depth: Optional[int] = None,
    ) -> List[Pattern]:
        """
        Detect patterns in a genogram snapshot.

        Args:
            members: Family members.
            relationships: Relationships between members.
            events: Family events.
            root_member_id: Member representing the user.
            max_depth: Ancestor traversal bound (config.max_depth when None).

        Returns:
            List[Pattern]: Patterns with score >= config.min_score, highest score first.
        """
        context = build_context(
            members, relationships, events, root_member_id,
            max_depth=self.config.max_depth if max_depth is None else max_depth,
        )
        return self.run(context)

    def run(self, context: PatternContext) -> List[Pattern]:
        """
        Evaluate the enabled rules against an already built context.

        Raises:
            PatternRuleError: If a rule that fired emits a pattern without evidence.
        """
        enabled_rules = [rule for rule in self.rules if self.config.rule_enabled(rule.rule_id)]
        self._report_step(info="Detecting patterns", target=len(enabled_rules), reset_counter=True, plus_step=0)

        collected: List[Pattern] = []
        for rule_num, rule in enumerate(enabled_rules, start=1):
            if self._stop_requested("Pattern detection stopped by user"):
                logger.info(f"Pattern detection stopped after {rule_num - 1}/{len(enabled_rules)} rules")
                break

            if rule.predicate(context):
                pattern = rule.emit(context)
                if not pattern.evidence:
                    raise PatternRuleError(f"{rule.rule_id}: rule fired but produced no evidence")
                logger.debug(f"Rule {rule.rule_id} fired with score {pattern.score}")
                collected.append(pattern)

            self._report_step(info=f"Patterns ({rule_num}/{len(enabled_rules)}): {rule.rule_id}", plus_step=1)

        kept = [pattern for pattern in collected if pattern.score >= self.config.min_score]
        # stable: equal scores keep rule priority order
        kept.sort(key=lambda pattern: pattern.score, reverse=True)

        logger.info(f"Pattern detection: {len(collected)} rules fired, {len(kept)} patterns kept "
                    f"(min score {self.config.min_score})")
        return kept

    def suggest_content(self, patterns: Iterable[Pattern]) -> List[str]:
        """
        Content ids unlocked by strong patterns.

        Returns:
            List[str]: De-duplicated ids from patterns with score >= config.content_min_score,
                in first-seen order.
        """
        suggested: List[str] = []
        for pattern in patterns:
            if pattern.score < self.config.content_min_score:
                continue
            for content_id in pattern.unlock_content_ids:
                if content_id not in suggested:
                    suggested.append(content_id)
        return suggested

    def high_priority_patterns(self, patterns: Iterable[Pattern]) -> List[Pattern]:
        """Patterns that warrant a nudge toward professional support."""
        return [pattern for pattern in patterns
                if pattern.score >= self.config.professional_attention_score]

    def is_high_priority(self, pattern: Pattern) -> bool:
        """Whether a pattern is emphasized: high score or any heavily weighted evidence."""
        return pattern.is_high_priority(self.config.high_priority_score, self.config.high_priority_weight)

    def emphasized_patterns(self, patterns: Iterable[Pattern]) -> List[Pattern]:
        """Patterns to emphasize in the display (see is_high_priority)."""
        return [pattern for pattern in patterns if self.is_high_priority(pattern)]

    @staticmethod
    def patterns_for_member(patterns: Iterable[Pattern], member_id: str) -> List[Pattern]:
        """Patterns whose evidence references the member."""
        return [pattern for pattern in patterns if pattern.involves_member(member_id)]

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.debug(info)

    def _stop_requested(self, logger_stop_message: str = "Stop requested by user") -> bool:
        """
        Check if stop has been requested via app hooks. (Private method)

        Returns:
            bool: True if stop requested, False otherwise.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "stop_requested", None)):
            if self.app_hooks.stop_requested():
                if logger_stop_message:
                    logger.debug(logger_stop_message)
                return True
        return False
