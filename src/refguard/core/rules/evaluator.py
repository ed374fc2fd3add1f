"""
Rule evaluator — deterministic, fail-closed, first-match-wins.

Usage::

    allowed = evaluate(secret_config.get_rules(), Query("refer", "pipeline_group", "prod-web"))

    decision = decide(rules, query)
    if not decision.allowed:
        print(decision.reason)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from refguard.core.rules.model import Directive, Query, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReferenceDecision:
    """The outcome of evaluating a rule set against one query."""

    query: Query
    allowed: bool
    matched: Directive | None = None
    position: int | None = None  # 1-based position of the matched directive
    reason: str = ""

    @property
    def defaulted(self) -> bool:
        """True when no directive matched and the default deny applied."""
        return self.matched is None


def decide(rules: Sequence[Directive] | None, query: Query) -> ReferenceDecision:
    """
    Evaluate ``rules`` against ``query`` and report which directive decided.

    An absent or empty rule set denies everything. Otherwise directives are
    applied in declared order; the first one that does not SKIP decides.
    If every directive skips, the reference is denied.
    """
    if not rules:
        logger.debug("No rules configured; denying %s", query)
        return ReferenceDecision(
            query=query, allowed=False, reason="No rules configured (default: deny)"
        )

    for position, directive in enumerate(rules, start=1):
        result = directive.apply(query)
        if result is Result.SKIP:
            continue
        allowed = result is Result.ALLOW
        logger.debug("Rule #%d %s decided %s for %s", position, directive, result.value, query)
        return ReferenceDecision(
            query=query,
            allowed=allowed,
            matched=directive,
            position=position,
            reason=f"Rule #{position} {directive} matched",
        )

    logger.debug("No rule matched; denying %s", query)
    return ReferenceDecision(
        query=query, allowed=False, reason="No rule matched (default: deny)"
    )


def evaluate(rules: Sequence[Directive] | None, query: Query) -> bool:
    """Return True if ``rules`` allow ``query``. Never raises."""
    return decide(rules, query).allowed
