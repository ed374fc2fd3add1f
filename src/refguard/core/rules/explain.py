"""
Rules explain — human-readable output for ``refguard rules check --explain``.

Usage::

    decision = target.check_reference("pipeline_group", "prod-web")
    print(explain_decision(decision))

    # Or walk every directive of a target against a query:
    print(explain_rules(target, Query("refer", "pipeline_group", "prod-web")))
"""

from __future__ import annotations

from dataclasses import dataclass

from refguard.core.rules.aware import RulesAware
from refguard.core.rules.evaluator import ReferenceDecision
from refguard.core.rules.model import Directive, Query, Result


@dataclass(frozen=True, slots=True)
class DirectiveCheck:
    """Per-criterion outcome of applying one directive to a query."""

    position: int
    directive: Directive
    result: Result
    reasons: tuple[str, ...]


def check_directive(position: int, directive: Directive, query: Query) -> DirectiveCheck:
    """Apply ``directive`` to ``query``, recording why each criterion passed or failed."""
    checks = [
        (
            directive.matches_action(query.action),
            f"action: {directive.action!r} vs {query.action!r}",
        ),
        (
            directive.matches_type(query.entity_type),
            f"type: {directive.entity_type!r} vs {query.entity_type!r}",
        ),
        (
            directive.matches_resource(query.resource),
            f"resource: {directive.resource_pattern!r} vs {query.resource!r}",
        ),
    ]

    reasons: list[str] = []
    for ok, reason in checks:
        reasons.append(("✓ " if ok else "✗ ") + reason)
        if not ok:
            break

    return DirectiveCheck(
        position=position,
        directive=directive,
        result=directive.apply(query),
        reasons=tuple(reasons),
    )


def explain_decision(decision: ReferenceDecision) -> str:
    """
    Format a ReferenceDecision as a human-readable explanation.

    Returns a multi-line string suitable for CLI output.
    """
    q = decision.query
    matched = (
        f"#{decision.position} {decision.matched}"
        if decision.matched is not None
        else "(none — default deny applied)"
    )
    lines = [
        f"Decision:           {'ALLOW' if decision.allowed else 'DENY'}",
        f"Matched directive:  {matched}",
        f"Query:              action={q.action!r} type={q.entity_type!r} resource={q.resource!r}",
        "",
        f"Explanation:        {decision.reason}",
    ]
    return "\n".join(lines)


def explain_rules(target: RulesAware, query: Query) -> str:
    """Walk the target's directives in order and show which matched or skipped."""
    rules = target.get_rules()
    lines = [
        f"Query:  action={query.action!r}  type={query.entity_type!r}  resource={query.resource!r}",
        f"Rules:  {len(rules)} directive(s)",
        "",
    ]

    if rules.is_empty():
        lines.append("  No rules configured → deny")
        return "\n".join(lines)

    for position, directive in enumerate(rules, start=1):
        check = check_directive(position, directive, query)
        status = "skip" if check.result is Result.SKIP else "MATCH"
        lines.append(f"  #{position:<3} {str(directive):50s} [{status}]")
        for reason in check.reasons:
            lines.append(f"        {reason}")
        if check.result is not Result.SKIP:
            lines.append(f"        → {check.result.value}")
            lines.append("")
            lines.append("  (Remaining directives not evaluated — first match wins)")
            return "\n".join(lines)
        lines.append("")

    lines.append("  No directive matched → deny")
    return "\n".join(lines)
