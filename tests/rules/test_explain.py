"""Tests for refguard.core.rules.explain — explain_decision() and explain_rules()."""

from __future__ import annotations

from refguard.core.rules.aware import RulesAware
from refguard.core.rules.evaluator import decide
from refguard.core.rules.explain import check_directive, explain_decision, explain_rules
from refguard.core.rules.model import Directive, Query, Result, RuleSet


class _Target(RulesAware):
    def __init__(self, *directives: Directive) -> None:
        self._rules = RuleSet(directives)

    def allowed_actions(self) -> frozenset[str]:
        return frozenset({"refer"})

    def allowed_types(self) -> frozenset[str]:
        return frozenset({"pipeline_group"})

    def get_rules(self) -> RuleSet:
        return self._rules


_QUERY = Query("refer", "pipeline_group", "prod-web")


class TestCheckDirective:
    def test_all_criteria_pass(self):
        check = check_directive(1, Directive.allow("refer", "pipeline_group", "prod-*"), _QUERY)
        assert check.result is Result.ALLOW
        assert len(check.reasons) == 3
        assert all(r.startswith("✓") for r in check.reasons)

    def test_stops_at_first_failed_criterion(self):
        check = check_directive(2, Directive.allow("refer", "environment", "*"), _QUERY)
        assert check.result is Result.SKIP
        assert check.position == 2
        assert len(check.reasons) == 2
        assert check.reasons[-1].startswith("✗ type")


class TestExplainDecision:
    def test_allowed(self):
        rules = RuleSet([Directive.allow("refer", "pipeline_group", "prod-*")])
        output = explain_decision(decide(rules, _QUERY))
        assert "ALLOW" in output
        assert "#1 allow(refer, pipeline_group, prod-*)" in output
        assert "'prod-web'" in output

    def test_default_deny(self):
        output = explain_decision(decide(RuleSet(), _QUERY))
        assert "DENY" in output
        assert "(none" in output
        assert "No rules configured" in output

    def test_all_labeled_fields_present(self):
        output = explain_decision(decide(RuleSet(), _QUERY))
        for label in ["Decision:", "Matched directive:", "Query:", "Explanation:"]:
            assert label in output, f"Missing label: {label}"


class TestExplainRules:
    def test_empty_rules(self):
        output = explain_rules(_Target(), _QUERY)
        assert "0 directive(s)" in output
        assert "No rules configured" in output

    def test_stops_at_first_match(self):
        target = _Target(
            Directive.allow("refer", "environment", "*"),
            Directive.deny("refer", "pipeline_group", "prod-*"),
            Directive.allow("refer", "*", "*"),
        )
        output = explain_rules(target, _QUERY)
        assert "[skip]" in output
        assert "[MATCH]" in output
        assert "→ deny" in output
        assert "first match wins" in output
        assert "#3" not in output

    def test_no_match(self):
        target = _Target(Directive.allow("refer", "pipeline_group", "staging-*"))
        output = explain_rules(target, _QUERY)
        assert "No directive matched → deny" in output
