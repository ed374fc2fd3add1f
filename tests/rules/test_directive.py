"""Tests for refguard.core.rules.model — Directive.apply, RuleSet and persisted form."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from refguard.core.rules.model import Directive, Query, Result, RuleSet, Verdict


def _query(action="refer", entity_type="pipeline_group", resource="prod-web") -> Query:
    return Query(action=action, entity_type=entity_type, resource=resource)


class TestApply:
    def test_allow_matches(self):
        d = Directive.allow("refer", "pipeline_group", "prod-*")
        assert d.apply(_query()) is Result.ALLOW

    def test_deny_matches(self):
        d = Directive.deny("refer", "pipeline_group", "prod-*")
        assert d.apply(_query()) is Result.DENY

    def test_action_mismatch_skips(self):
        d = Directive.allow("administer", "pipeline_group", "*")
        assert d.apply(_query()) is Result.SKIP

    def test_action_is_case_sensitive(self):
        d = Directive.allow("Refer", "pipeline_group", "*")
        assert d.apply(_query()) is Result.SKIP

    def test_wildcard_action(self):
        d = Directive.allow("*", "pipeline_group", "*")
        assert d.apply(_query(action="anything")) is Result.ALLOW

    def test_type_mismatch_skips(self):
        d = Directive.allow("refer", "pipeline_group", "*")
        assert d.apply(_query(entity_type="environment")) is Result.SKIP

    def test_type_is_case_insensitive(self):
        d = Directive.allow("refer", "Pipeline_Group", "*")
        assert d.apply(_query(entity_type="PIPELINE_GROUP")) is Result.ALLOW

    def test_wildcard_type(self):
        d = Directive.deny("refer", "*", "*")
        assert d.apply(_query(entity_type="environment")) is Result.DENY

    def test_resource_mismatch_skips(self):
        d = Directive.allow("refer", "pipeline_group", "prod-*")
        assert d.apply(_query(resource="staging-web")) is Result.SKIP

    def test_resource_is_case_insensitive(self):
        d = Directive.allow("refer", "pipeline", "mypipeline")
        assert d.apply(_query(entity_type="pipeline", resource="MyPipeline")) is Result.ALLOW

    def test_wildcard_resource_matches_empty(self):
        d = Directive.allow("refer", "pipeline_group", "*")
        assert d.apply(_query(resource="")) is Result.ALLOW


class TestDirectiveConstruction:
    def test_frozen(self):
        d = Directive.allow("refer", "*", "*")
        with pytest.raises(ValidationError):
            d.action = "administer"  # type: ignore[misc]

    def test_from_persisted_keys(self):
        d = Directive.model_validate(
            {"directive": "deny", "action": "refer", "type": "environment", "resource": "prod"}
        )
        assert d.verdict is Verdict.DENY
        assert d.entity_type == "environment"
        assert d.resource_pattern == "prod"

    def test_verdict_is_case_insensitive(self):
        d = Directive.model_validate(
            {"directive": "ALLOW", "action": "refer", "type": "*", "resource": "*"}
        )
        assert d.verdict is Verdict.ALLOW

    def test_unknown_verdict_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Directive.model_validate(
                {"directive": "permit", "action": "refer", "type": "*", "resource": "*"}
            )
        assert "must be either 'allow' or 'deny'" in str(exc_info.value)

    def test_blank_resource_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Directive.allow("refer", "*", "")
        assert "Resource cannot be blank" in str(exc_info.value)

    def test_unsupported_wildcard_rejected(self):
        with pytest.raises(ValidationError):
            Directive.allow("refer", "*", "build-?")

    def test_to_dict_uses_persisted_keys(self):
        d = Directive.deny("refer", "pipeline_group", "secret-*")
        assert d.to_dict() == {
            "directive": "deny",
            "action": "refer",
            "type": "pipeline_group",
            "resource": "secret-*",
        }

    def test_str(self):
        assert str(Directive.allow("refer", "*", "prod-*")) == "allow(refer, *, prod-*)"

    def test_hashable_and_equal(self):
        a = Directive.allow("refer", "*", "*")
        b = Directive.allow("refer", "*", "*")
        assert a == b
        assert hash(a) == hash(b)


class TestRuleSet:
    def test_none_is_empty(self):
        assert RuleSet(None).is_empty()
        assert len(RuleSet()) == 0

    def test_preserves_order(self):
        directives = [
            Directive.deny("refer", "*", "foo*"),
            Directive.allow("refer", "*", "*"),
        ]
        rules = RuleSet(directives)
        assert list(rules) == directives
        assert rules[0].verdict is Verdict.DENY

    def test_not_mutated_by_source_list(self):
        directives = [Directive.allow("refer", "*", "*")]
        rules = RuleSet(directives)
        directives.append(Directive.deny("refer", "*", "*"))
        assert len(rules) == 1

    def test_slice_returns_ruleset(self):
        rules = RuleSet([Directive.allow("refer", "*", "a"), Directive.allow("refer", "*", "b")])
        assert isinstance(rules[1:], RuleSet)
        assert rules[1:][0].resource_pattern == "b"

    def test_equality(self):
        a = RuleSet([Directive.allow("refer", "*", "*")])
        b = RuleSet([Directive.allow("refer", "*", "*")])
        assert a == b
        assert hash(a) == hash(b)

    def test_no_item_assignment(self):
        rules = RuleSet([Directive.allow("refer", "*", "*")])
        with pytest.raises(TypeError):
            rules[0] = Directive.deny("refer", "*", "*")  # type: ignore[index]

    def test_to_list(self):
        rules = RuleSet([Directive.allow("refer", "environment", "prod")])
        assert rules.to_list() == [
            {"directive": "allow", "action": "refer", "type": "environment", "resource": "prod"}
        ]
