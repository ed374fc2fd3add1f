"""Tests for refguard.core.rules.validation — configuration-time vocabulary checks."""

from __future__ import annotations

from refguard.core.rules.model import Directive, RuleSet
from refguard.core.rules.validation import validate_directives

_ACTIONS = frozenset({"refer"})
_TYPES = frozenset({"pipeline_group", "environment"})


def _validate(*directives: Directive):
    return validate_directives(
        RuleSet(directives), _ACTIONS, _TYPES, entity_kind="secret_config", entity_id="vault"
    )


class TestValidateDirectives:
    def test_valid_rules(self):
        assert _validate(
            Directive.allow("refer", "pipeline_group", "prod-*"),
            Directive.deny("refer", "environment", "*"),
        ) == []

    def test_wildcards_always_accepted(self):
        assert _validate(Directive.allow("*", "*", "*")) == []

    def test_empty_and_absent_rules_are_valid(self):
        assert validate_directives(
            None, _ACTIONS, _TYPES, entity_kind="secret_config", entity_id="vault"
        ) == []
        assert _validate() == []

    def test_unknown_action(self):
        violations = _validate(
            Directive.allow("refer", "pipeline_group", "*"),
            Directive.allow("administer", "pipeline_group", "*"),
        )
        assert len(violations) == 1
        v = violations[0]
        assert v.entity_kind == "secret_config"
        assert v.entity_id == "vault"
        assert v.position == 2
        assert v.field == "action"
        assert v.message == "Invalid action, must be one of [refer]."

    def test_unknown_type(self):
        violations = _validate(Directive.allow("refer", "config_repo", "*"))
        assert [v.field for v in violations] == ["type"]
        assert violations[0].message == (
            "Invalid type, must be one of [environment, pipeline_group]."
        )

    def test_type_check_is_case_insensitive(self):
        assert _validate(Directive.allow("refer", "Pipeline_Group", "*")) == []

    def test_action_check_is_case_sensitive(self):
        violations = _validate(Directive.allow("REFER", "pipeline_group", "*"))
        assert [v.field for v in violations] == ["action"]

    def test_reports_every_violation(self):
        violations = _validate(
            Directive.allow("administer", "config_repo", "*"),
            Directive.deny("delete", "environment", "*"),
        )
        assert [(v.position, v.field) for v in violations] == [
            (1, "action"),
            (1, "type"),
            (2, "action"),
        ]

    def test_violation_str_names_entity_and_position(self):
        (violation,) = _validate(Directive.allow("administer", "environment", "*"))
        text = str(violation)
        assert "secret_config 'vault'" in text
        assert "rule #1" in text
        assert "Invalid action" in text
