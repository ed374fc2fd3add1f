"""
refguard rules — referential authorization for configuration entities.

Public API::

    from refguard.core.rules import Directive, Query, RuleSet, evaluate

    rules = RuleSet([
        Directive.deny("refer", "pipeline_group", "secret-*"),
        Directive.allow("refer", "*", "*"),
    ])
    evaluate(rules, Query("refer", "pipeline_group", "build"))  # True
"""

from refguard.core.rules.aware import RulesAware
from refguard.core.rules.entities import EntityTypeRegistry, SupportedEntity
from refguard.core.rules.evaluator import ReferenceDecision, decide, evaluate
from refguard.core.rules.matcher import is_valid_pattern, matches, pattern_error
from refguard.core.rules.model import Directive, Query, Result, RuleSet, Verdict
from refguard.core.rules.representer import rules_from_json, rules_to_json
from refguard.core.rules.validation import validate_directives

__all__ = [
    "Directive",
    "EntityTypeRegistry",
    "Query",
    "ReferenceDecision",
    "Result",
    "RuleSet",
    "RulesAware",
    "SupportedEntity",
    "Verdict",
    "decide",
    "evaluate",
    "is_valid_pattern",
    "matches",
    "pattern_error",
    "rules_from_json",
    "rules_to_json",
    "validate_directives",
]
