"""
Construction-time validation of an entity's directives.

Runs when a configuration document is loaded, never during evaluation. Each
directive's action and type must belong to the owning entity's vocabulary
(or be ``*``), and its resource pattern must be usable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from refguard.core.constants import WILDCARD
from refguard.core.exceptions import DirectiveViolation
from refguard.core.rules.matcher import pattern_error
from refguard.core.rules.model import Directive


def _vocabulary(values: Iterable[str]) -> str:
    return "[" + ", ".join(sorted(values)) + "]"


def validate_directives(
    rules: Sequence[Directive] | None,
    allowed_actions: Iterable[str],
    allowed_types: Iterable[str],
    *,
    entity_kind: str,
    entity_id: str,
) -> list[DirectiveViolation]:
    """Return every violation in ``rules``; an empty list means the rules are valid."""
    actions = frozenset(allowed_actions)
    types = frozenset(t.lower() for t in allowed_types)
    violations: list[DirectiveViolation] = []

    def reject(position: int, field: str, message: str) -> None:
        violations.append(
            DirectiveViolation(
                entity_kind=entity_kind,
                entity_id=entity_id,
                position=position,
                field=field,
                message=message,
            )
        )

    for position, directive in enumerate(rules or (), start=1):
        if directive.action != WILDCARD and directive.action not in actions:
            reject(position, "action", f"Invalid action, must be one of {_vocabulary(actions)}.")
        if directive.entity_type != WILDCARD and directive.entity_type.lower() not in types:
            reject(position, "type", f"Invalid type, must be one of {_vocabulary(types)}.")
        error = pattern_error(directive.resource_pattern)
        if error:
            reject(position, "resource", error)

    return violations
