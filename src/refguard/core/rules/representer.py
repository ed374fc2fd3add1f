"""
Rules representer — the persisted/JSON form of a rule set.

    [
      {"directive": "deny",  "action": "refer", "type": "pipeline_group", "resource": "secret-*"},
      {"directive": "allow", "action": "refer", "type": "*",              "resource": "*"}
    ]

Order is preserved exactly in both directions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from refguard.core.exceptions import ConfigParseError
from refguard.core.rules.model import Directive, RuleSet

_VALUE_ERROR_PREFIX = "Value error, "

# pydantic reports aliased fields under their alias; keep the persisted names
_FIELD_NAMES = {"verdict": "directive", "entity_type": "type", "resource_pattern": "resource"}


def validation_messages(exc: ValidationError) -> list[tuple[tuple[str | int, ...], str]]:
    """Flatten a pydantic ValidationError into ``(location, message)`` pairs."""
    messages = []
    for err in exc.errors():
        msg = err["msg"]
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX) :]
        loc = tuple(_FIELD_NAMES.get(x, x) if isinstance(x, str) else x for x in err["loc"])
        messages.append((loc, msg))
    return messages


def rules_to_json(rules: Sequence[Directive] | None) -> list[dict[str, str]]:
    return [directive.to_dict() for directive in rules or ()]


def rules_from_json(data: Any, source: str = "rules") -> RuleSet:
    """
    Build a RuleSet from its persisted form.

    ``None`` yields an empty rule set.

    Raises:
        ConfigParseError: if ``data`` is not a list or any entry is malformed.
    """
    if data is None:
        return RuleSet()
    if not isinstance(data, list):
        raise ConfigParseError(f"{source} must be a list (got {type(data).__name__})")

    directives: list[Directive] = []
    errors: list[str] = []
    for position, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            errors.append(f"  rule #{position}: must be a mapping (got {type(entry).__name__})")
            continue
        try:
            directives.append(Directive.model_validate(entry))
        except ValidationError as exc:
            for loc, msg in validation_messages(exc):
                field = " → ".join(str(x) for x in loc) if loc else "(root)"
                errors.append(f"  rule #{position} {field}: {msg}")

    if errors:
        raise ConfigParseError("\n".join([f"Invalid rules in {source}:", *errors]))
    return RuleSet(directives)
