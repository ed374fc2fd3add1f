"""
Configuration document parser — loads and validates the YAML document of
rule-carrying entities.

Usage::

    revision = load_config("~/.refguard/config.yaml")
    revision = parse_config(yaml_string)
    text = dump_config(revision)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from refguard.core.document.models import SECTIONS, ConfigRevision, TargetEntity
from refguard.core.exceptions import ConfigParseError, ConfigValidationError, DirectiveViolation
from refguard.core.rules.representer import validation_messages

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> ConfigRevision:
    """
    Load and validate a configuration document from a YAML file.

    Raises:
        ConfigParseError: if the file is missing, unreadable, or malformed.
        ConfigValidationError: if any entity or directive is invalid.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise ConfigParseError(f"Configuration file not found: {p}")
    try:
        content = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigParseError(f"Cannot read configuration file {p}: {exc}") from exc
    return parse_config(content, source=str(p))


def _entity_violations(
    model: type[TargetEntity], index: int, raw: Any, exc: ValidationError
) -> list[DirectiveViolation]:
    entity_id = str(raw.get("id") or f"#{index + 1}") if isinstance(raw, dict) else f"#{index + 1}"
    violations = []
    for loc, msg in validation_messages(exc):
        position: int | None = None
        field = " → ".join(str(x) for x in loc) if loc else "(root)"
        # ("rules", 2, "resource") → rule #3, field "resource"
        if len(loc) >= 2 and loc[0] == "rules" and isinstance(loc[1], int):
            position = loc[1] + 1
            field = " → ".join(str(x) for x in loc[2:]) or "rules"
        violations.append(
            DirectiveViolation(
                entity_kind=model.KIND.value,
                entity_id=entity_id,
                position=position,
                field=field,
                message=msg,
            )
        )
    return violations


def parse_config(yaml_text: str, source: str = "<string>") -> ConfigRevision:
    """
    Parse and validate a YAML configuration document.

    Args:
        yaml_text: Raw YAML content.
        source:    Human-readable source label for error messages.

    Returns:
        A validated, immutable :class:`ConfigRevision`.

    Raises:
        ConfigParseError: on YAML syntax errors or a malformed document layout.
        ConfigValidationError: when entities or their directives are invalid.
    """
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"YAML syntax error in {source}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Configuration {source} must be a YAML mapping (got {type(data).__name__})"
        )

    unknown = sorted(str(key) for key in data if key not in SECTIONS)
    if unknown:
        raise ConfigParseError(
            f"Unknown section(s) in {source}: {', '.join(unknown)}. "
            f"Expected: {', '.join(SECTIONS)}"
        )

    sections: dict[str, list[TargetEntity]] = {}
    violations: list[DirectiveViolation] = []
    for section, model in SECTIONS.items():
        entries = data.get(section) or []
        if not isinstance(entries, list):
            raise ConfigParseError(
                f"Section {section!r} in {source} must be a list (got {type(entries).__name__})"
            )
        parsed: list[TargetEntity] = []
        for index, raw in enumerate(entries):
            try:
                parsed.append(model.model_validate(raw))
            except ValidationError as exc:
                violations.extend(_entity_violations(model, index, raw, exc))
        sections[section] = parsed

    if not violations:
        revision = ConfigRevision(**{name: tuple(items) for name, items in sections.items()})
        violations = revision.violations()

    if violations:
        logger.warning("Rejected configuration %s: %d violation(s)", source, len(violations))
        raise ConfigValidationError(violations, source=source)

    logger.info(
        "Loaded configuration %s: %d entities, hash=%s",
        source,
        revision.entity_count(),
        revision.content_hash(),
    )
    return revision


def dump_config(revision: ConfigRevision) -> str:
    """Serialise a revision back to YAML, keeping directive order."""
    return yaml.safe_dump(revision.to_document(), sort_keys=False, default_flow_style=False)


def validate_config_file(path: str | Path) -> list[str]:
    """
    Validate a configuration file and return a list of human-readable error strings.

    Returns an empty list if the document is valid.
    """
    try:
        load_config(path)
        return []
    except ConfigParseError as exc:
        return str(exc).splitlines()
