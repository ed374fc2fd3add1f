"""refguard exception hierarchy."""

from __future__ import annotations

from dataclasses import dataclass


class RefguardError(Exception):
    """Base exception for all refguard errors."""


class SettingsError(RefguardError):
    """Raised when the settings file is invalid or cannot be read."""


class ConfigParseError(RefguardError, ValueError):
    """Raised when a configuration document cannot be parsed or fails its schema."""


@dataclass(frozen=True)
class DirectiveViolation:
    """One rejected directive (or entity) in a configuration document."""

    entity_kind: str
    entity_id: str
    position: int | None  # 1-based directive position; None for entity-level errors
    field: str
    message: str

    def __str__(self) -> str:
        where = f"{self.entity_kind} {self.entity_id!r}"
        if self.position is not None:
            where += f" rule #{self.position}"
        return f"{where} ({self.field}): {self.message}"


class ConfigValidationError(ConfigParseError):
    """Raised when directives or entities violate their owner's vocabulary.

    Carries every violation found so the operator sees them all at once.
    """

    def __init__(self, violations: list[DirectiveViolation], source: str = "<string>") -> None:
        self.violations = list(violations)
        self.source = source
        lines = [f"Configuration validation failed in {source}:"]
        lines.extend(f"  {v}" for v in self.violations)
        super().__init__("\n".join(lines))
