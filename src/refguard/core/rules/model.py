"""
Rule data model — directives, rule sets, and reference queries.

A directive is one allow/deny statement. Its persisted form uses the keys
``directive``, ``action``, ``type`` and ``resource``::

    {"directive": "allow", "action": "refer", "type": "pipeline_group", "resource": "prod-*"}

All types here are immutable once constructed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, overload

from pydantic import BaseModel, ConfigDict, Field, field_validator

from refguard.core.constants import WILDCARD
from refguard.core.rules.matcher import matches, pattern_error


class Verdict(StrEnum):
    ALLOW = "allow"
    DENY = "deny"


class Result(StrEnum):
    """Outcome of applying one directive to one query."""

    ALLOW = "allow"
    DENY = "deny"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class Query:
    """A reference request: may ``entity_type``/``resource`` perform ``action`` on the target?"""

    action: str
    entity_type: str
    resource: str


class Directive(BaseModel):
    """One allow/deny policy statement owned by a configuration entity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    verdict: Verdict = Field(alias="directive")
    action: str
    entity_type: str = Field(alias="type")
    resource_pattern: str = Field(alias="resource")

    @field_validator("verdict", mode="before")
    @classmethod
    def parse_verdict(cls, v: Any) -> Any:
        if isinstance(v, str):
            normalized = v.strip().lower()
            if normalized not in (Verdict.ALLOW, Verdict.DENY):
                raise ValueError("Invalid directive, must be either 'allow' or 'deny'.")
            return normalized
        return v

    @field_validator("resource_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        error = pattern_error(v)
        if error:
            raise ValueError(error)
        return v

    @classmethod
    def allow(cls, action: str, entity_type: str, resource: str) -> Directive:
        return cls(
            verdict=Verdict.ALLOW, action=action, entity_type=entity_type, resource_pattern=resource
        )

    @classmethod
    def deny(cls, action: str, entity_type: str, resource: str) -> Directive:
        return cls(
            verdict=Verdict.DENY, action=action, entity_type=entity_type, resource_pattern=resource
        )

    # -- matching ------------------------------------------------------------

    def matches_action(self, action: str) -> bool:
        return self.action == WILDCARD or self.action == action

    def matches_type(self, entity_type: str) -> bool:
        return self.entity_type == WILDCARD or self.entity_type.lower() == entity_type.lower()

    def matches_resource(self, resource: str) -> bool:
        return matches(self.resource_pattern.lower(), resource.lower())

    def apply(self, query: Query) -> Result:
        """Return ALLOW or DENY if this directive covers ``query``, otherwise SKIP."""
        if not self.matches_action(query.action):
            return Result.SKIP
        if not self.matches_type(query.entity_type):
            return Result.SKIP
        if not self.matches_resource(query.resource):
            return Result.SKIP
        return Result.ALLOW if self.verdict == Verdict.ALLOW else Result.DENY

    def to_dict(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)

    def __str__(self) -> str:
        return f"{self.verdict.value}({self.action}, {self.entity_type}, {self.resource_pattern})"


class RuleSet(Sequence[Directive]):
    """Ordered, immutable directives owned by one configuration entity.

    ``RuleSet(None)`` and ``RuleSet()`` are both empty; an empty rule set
    denies every reference.
    """

    __slots__ = ("_directives",)

    def __init__(self, directives: Iterable[Directive] | None = None) -> None:
        self._directives: tuple[Directive, ...] = tuple(directives or ())

    @overload
    def __getitem__(self, index: int) -> Directive: ...

    @overload
    def __getitem__(self, index: slice) -> RuleSet: ...

    def __getitem__(self, index: int | slice) -> Directive | RuleSet:
        if isinstance(index, slice):
            return RuleSet(self._directives[index])
        return self._directives[index]

    def __len__(self) -> int:
        return len(self._directives)

    def __iter__(self) -> Iterator[Directive]:
        return iter(self._directives)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleSet):
            return self._directives == other._directives
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._directives)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._directives)!r})"

    def is_empty(self) -> bool:
        return not self._directives

    def to_list(self) -> list[dict[str, str]]:
        return [d.to_dict() for d in self._directives]
