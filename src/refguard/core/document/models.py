"""
Configuration document models — the entities that can be referred to.

Each target entity is a frozen pydantic model implementing
:class:`~refguard.core.rules.RulesAware`. A loaded document becomes one
immutable :class:`ConfigRevision`; a configuration change produces a new
revision rather than mutating this one.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterator
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from refguard.core.constants import ENTITY_ID_MAX_LENGTH, ENTITY_ID_PATTERN, REFER
from refguard.core.exceptions import DirectiveViolation
from refguard.core.rules.aware import RulesAware
from refguard.core.rules.entities import SupportedEntity
from refguard.core.rules.model import Directive, RuleSet

_ENTITY_ID_RE = re.compile(ENTITY_ID_PATTERN)


class TargetEntity(BaseModel, RulesAware):
    """Base for configuration entities that carry rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    KIND: ClassVar[SupportedEntity] = SupportedEntity.UNKNOWN
    ALLOWED_ACTIONS: ClassVar[frozenset[str]] = frozenset({REFER})
    ALLOWED_TYPES: ClassVar[frozenset[str]] = frozenset()

    id: str
    plugin_id: str
    description: str = ""
    rules: tuple[Directive, ...] | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Id cannot be blank.")
        if len(v) > ENTITY_ID_MAX_LENGTH or not _ENTITY_ID_RE.fullmatch(v):
            raise ValueError(
                f"Invalid id {v!r}. This must be alphanumeric and can contain underscores, "
                f"hyphens and periods (however, it cannot start with a period). "
                f"The maximum allowed length is {ENTITY_ID_MAX_LENGTH} characters."
            )
        return v

    @field_validator("plugin_id")
    @classmethod
    def validate_plugin_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Plugin id cannot be blank.")
        return v

    # -- RulesAware ----------------------------------------------------------

    def allowed_actions(self) -> frozenset[str]:
        return self.ALLOWED_ACTIONS

    def allowed_types(self) -> frozenset[str]:
        return self.ALLOWED_TYPES

    def get_rules(self) -> RuleSet:
        return RuleSet(self.rules)

    def validate_rules(self) -> list[DirectiveViolation]:
        return self.rules_errors(self.KIND.value, self.id)

    def __str__(self) -> str:
        return f"{self.KIND.value}:{self.id}"


class SecretConfig(TargetEntity):
    """A secret manager configuration; pipelines look up secrets through it."""

    KIND = SupportedEntity.SECRET_CONFIG
    ALLOWED_TYPES = frozenset(
        {
            SupportedEntity.PIPELINE_GROUP.value,
            SupportedEntity.ENVIRONMENT.value,
            SupportedEntity.PLUGGABLE_SCM.value,
            SupportedEntity.PACKAGE_REPOSITORY.value,
        }
    )


class ClusterProfile(TargetEntity):
    """Elastic agent cluster settings; jobs attach to it through elastic agent profiles."""

    KIND = SupportedEntity.CLUSTER_PROFILE
    ALLOWED_TYPES = frozenset(
        {SupportedEntity.PIPELINE_GROUP.value, SupportedEntity.ELASTIC_AGENT_PROFILE.value}
    )


class ConfigRepoConfig(TargetEntity):
    """A config repository; the pipelines it defines may join groups and environments."""

    KIND = SupportedEntity.CONFIG_REPO
    ALLOWED_TYPES = frozenset(
        {
            SupportedEntity.PIPELINE.value,
            SupportedEntity.PIPELINE_GROUP.value,
            SupportedEntity.ENVIRONMENT.value,
        }
    )


# Document section → model
SECTIONS: dict[str, type[TargetEntity]] = {
    "secret_configs": SecretConfig,
    "cluster_profiles": ClusterProfile,
    "config_repos": ConfigRepoConfig,
}


class ConfigRevision(BaseModel):
    """One immutable revision of the configuration document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    secret_configs: tuple[SecretConfig, ...] = ()
    cluster_profiles: tuple[ClusterProfile, ...] = ()
    config_repos: tuple[ConfigRepoConfig, ...] = ()

    def targets(self) -> Iterator[TargetEntity]:
        yield from self.secret_configs
        yield from self.cluster_profiles
        yield from self.config_repos

    def find(self, kind: SupportedEntity | str, entity_id: str) -> TargetEntity | None:
        """Look up a target by kind and id (ids compare case-insensitively)."""
        wanted = SupportedEntity.from_string(str(kind))
        for entity in self.targets():
            if entity.KIND is wanted and entity.id.lower() == entity_id.lower():
                return entity
        return None

    def violations(self) -> list[DirectiveViolation]:
        """Rule vocabulary violations and duplicate ids across the whole revision."""
        found: list[DirectiveViolation] = []
        seen: set[tuple[SupportedEntity, str]] = set()
        for entity in self.targets():
            key = (entity.KIND, entity.id.lower())
            if key in seen:
                found.append(
                    DirectiveViolation(
                        entity_kind=entity.KIND.value,
                        entity_id=entity.id,
                        position=None,
                        field="id",
                        message=f"Duplicate {entity.KIND.value} id {entity.id!r}.",
                    )
                )
            seen.add(key)
            found.extend(entity.validate_rules())
        return found

    def to_document(self) -> dict[str, Any]:
        """The persisted form; rules keep their declared order."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    def content_hash(self) -> str:
        """Short SHA-256 of the canonical JSON form of this revision."""
        canonical = json.dumps(self.to_document(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]

    def entity_count(self) -> int:
        return len(self.secret_configs) + len(self.cluster_profiles) + len(self.config_repos)
