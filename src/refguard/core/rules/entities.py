"""
Entity-type tags and descriptor resolution.

Directives name the kind of entity that may refer to their owner using a
closed vocabulary of tags (``pipeline_group``, ``environment``, ...). Callers
that only hold a symbolic descriptor for themselves (a configuration class
name such as ``PipelineConfigs``, or a hyphenated alias) resolve it through an
:class:`EntityTypeRegistry` instance passed to them at startup.
"""

from __future__ import annotations

from enum import StrEnum


class SupportedEntity(StrEnum):
    """Closed vocabulary of configuration entity kinds."""

    PIPELINE = "pipeline"
    PIPELINE_GROUP = "pipeline_group"
    ENVIRONMENT = "environment"
    CONFIG_REPO = "config_repo"
    CLUSTER_PROFILE = "cluster_profile"
    ELASTIC_AGENT_PROFILE = "elastic_agent_profile"
    SECRET_CONFIG = "secret_config"
    PLUGGABLE_SCM = "pluggable_scm"
    PACKAGE_REPOSITORY = "package_repository"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> SupportedEntity:
        """Case-insensitive lookup; anything unrecognised maps to UNKNOWN."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def tag(self) -> str:
        return self.value


# Configuration class names the platform uses for each kind
_CONFIG_CLASS_NAMES: dict[str, SupportedEntity] = {
    "PipelineConfig": SupportedEntity.PIPELINE,
    "PipelineConfigs": SupportedEntity.PIPELINE_GROUP,
    "BasicPipelineConfigs": SupportedEntity.PIPELINE_GROUP,
    "EnvironmentConfig": SupportedEntity.ENVIRONMENT,
    "BasicEnvironmentConfig": SupportedEntity.ENVIRONMENT,
    "ConfigRepoConfig": SupportedEntity.CONFIG_REPO,
    "ClusterProfile": SupportedEntity.CLUSTER_PROFILE,
    "ElasticProfile": SupportedEntity.ELASTIC_AGENT_PROFILE,
    "SecretConfig": SupportedEntity.SECRET_CONFIG,
    "SCM": SupportedEntity.PLUGGABLE_SCM,
    "PackageRepository": SupportedEntity.PACKAGE_REPOSITORY,
}


class EntityTypeRegistry:
    """Maps caller descriptors to entity-type tags.

    Build one at startup and hand it to whatever needs to resolve callers;
    tests build their own.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, SupportedEntity] = {}

    @classmethod
    def with_defaults(cls) -> EntityTypeRegistry:
        """Registry knowing every canonical tag, its hyphenated form, and the config class names."""
        registry = cls()
        for entity in SupportedEntity:
            if entity is SupportedEntity.UNKNOWN:
                continue
            registry.register(entity.value, entity)
            registry.register(entity.value.replace("_", "-"), entity)
        for name, entity in _CONFIG_CLASS_NAMES.items():
            registry.register(name, entity)
        return registry

    def register(self, descriptor: str, entity: SupportedEntity) -> None:
        """Register (or overwrite) a descriptor for an entity kind."""
        key = descriptor.strip().lower()
        if not key:
            raise ValueError("Descriptor cannot be blank")
        self._descriptors[key] = entity

    def resolve(self, descriptor: str | SupportedEntity) -> SupportedEntity:
        """Return the entity kind for ``descriptor``, or UNKNOWN if unregistered."""
        if isinstance(descriptor, SupportedEntity):
            return descriptor
        return self._descriptors.get(descriptor.strip().lower(), SupportedEntity.UNKNOWN)

    def descriptors(self) -> dict[str, str]:
        """Return all registered descriptors and their tags."""
        return {d: e.value for d, e in sorted(self._descriptors.items())}

    def __contains__(self, descriptor: object) -> bool:
        return isinstance(descriptor, str) and descriptor.strip().lower() in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
