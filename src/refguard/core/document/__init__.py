"""
refguard document — the configuration document of rule-carrying entities.

Public API::

    from refguard.core.document import RevisionHolder, load_config

    holder = RevisionHolder(load_config("config.yaml"))
    vault = holder.current.find("secret_config", "vault")
    vault.can_refer("pipeline_group", "prod-web")
"""

from refguard.core.document.holder import RevisionHolder
from refguard.core.document.models import (
    ClusterProfile,
    ConfigRepoConfig,
    ConfigRevision,
    SecretConfig,
    TargetEntity,
)
from refguard.core.document.parser import (
    dump_config,
    load_config,
    parse_config,
    validate_config_file,
)

__all__ = [
    "ClusterProfile",
    "ConfigRepoConfig",
    "ConfigRevision",
    "RevisionHolder",
    "SecretConfig",
    "TargetEntity",
    "dump_config",
    "load_config",
    "parse_config",
    "validate_config_file",
]
