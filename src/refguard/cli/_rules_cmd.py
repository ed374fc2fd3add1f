"""
CLI commands: ``refguard rules validate``, ``refguard rules check`` and ``refguard rules show``.
"""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console

from refguard.core.constants import REFER, ExitCode
from refguard.core.document.models import ConfigRevision, TargetEntity
from refguard.core.document.parser import load_config
from refguard.core.exceptions import ConfigParseError, ConfigValidationError
from refguard.core.rules.entities import EntityTypeRegistry
from refguard.core.rules.explain import explain_decision, explain_rules
from refguard.core.rules.model import Query
from refguard.core.rules.representer import rules_to_json

console = Console()
err_console = Console(stderr=True)


def _resolve_config_path(config_file: str | None) -> str:
    if config_file:
        return config_file
    from refguard.core.settings import load_settings

    return str(load_settings().document_path)


def _load_or_exit(config_file: str | None) -> ConfigRevision:
    path = _resolve_config_path(config_file)
    try:
        return load_config(path)
    except ConfigParseError as exc:
        click.echo(str(exc), err=True)
        sys.exit(ExitCode.ERROR)


def _find_target_or_exit(revision: ConfigRevision, target: str) -> TargetEntity:
    kind, sep, entity_id = target.partition(":")
    if not sep or not kind or not entity_id:
        click.echo(
            f"Invalid target {target!r}; expected KIND:ID, e.g. secret_config:vault", err=True
        )
        sys.exit(ExitCode.ERROR)
    entity = revision.find(kind, entity_id)
    if entity is None:
        click.echo(f"Target not found: {target}", err=True)
        sys.exit(ExitCode.NOT_FOUND)
    return entity


@click.group("rules")
def rules_group() -> None:
    """Validate configuration rules and test references against them."""


@rules_group.command("validate")
@click.argument("config_file", required=False, type=click.Path(dir_okay=False))
def rules_validate(config_file: str | None) -> None:
    """
    Validate a configuration document and every directive in it.

    Exits 0 if valid, 1 if invalid.
    """
    path = _resolve_config_path(config_file)
    try:
        revision = load_config(path)
    except ConfigValidationError as exc:
        err_console.print(f"[red]✗[/red]  {len(exc.violations)} violation(s) in {exc.source}")
        for violation in exc.violations:
            click.echo(f"  {violation}", err=True)
        sys.exit(ExitCode.ERROR)
    except ConfigParseError as exc:
        click.echo(str(exc), err=True)
        sys.exit(ExitCode.ERROR)

    rule_count = sum(len(entity.get_rules()) for entity in revision.targets())
    console.print(
        f"[green]✓[/green]  Configuration {path} is valid "
        f"({revision.entity_count()} entities, {rule_count} rule(s), "
        f"hash={revision.content_hash()})"
    )


@rules_group.command("check")
@click.argument("config_file", required=False, type=click.Path(dir_okay=False))
@click.option("--target", required=True, help="Target entity as KIND:ID, e.g. secret_config:vault.")
@click.option(
    "--type",
    "entity_type",
    required=True,
    help="Caller entity type or descriptor, e.g. pipeline_group or PipelineConfigs.",
)
@click.option("--resource", required=True, help="Caller resource name, e.g. the group name.")
@click.option("--action", default=REFER, show_default=True, help="Action to test.")
@click.option("--explain", is_flag=True, default=False, help="Show per-directive match details.")
@click.option("--json", "as_json", is_flag=True, default=False)
def rules_check(
    config_file: str | None,
    target: str,
    entity_type: str,
    resource: str,
    action: str,
    explain: bool,
    as_json: bool,
) -> None:
    """
    Check whether a caller may refer to a target entity.

    Exits 0 when allowed, 3 when denied, 2 when the target does not exist.

    Example::

        refguard rules check config.yaml --target secret_config:vault \\
            --type pipeline_group --resource prod-web --explain
    """
    revision = _load_or_exit(config_file)
    entity = _find_target_or_exit(revision, target)

    caller = EntityTypeRegistry.with_defaults().resolve(entity_type)
    decision = entity.check_reference(caller, resource, action=action)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "target": str(entity),
                    "action": action,
                    "type": caller.value,
                    "resource": resource,
                    "allowed": decision.allowed,
                    "matched_position": decision.position,
                    "matched": decision.matched.to_dict() if decision.matched else None,
                    "reason": decision.reason,
                },
                indent=2,
            )
        )
    else:
        if explain:
            click.echo(explain_rules(entity, Query(action, caller.value, resource)))
            click.echo("")
        click.echo(explain_decision(decision))

    sys.exit(ExitCode.SUCCESS if decision.allowed else ExitCode.DENIED)


@rules_group.command("show")
@click.argument("config_file", required=False, type=click.Path(dir_okay=False))
@click.option("--target", required=True, help="Target entity as KIND:ID.")
@click.option("--json", "as_json", is_flag=True, default=False)
def rules_show(config_file: str | None, target: str, as_json: bool) -> None:
    """Show a target entity's rules in declared order."""
    revision = _load_or_exit(config_file)
    entity = _find_target_or_exit(revision, target)
    rules = entity.get_rules()

    if as_json:
        click.echo(json.dumps({"target": str(entity), "rules": rules_to_json(rules)}, indent=2))
        return

    console.print(f"\n[bold]{entity}[/bold]  (plugin: {entity.plugin_id})\n")
    if rules.is_empty():
        console.print("  [dim]No rules configured — every reference is denied.[/dim]\n")
        return
    for position, directive in enumerate(rules, start=1):
        colour = "green" if directive.verdict == "allow" else "red"
        console.print(
            f"  #{position:<3} [{colour}]{directive.verdict.value:<5}[/{colour}]  "
            f"action={directive.action:<10} type={directive.entity_type:<22} "
            f"resource={directive.resource_pattern}"
        )
    console.print()
