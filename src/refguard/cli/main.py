"""
refguard CLI entry point.

Commands:
  refguard rules validate <config>        — validate a configuration document
  refguard rules check <config> ...       — may a caller refer to a target?
  refguard rules show <config> --target   — print a target's rules
  refguard entities                       — list known entity-type descriptors
  refguard --version                      — show version
"""

from __future__ import annotations

import click

from refguard import __version__
from refguard.cli._rules_cmd import rules_group


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", message="refguard %(version)s")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
def cli(log_level: str | None) -> None:
    """refguard — referential authorization rules for configuration entities."""
    from refguard.core.exceptions import SettingsError
    from refguard.core.log import configure_logging
    from refguard.core.settings import LoggingSettings, load_settings

    try:
        logging_settings = load_settings().logging
    except SettingsError as exc:
        click.echo(f"Warning: {exc}; using default settings", err=True)
        logging_settings = LoggingSettings()
    if log_level:
        logging_settings = logging_settings.model_copy(update={"level": log_level.upper()})
    configure_logging(logging_settings)


cli.add_command(rules_group)


@cli.command("entities")
@click.option("--json", "as_json", is_flag=True, default=False)
def entities_cmd(as_json: bool) -> None:
    """List the entity-type descriptors callers may resolve."""
    from refguard.core.rules.entities import EntityTypeRegistry

    descriptors = EntityTypeRegistry.with_defaults().descriptors()
    if as_json:
        import json

        click.echo(json.dumps(descriptors, indent=2))
    else:
        for descriptor, tag in descriptors.items():
            click.echo(f"  {descriptor:<28} {tag}")


if __name__ == "__main__":
    cli()
