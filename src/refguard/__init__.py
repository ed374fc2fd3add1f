"""
refguard — referential authorization rules for configuration entities.

A secret config, cluster profile or config repository carries an ordered list
of allow/deny directives. refguard decides whether another entity (a pipeline,
a pipeline group, an environment, ...) may refer to it. Evaluation is local to
the target entity, first-match-wins, and fails closed.

Package layout (src/refguard/):
  core/rules/     — matcher, directives, evaluator, RulesAware contract
  core/document/  — configuration document models, YAML parser, revisions
  core/           — settings, logging, exceptions, constants
  cli/            — Click CLI entry point
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
