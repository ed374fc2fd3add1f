"""
refguard test suite.

Tests are organized by layer:
    tests/rules/    Rules engine: matcher, directives, evaluator, validation, explain
    tests/unit/     Configuration document, revisions, settings, CLI
    tests/safety/   Guards on fail-closed defaults

Run all tests:
    pytest

Run with coverage:
    pytest --cov=refguard
"""
