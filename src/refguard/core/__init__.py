"""
refguard.core — rules engine, configuration document, and shared infrastructure.

Modules:
    rules       Directive matching, evaluation, RulesAware contract
    document    Configuration document models, parser, revision holder
    settings    Settings loading (TOML + env vars)
    logging     Logging configuration
    exceptions  refguard exception hierarchy
    constants   Exit codes, defaults, vocabulary
"""
