"""
Resource pattern matching.

A pattern is a plain resource name in which ``*`` stands for any run of zero
or more characters. The whole value must match; there is no substring search
and no other wildcard syntax. Callers lower-case both sides when they want
case-insensitive comparison.

    >>> matches("prod-*", "prod-web")
    True
    >>> matches("prod-*", "staging-prod-web")
    False
"""

from __future__ import annotations

from refguard.core.constants import UNSUPPORTED_PATTERN_CHARS, WILDCARD


def matches(pattern: str, value: str) -> bool:
    """Return True if ``value`` matches ``pattern`` in its entirety."""
    if WILDCARD not in pattern:
        return pattern == value
    if pattern == WILDCARD:
        return True

    parts = pattern.split(WILDCARD)
    head, tail, middle = parts[0], parts[-1], parts[1:-1]

    if len(value) < len(head) + len(tail):
        return False
    if not value.startswith(head) or not value.endswith(tail):
        return False

    # Greedy left-to-right placement of the fixed segments between the stars
    pos = len(head)
    end = len(value) - len(tail)
    for segment in middle:
        if not segment:
            continue
        idx = value.find(segment, pos, end)
        if idx < 0:
            return False
        pos = idx + len(segment)
    return True


def pattern_error(pattern: str) -> str | None:
    """Return a validation message for an unusable pattern, or None if it is valid."""
    if not pattern or not pattern.strip():
        return "Resource cannot be blank."
    if any(ch.isspace() for ch in pattern):
        return f"Invalid resource {pattern!r}, whitespace is not allowed."
    bad = sorted(UNSUPPORTED_PATTERN_CHARS.intersection(pattern))
    if bad:
        return (
            f"Invalid resource {pattern!r}, unsupported wildcard character(s) "
            f"{' '.join(bad)}; only '*' is supported."
        )
    return None


def is_valid_pattern(pattern: str) -> bool:
    return pattern_error(pattern) is None
