"""refguard constants: filesystem layout, exit codes, and rule vocabulary."""

from __future__ import annotations

from enum import IntEnum

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    NOT_FOUND = 2
    DENIED = 3


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

REFGUARD_DIR_NAME = ".refguard"
SETTINGS_FILENAME = "settings.toml"
DOCUMENT_FILENAME = "config.yaml"

# ---------------------------------------------------------------------------
# Rule vocabulary
# ---------------------------------------------------------------------------

WILDCARD = "*"
REFER = "refer"

# Characters with glob meaning elsewhere that resource patterns do not support
UNSUPPORTED_PATTERN_CHARS = frozenset("?[]{}")

# Platform entity naming rule
ENTITY_ID_PATTERN = r"[a-zA-Z0-9_\-][a-zA-Z0-9_\-.]*"
ENTITY_ID_MAX_LENGTH = 255
