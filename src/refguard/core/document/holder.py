"""
Revision holder — publishes configuration revisions to concurrent readers.

Readers take ``holder.current`` once and evaluate against that revision; a
publish swaps in a complete new revision, so a reader never observes a
partially updated one.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from refguard.core.document.models import ConfigRevision
from refguard.core.document.parser import load_config

logger = logging.getLogger(__name__)


class RevisionHolder:
    """Holds the current configuration revision.

    Construct one at startup and pass it to consumers; tests create their own.
    """

    def __init__(self, initial: ConfigRevision | None = None) -> None:
        self._lock = threading.Lock()
        self._current = initial if initial is not None else ConfigRevision()
        self._number = 0 if initial is None else 1

    @property
    def current(self) -> ConfigRevision:
        return self._current

    @property
    def revision_number(self) -> int:
        return self._number

    def publish(self, revision: ConfigRevision) -> int:
        """Replace the current revision wholesale and return its revision number."""
        with self._lock:
            self._number += 1
            self._current = revision
            number = self._number
        logger.info(
            "Published configuration revision %d (hash=%s)", number, revision.content_hash()
        )
        return number

    def reload(self, path: str | Path) -> int:
        """Load ``path`` and publish it.

        If loading fails the current revision stays in place and the error propagates.
        """
        revision = load_config(path)
        return self.publish(revision)
