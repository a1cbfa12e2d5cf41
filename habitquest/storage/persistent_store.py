"""
Base class for stores that keep their whole state in memory and write it
back to a StorageBackend after every mutation.

Features:
- State restored verbatim on construction (no migrations)
- Full-state write after each mutation
- Graceful degradation: a failed load or write switches the store to
  in-memory only for the rest of the session instead of failing the caller
- Persistence statistics
"""

import logging
from datetime import date
from typing import Any, Dict

from pydantic import ValidationError

from habitquest.exceptions import StorageError
from habitquest.storage.backends import StorageBackend
from habitquest.utils.datetime_helpers import Clock, now_local

logger = logging.getLogger(__name__)


class PersistentStore:
    """
    Namespaced, write-through state holder.

    Subclasses set ``namespace`` and implement ``_reset_state``,
    ``_restore_state`` and ``_dump_state``; mutating operations call
    ``_persist()`` once memory is up to date.
    """

    namespace: str = ""

    def __init__(self, backend: StorageBackend, clock: Clock = now_local):
        """
        Args:
            backend: Where state is loaded from and saved to
            clock: Returns the current timezone-aware datetime; "today" for
                the store is ``clock().date()``
        """
        self.backend = backend
        self.clock = clock
        self.persistence_enabled = True
        self._stats = {
            "loads": 0,
            "saves": 0,
            "errors": 0,
        }

        self._reset_state()
        self._load()

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def _reset_state(self) -> None:
        """Initialize empty in-memory state"""
        raise NotImplementedError

    def _restore_state(self, state: Dict[str, Any]) -> None:
        """Rebuild in-memory state from a saved dict"""
        raise NotImplementedError

    def _dump_state(self) -> Dict[str, Any]:
        """Serialize in-memory state to a JSON-compatible dict"""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        try:
            state = self.backend.load(self.namespace)
        except StorageError:
            self._degrade("load failed")
            return

        if state is None:
            logger.debug(f"Starting '{self.namespace}' with empty state")
            return

        try:
            self._restore_state(state)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Saved state for '{self.namespace}' could not be restored: {e}")
            self._reset_state()
            self._degrade("restore failed")
            return

        self._stats["loads"] += 1
        logger.info(f"Loaded '{self.namespace}' state")

    def _persist(self) -> bool:
        """
        Write the full state to the backend.

        Returns:
            True if written, False if persistence is disabled or the write failed
        """
        if not self.persistence_enabled:
            return False

        try:
            self.backend.save(self.namespace, self._dump_state())
        except StorageError:
            self._degrade("save failed")
            return False

        self._stats["saves"] += 1
        return True

    def _degrade(self, reason: str) -> None:
        # Saved data (if any) is left untouched for inspection
        self._stats["errors"] += 1
        self.persistence_enabled = False
        logger.warning(
            f"Persistence disabled for '{self.namespace}' ({reason}) - "
            "changes are kept in memory for this session only"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def today(self) -> date:
        """Today's calendar day according to the store clock"""
        return self.clock().date()

    def get_stats(self) -> Dict[str, Any]:
        """Persistence statistics"""
        return {
            "namespace": self.namespace,
            "persistence_enabled": self.persistence_enabled,
            **self._stats,
        }
