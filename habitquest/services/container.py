"""
Service Container - Dependency Injection Container

Wires the storage backend, the stores and the services. Stores are
lazy-loaded on first access so only the namespaces actually used are read.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from habitquest.config import DATA_PATH, STORAGE_BACKEND
from habitquest.exceptions import ConfigurationError
from habitquest.storage import JsonFileStorage, MemoryStorage, StorageBackend
from habitquest.utils.datetime_helpers import Clock, now_local

logger = logging.getLogger(__name__)


def create_backend(kind: str = STORAGE_BACKEND, data_path: Path = DATA_PATH) -> StorageBackend:
    """
    Build a storage backend from configuration.

    Args:
        kind: 'json' or 'memory'
        data_path: Directory for JSON files

    Raises:
        ConfigurationError: Unknown backend kind
    """
    if kind == "json":
        return JsonFileStorage(data_path)
    if kind == "memory":
        return MemoryStorage()
    raise ConfigurationError(f"Unknown storage backend '{kind}'", config_key="STORAGE_BACKEND")


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container.

    Stores and services are lazy-loaded on first access via properties and
    share one backend and one clock.
    """

    # Infrastructure dependencies (injected)
    backend: StorageBackend
    clock: Clock = now_local

    # Lazy-loaded
    _activity_store: Optional[object] = field(default=None, init=False, repr=False)
    _todo_store: Optional[object] = field(default=None, init=False, repr=False)
    _journal_store: Optional[object] = field(default=None, init=False, repr=False)
    _rewards_store: Optional[object] = field(default=None, init=False, repr=False)
    _progress_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def activity_store(self):
        """Get ActivityStore instance (lazy-loaded)"""
        if self._activity_store is None:
            from habitquest.stores import ActivityStore
            self._activity_store = ActivityStore(self.backend, clock=self.clock)
            logger.debug("ActivityStore instantiated")
        return self._activity_store

    @property
    def todo_store(self):
        """Get TodoStore instance (lazy-loaded)"""
        if self._todo_store is None:
            from habitquest.stores import TodoStore
            self._todo_store = TodoStore(self.backend, clock=self.clock)
            logger.debug("TodoStore instantiated")
        return self._todo_store

    @property
    def journal_store(self):
        """Get JournalStore instance (lazy-loaded)"""
        if self._journal_store is None:
            from habitquest.stores import JournalStore
            self._journal_store = JournalStore(self.backend, clock=self.clock)
            logger.debug("JournalStore instantiated")
        return self._journal_store

    @property
    def rewards_store(self):
        """Get RewardsStore instance (lazy-loaded)"""
        if self._rewards_store is None:
            from habitquest.stores import RewardsStore
            self._rewards_store = RewardsStore(self.backend, clock=self.clock)
            logger.debug("RewardsStore instantiated")
        return self._rewards_store

    @property
    def progress_service(self):
        """Get ProgressService instance (lazy-loaded)"""
        if self._progress_service is None:
            from habitquest.services.progress_service import ProgressService
            self._progress_service = ProgressService(self.activity_store, self.rewards_store)
            logger.debug("ProgressService instantiated")
        return self._progress_service


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() in main.py before using services."
        )
    return _container


def init_container(backend: Optional[StorageBackend] = None, clock: Clock = now_local) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        backend: Storage backend (built from configuration when omitted)
        clock: Clock shared by every store

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(backend=backend or create_backend(), clock=clock)

    logger.info(f"Service container initialized ({type(_container.backend).__name__})")
    return _container
