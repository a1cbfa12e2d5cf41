"""
Key-value storage backends for store state.

Each store persists its whole state as one JSON-serializable dict under a
namespace key. Backends raise StorageReadError/StorageWriteError; deciding
what to do about a failure is left to PersistentStore.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from habitquest.exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class StorageBackend:
    """Interface for namespaced state persistence"""

    def load(self, namespace: str) -> Optional[Dict[str, Any]]:
        """Return the saved state for ``namespace`` or None if nothing is saved"""
        raise NotImplementedError

    def save(self, namespace: str, state: Dict[str, Any]) -> None:
        """Replace the saved state for ``namespace``"""
        raise NotImplementedError

    def delete(self, namespace: str) -> bool:
        """Remove the saved state; returns True if something was removed"""
        raise NotImplementedError


class MemoryStorage(StorageBackend):
    """In-memory backend, state lives for the lifetime of the object"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def load(self, namespace: str) -> Optional[Dict[str, Any]]:
        raw = self._data.get(namespace)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, namespace: str, state: Dict[str, Any]) -> None:
        # Stored as JSON text so callers never share references with the backend
        try:
            self._data[namespace] = json.dumps(state)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(
                f"State for '{namespace}' is not JSON serializable",
                namespace=namespace,
                cause=e,
            ) from e

    def delete(self, namespace: str) -> bool:
        return self._data.pop(namespace, None) is not None


class JsonFileStorage(StorageBackend):
    """
    One ``<namespace>.json`` file per store under ``data_path``.

    Writes go to a temporary sibling file that then replaces the target, so
    a failed write leaves the previous state on disk.
    """

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path)

    def get_path(self, namespace: str) -> Path:
        """Get the file backing a namespace"""
        return self.data_path / f"{namespace}.json"

    def load(self, namespace: str) -> Optional[Dict[str, Any]]:
        path = self.get_path(namespace)
        if not path.exists():
            logger.debug(f"No saved state for '{namespace}' at {path}")
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StorageReadError(
                f"Saved state for '{namespace}' is not valid JSON",
                namespace=namespace,
                context={"path": str(path)},
                cause=e,
            ) from e
        except OSError as e:
            raise StorageReadError(
                f"Could not read state for '{namespace}'",
                namespace=namespace,
                context={"path": str(path)},
                cause=e,
            ) from e

    def save(self, namespace: str, state: Dict[str, Any]) -> None:
        path = self.get_path(namespace)
        tmp_path = path.with_suffix(".json.tmp")

        try:
            serialized = json.dumps(state, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(
                f"State for '{namespace}' is not JSON serializable",
                namespace=namespace,
                cause=e,
            ) from e

        try:
            self.data_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(serialized, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageWriteError(
                f"Could not write state for '{namespace}'",
                namespace=namespace,
                context={"path": str(path)},
                cause=e,
            ) from e

        logger.debug(f"Saved '{namespace}' to {path}")

    def delete(self, namespace: str) -> bool:
        path = self.get_path(namespace)
        if not path.exists():
            return False
        path.unlink()
        return True
