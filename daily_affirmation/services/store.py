"""
Key-value store - abstract persistence layer.

The engine only ever talks to a ``KeyValueStore``; production uses the
JSON-file backend, tests use the in-memory one. Values are JSON-compatible
scalars (records arrive already encoded as strings).
"""

import json
import logging
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional

from ..config import Config

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Abstract base class for key-value stores.

    No transactions: every call stands alone. Implementations must not raise
    on reads of missing keys.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get the value for key, or default when absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass

    def __contains__(self, key: str) -> bool:
        return key in self.keys()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> List[str]:
        return list(self._data.keys())


class JSONFileStore(KeyValueStore):
    """
    Single JSON object file holding every key.

    Changes are immediately persisted to disk with an atomic write
    (temp file + rename). A missing or unreadable file starts empty.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the file store.

        Args:
            path: Path to the JSON file (defaults to Config.STORE_FILE)
        """
        self.path = Path(path or Config.STORE_FILE)
        self._lock = Lock()
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        """Load store contents from file."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not read store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object; starting empty", self.path)
            return {}
        return data

    def _save(self) -> None:
        """Write contents to disk. Failures are logged, never raised."""
        with self._lock:
            temp_file = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex[:8]}.tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(temp_file, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, indent=2, ensure_ascii=False)
                os.replace(temp_file, self.path)
            except OSError as e:
                logger.warning("Could not save store file %s: %s", self.path, e)
                if temp_file.exists():
                    try:
                        temp_file.unlink()
                    except OSError:
                        pass

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()

    def clear(self) -> None:
        self._data = {}
        self._save()

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def reload(self) -> None:
        """Reload contents from disk."""
        self._data = self._load()
