"""
Context Store - key-value state shared between operations

Stands in for the host's context-key service. Operations write values into
the store (via the ``store`` capability) and later calls read them back
through context-key parameter links (via the ``lookup`` capability).

The store is shared mutable state: the engine never caches values read from
it, so every resolution sees the current contents.

Usage:
    from transformer.core.context_store import InMemoryContextStore

    store = InMemoryContextStore()
    store.set("message", "Hello")
    store.get("message")      # "Hello"
    store.get("missing")      # None

    capabilities = Capabilities(lookup=store.get, store=store.set, ...)
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ContextListener:
    """Base class for context change handlers.

    Subclass and override ``on_changed`` to react to writes and deletions.
    For deletions ``new_value`` is None.
    """

    def on_changed(self, key: str, old_value: Any, new_value: Any) -> None:
        """Called after a key is written or deleted."""
        pass


class ContextStore(ABC):
    """Abstract key-value context store."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if the key existed."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether key is present."""

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""

    def snapshot(self) -> Dict[str, Any]:
        """Return a copy of the current contents."""
        return {key: self.get(key) for key in self.keys()}

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return len(self.keys())


class InMemoryContextStore(ContextStore):
    """Thread-safe in-memory context store with change listeners."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})
        self._listeners: List[ContextListener] = []
        self._lock = threading.RLock()

    def add_listener(self, listener: ContextListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ContextListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def get(self, key: str) -> Any:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            old_value = self._values.get(key)
            self._values[key] = value
            listeners = list(self._listeners)

        logger.debug(f"Context key '{key}' set")
        self._notify(listeners, key, old_value, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._values:
                return False
            old_value = self._values.pop(key)
            listeners = list(self._listeners)

        logger.debug(f"Context key '{key}' deleted")
        self._notify(listeners, key, old_value, None)
        return True

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._values.keys())

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        """Remove all keys, notifying listeners for each."""
        for key in self.keys():
            self.delete(key)

    def _notify(self, listeners: List[ContextListener], key: str, old_value: Any, new_value: Any) -> None:
        for listener in listeners:
            try:
                listener.on_changed(key, old_value, new_value)
            except Exception as e:
                logger.warning(f"Context listener {listener.__class__.__name__} failed for '{key}': {e}")
