"""Abstract interface for key-value storage."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract key-value store. Implementations provide the backing storage.

    Keys are opaque text identifiers and values are opaque bytes. All methods
    are synchronous. Implementations are not thread-safe; callers sharing one
    instance between threads must serialize access themselves.
    """

    @abstractmethod
    def set_value(self, value: bytes, key: str) -> None:
        """Store *value* under *key*, replacing any existing value."""

    @abstractmethod
    def get_value(self, key: str) -> bytes:
        """Return the value stored under *key*.

        Raises ``NoValueFound`` if the key has no value.
        """

    @abstractmethod
    def delete_value(self, key: str) -> None:
        """Remove the value stored under *key*.

        Raises ``NoValueFound`` if the key has no value.
        """

    @abstractmethod
    def delete_all_values(self) -> None:
        """Remove every value owned by this store. Succeeds when already empty."""
