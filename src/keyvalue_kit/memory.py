"""Volatile dictionary-backed key-value store.

Useful as a cache or as a real (non-mock) store in tests. Nothing survives
the process.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from keyvalue_kit.errors import NoValueFound
from keyvalue_kit.store import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """Stores values in a plain dict owned by the instance.

    Parameters
    ----------
    store:
        Optional initial contents. The mapping is copied, so later changes
        on either side are not shared.
    """

    def __init__(self, store: Mapping[str, bytes] | None = None) -> None:
        self._store: dict[str, bytes] = dict(store) if store else {}

    @property
    def store(self) -> dict[str, bytes]:
        """Snapshot of the current contents."""
        return dict(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def set_value(self, value: bytes, key: str) -> None:
        self._store[key] = value

    def get_value(self, key: str) -> bytes:
        try:
            return self._store[key]
        except KeyError:
            raise NoValueFound(key) from None

    def delete_value(self, key: str) -> None:
        if key not in self._store:
            raise NoValueFound(key)
        del self._store[key]

    def delete_all_values(self) -> None:
        logger.debug("Clearing %d in-memory values", len(self._store))
        self._store.clear()
