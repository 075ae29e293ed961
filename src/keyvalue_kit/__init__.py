"""keyvalue-kit -- key-value storage with in-memory and Keychain backends."""

from pathlib import Path as _Path

from keyvalue_kit.errors import (
    KeychainUnavailable,
    KeyValueStoreError,
    NoValueFound,
    UnhandledStoreError,
    ValueWriteFailed,
)
from keyvalue_kit.keychain.store import KeychainKeyValueStore
from keyvalue_kit.memory import InMemoryKeyValueStore
from keyvalue_kit.store import KeyValueStore


def _read_version() -> str:
    """Read version from the repo-level VERSION file (single source of truth)."""
    for parent in _Path(__file__).resolve().parents:
        candidate = parent / "VERSION"
        if candidate.is_file():
            return candidate.read_text().strip()
    return "0.0.0"


__version__ = _read_version()

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "KeyValueStoreError",
    "KeychainKeyValueStore",
    "KeychainUnavailable",
    "NoValueFound",
    "UnhandledStoreError",
    "ValueWriteFailed",
]
