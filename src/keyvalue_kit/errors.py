"""Exceptions raised by key-value stores."""

from __future__ import annotations


class KeyValueStoreError(Exception):
    """Base class for all key-value store failures."""


class NoValueFound(KeyValueStoreError):
    """No value is associated with the requested key."""

    def __init__(self, key: str, message: str | None = None) -> None:
        super().__init__(message or f"No value found for key {key!r}")
        self.key = key


class ValueWriteFailed(NoValueFound):
    """The backing store rejected a write.

    Subclasses ``NoValueFound`` because Keychain write failures have always
    surfaced as that error; existing ``except NoValueFound`` handlers keep
    catching them.
    """

    def __init__(self, key: str, status: int | None = None) -> None:
        super().__init__(key, f"Failed to write value for key {key!r} (status {status})")
        self.status = status


class UnhandledStoreError(KeyValueStoreError):
    """A backend failure with no more specific error kind."""

    def __init__(
        self,
        message: str = "Unhandled key-value store error",
        status: int | None = None,
    ) -> None:
        if status is not None:
            message = f"{message} (status {status})"
        super().__init__(message)
        self.status = status


class KeychainUnavailable(UnhandledStoreError):
    """The platform keychain cannot be reached from this process."""
