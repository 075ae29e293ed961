"""Test doubles for code that depends on a ``KeyValueStore``.

``MockKeyValueStore`` records every call and answers from per-operation
queues of scripted results::

    store = MockKeyValueStore()
    store.return_get_value = [b"token", NoValueFound("session")]

    store.get_value("session")   # -> b"token"
    store.get_value("session")   # raises NoValueFound
    store.get_value("session")   # raises NoMockReturnValue
    assert store.calls_get_value == ["session", "session", "session"]

``StubKeyValueStore`` accepts everything and stores nothing.
"""

from __future__ import annotations

from typing import Any

from keyvalue_kit.errors import KeyValueStoreError
from keyvalue_kit.store import KeyValueStore


class NoMockReturnValue(KeyValueStoreError):
    """A mock operation was called with no scripted result left."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"No scripted result left for {operation}()")
        self.operation = operation


def _next_result(queue: list[Any], operation: str) -> Any:
    """Pop the oldest scripted result, raising it if it is an exception."""
    if not queue:
        raise NoMockReturnValue(operation)
    result = queue.pop(0)
    if isinstance(result, BaseException):
        raise result
    if isinstance(result, type) and issubclass(result, BaseException):
        raise TypeError(
            f"Scripted {operation}() result is the class {result.__name__}; "
            "script an instance instead"
        )
    return result


class MockKeyValueStore(KeyValueStore):
    """Call-recording store with scripted results.

    Each ``return_*`` list is consumed first-in first-out, one entry per call
    of its own operation. An entry that is an exception instance is raised;
    anything else is returned (use ``None`` for the write operations).
    Exception classes are rejected with ``TypeError``: script
    ``NoValueFound("key")``, not ``NoValueFound``.
    """

    def __init__(self) -> None:
        self.calls_set_value: list[tuple[bytes, str]] = []
        self.calls_get_value: list[str] = []
        self.calls_delete_value: list[str] = []
        self.calls_delete_all_values: list[None] = []

        self.return_set_value: list[BaseException | None] = []
        self.return_get_value: list[bytes | BaseException] = []
        self.return_delete_value: list[BaseException | None] = []
        self.return_delete_all_values: list[BaseException | None] = []

    def set_value(self, value: bytes, key: str) -> None:
        self.calls_set_value.append((value, key))
        _next_result(self.return_set_value, "set_value")

    def get_value(self, key: str) -> bytes:
        self.calls_get_value.append(key)
        return _next_result(self.return_get_value, "get_value")

    def delete_value(self, key: str) -> None:
        self.calls_delete_value.append(key)
        _next_result(self.return_delete_value, "delete_value")

    def delete_all_values(self) -> None:
        self.calls_delete_all_values.append(None)
        _next_result(self.return_delete_all_values, "delete_all_values")


class StubKeyValueStore(KeyValueStore):
    """Store that succeeds at everything and remembers nothing."""

    def set_value(self, value: bytes, key: str) -> None:
        pass

    def get_value(self, key: str) -> bytes:
        return b""

    def delete_value(self, key: str) -> None:
        pass

    def delete_all_values(self) -> None:
        pass
