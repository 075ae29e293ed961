"""Shared test fixtures for keyvalue-kit tests."""

from __future__ import annotations

import pathlib
from typing import Any

import pytest

from keyvalue_kit.keychain.native import STATUS_SUCCESS, KeychainAPI

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]


class FakeKeychain(KeychainAPI):
    """Records Keychain calls and answers with scripted statuses.

    When a ``return_*`` queue is empty the call succeeds (with no data for
    copy-matching).
    """

    def __init__(self) -> None:
        self.calls_item_add: list[dict[str, Any]] = []
        self.calls_item_delete: list[dict[str, Any]] = []
        self.calls_item_copy_matching: list[dict[str, Any]] = []
        self.return_item_add: list[int] = []
        self.return_item_delete: list[int] = []
        self.return_item_copy_matching: list[tuple[int, bytes | None]] = []
        self.calls: list[str] = []

    def item_add(self, attributes: dict[str, Any]) -> int:
        self.calls.append("item_add")
        self.calls_item_add.append(attributes)
        return self.return_item_add.pop(0) if self.return_item_add else STATUS_SUCCESS

    def item_delete(self, query: dict[str, Any]) -> int:
        self.calls.append("item_delete")
        self.calls_item_delete.append(query)
        return self.return_item_delete.pop(0) if self.return_item_delete else STATUS_SUCCESS

    def item_copy_matching(self, query: dict[str, Any]) -> tuple[int, bytes | None]:
        self.calls.append("item_copy_matching")
        self.calls_item_copy_matching.append(query)
        if self.return_item_copy_matching:
            return self.return_item_copy_matching.pop(0)
        return STATUS_SUCCESS, None


@pytest.fixture
def repo_root() -> pathlib.Path:
    return REPO_ROOT


@pytest.fixture
def keychain() -> FakeKeychain:
    return FakeKeychain()
