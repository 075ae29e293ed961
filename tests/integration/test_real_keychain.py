"""End-to-end tests against the real macOS login keychain.

Skipped unless running on macOS with KEYVALUE_KIT_REAL_KEYCHAIN=1, since
they touch the user's keychain (under a dedicated test service).
"""

from __future__ import annotations

import os
import sys

import pytest

from keyvalue_kit.errors import NoValueFound
from keyvalue_kit.keychain.store import KeychainKeyValueStore

pytestmark = [
    pytest.mark.real_keychain,
    pytest.mark.skipif(
        sys.platform != "darwin" or os.environ.get("KEYVALUE_KIT_REAL_KEYCHAIN") != "1",
        reason="requires macOS and KEYVALUE_KIT_REAL_KEYCHAIN=1",
    ),
]

SERVICE = "com.keyvalue-kit.integration-test"
KEY_1 = "test.exampleKey1"
KEY_2 = "test.exampleKey2"


@pytest.fixture
def store():
    store = KeychainKeyValueStore(service=SERVICE)
    yield store
    store.delete_all_values()


def test_real_keychain_storage_works(store: KeychainKeyValueStore) -> None:
    with pytest.raises(NoValueFound) as excinfo:
        store.get_value(KEY_1)
    assert excinfo.value.key == KEY_1

    store.set_value(b"some data", KEY_1)
    store.set_value(b"\x00\x01binary\xff", KEY_2)
    assert store.get_value(KEY_1) == b"some data"
    assert store.get_value(KEY_2) == b"\x00\x01binary\xff"

    store.set_value(b"changed data", KEY_1)
    assert store.get_value(KEY_1) == b"changed data"

    store.delete_value(KEY_1)
    with pytest.raises(NoValueFound):
        store.get_value(KEY_1)

    store.delete_all_values()
    with pytest.raises(NoValueFound):
        store.get_value(KEY_2)


def test_delete_all_on_empty_service_succeeds(store: KeychainKeyValueStore) -> None:
    store.delete_all_values()
    store.delete_all_values()
