"""Keychain-backed key-value store.

Each value is a generic-password item whose account attribute is the key.
All items written by one store share its service attribute, which is what
``delete_all_values`` scopes its bulk delete to.
"""

from __future__ import annotations

import logging
from typing import Any

from keyvalue_kit.errors import NoValueFound, UnhandledStoreError, ValueWriteFailed
from keyvalue_kit.keychain.native import (
    ATTR_ACCOUNT,
    ATTR_CLASS,
    ATTR_MATCH_LIMIT,
    ATTR_RETURN_DATA,
    ATTR_SERVICE,
    ATTR_VALUE_DATA,
    CLASS_GENERIC_PASSWORD,
    MATCH_LIMIT_ONE,
    STATUS_ITEM_NOT_FOUND,
    STATUS_SUCCESS,
    KeychainAPI,
    create_keychain_api,
)
from keyvalue_kit.store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "com.keyvalue-kit"


class KeychainKeyValueStore(KeyValueStore):
    """Stores values in the platform keychain.

    Parameters
    ----------
    keychain:
        The Keychain binding to talk to. Defaults to the platform binding
        from ``create_keychain_api()``; tests pass a fake.
    service:
        Service attribute namespacing this store's items.
    """

    def __init__(
        self,
        keychain: KeychainAPI | None = None,
        service: str = DEFAULT_SERVICE,
    ) -> None:
        self.keychain = keychain if keychain is not None else create_keychain_api()
        self.service = service

    def _query(self, **attributes: Any) -> dict[str, Any]:
        query: dict[str, Any] = {
            ATTR_CLASS: CLASS_GENERIC_PASSWORD,
            ATTR_SERVICE: self.service,
        }
        query.update(attributes)
        return query

    def set_value(self, value: bytes, key: str) -> None:
        # The add fails on a duplicate item, so clear any previous value first
        try:
            self.delete_value(key)
        except NoValueFound:
            pass

        status = self.keychain.item_add(
            self._query(**{ATTR_ACCOUNT: key, ATTR_VALUE_DATA: value})
        )
        if status != STATUS_SUCCESS:
            raise ValueWriteFailed(key, status)

    def get_value(self, key: str) -> bytes:
        status, data = self.keychain.item_copy_matching(
            self._query(**{
                ATTR_ACCOUNT: key,
                ATTR_RETURN_DATA: True,
                ATTR_MATCH_LIMIT: MATCH_LIMIT_ONE,
            })
        )
        if status != STATUS_SUCCESS or data is None:
            raise NoValueFound(key)
        return data

    def delete_value(self, key: str) -> None:
        status = self.keychain.item_delete(self._query(**{ATTR_ACCOUNT: key}))
        if status != STATUS_SUCCESS:
            # Every failure reads as absence to callers; log the unusual ones.
            if status != STATUS_ITEM_NOT_FOUND:
                logger.warning("Keychain delete for %r failed with status %d", key, status)
            raise NoValueFound(key)

    def delete_all_values(self) -> None:
        status = self.keychain.item_delete(self._query())
        # Clearing a store that is already empty succeeds, so not-found is fine
        if status not in (STATUS_SUCCESS, STATUS_ITEM_NOT_FOUND):
            raise UnhandledStoreError("Failed to delete keychain items", status=status)
        logger.debug("Deleted all keychain values for service %s", self.service)
