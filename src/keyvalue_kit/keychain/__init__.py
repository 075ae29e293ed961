"""macOS Keychain backend."""

from keyvalue_kit.keychain.native import KeychainAPI, SecurityCommandKeychain, create_keychain_api
from keyvalue_kit.keychain.store import DEFAULT_SERVICE, KeychainKeyValueStore

__all__ = [
    "DEFAULT_SERVICE",
    "KeychainAPI",
    "KeychainKeyValueStore",
    "SecurityCommandKeychain",
    "create_keychain_api",
]
