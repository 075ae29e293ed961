"""Low-level access to the macOS Keychain.

``KeychainAPI`` is the narrow surface ``KeychainKeyValueStore`` talks to:
add an item, delete matching items, copy one matching item. Queries are
plain dicts keyed by the Security framework's attribute names, and every
call answers with a status code rather than raising.

``SecurityCommandKeychain`` implements it on top of the ``security`` CLI
tool that ships with macOS.
"""

from __future__ import annotations

import base64
import binascii
import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Any

from keyvalue_kit.errors import KeychainUnavailable

logger = logging.getLogger(__name__)

# Attribute names, matching the Security framework's kSec* key values
ATTR_CLASS = "class"
ATTR_SERVICE = "svce"
ATTR_ACCOUNT = "acct"
ATTR_VALUE_DATA = "v_Data"
ATTR_RETURN_DATA = "r_Data"
ATTR_MATCH_LIMIT = "m_Limit"

CLASS_GENERIC_PASSWORD = "genp"
MATCH_LIMIT_ONE = "m_LimitOne"

# Exit codes reported by the security CLI
STATUS_SUCCESS = 0
STATUS_ITEM_NOT_FOUND = 44
STATUS_DUPLICATE_ITEM = 45
# Usage error; also reported for arguments the OS cannot pass (embedded NUL)
STATUS_BAD_ARGUMENT = 2

Query = dict[str, Any]


class KeychainAPI(ABC):
    """The three Keychain primitives used by ``KeychainKeyValueStore``."""

    @abstractmethod
    def item_add(self, attributes: Query) -> int:
        """Add a new item described by *attributes*. Returns a status code."""

    @abstractmethod
    def item_delete(self, query: Query) -> int:
        """Delete every item matching *query*. Returns a status code."""

    @abstractmethod
    def item_copy_matching(self, query: Query) -> tuple[int, bytes | None]:
        """Find the item matching *query*.

        Returns ``(status, data)`` where *data* is the item's value when the
        query asks for it and the item exists, otherwise ``None``.
        """


class SecurityCommandKeychain(KeychainAPI):
    """Keychain access through the macOS ``security`` command-line tool.

    Values are stored base64-encoded, since the tool only accepts text
    passwords on the command line. Only generic-password items are
    supported.

    Parameters
    ----------
    security_path:
        Path to (or name of) the ``security`` executable.
    keychain_file:
        Optional keychain file to operate on. Defaults to the user's
        keychain search list.
    """

    def __init__(
        self,
        security_path: str = "security",
        keychain_file: str | None = None,
    ) -> None:
        self._security_path = security_path
        self._keychain_file = keychain_file

    def _run(self, *args: str) -> subprocess.CompletedProcess[bytes]:
        """Run a ``security`` subcommand against the configured keychain."""
        command = [self._security_path, *args]
        if self._keychain_file:
            command.append(self._keychain_file)
        try:
            return subprocess.run(command, capture_output=True, check=False)
        except FileNotFoundError as exc:
            raise KeychainUnavailable(
                f"Keychain tool not found: {self._security_path}"
            ) from exc
        except OSError as exc:
            raise KeychainUnavailable(
                f"Cannot run keychain tool {self._security_path}: {exc}"
            ) from exc
        except ValueError as exc:
            logger.debug("Rejected %s arguments: %s", args[0], exc)
            return subprocess.CompletedProcess(
                command, STATUS_BAD_ARGUMENT, b"", str(exc).encode("utf-8")
            )

    @staticmethod
    def _item_args(query: Query) -> list[str]:
        """Translate the scoping attributes of *query* into CLI flags."""
        item_class = query.get(ATTR_CLASS)
        if item_class != CLASS_GENERIC_PASSWORD:
            raise ValueError(f"Unsupported keychain item class: {item_class!r}")
        args: list[str] = []
        if ATTR_SERVICE in query:
            args += ["-s", query[ATTR_SERVICE]]
        if ATTR_ACCOUNT in query:
            args += ["-a", query[ATTR_ACCOUNT]]
        return args

    def item_add(self, attributes: Query) -> int:
        value: bytes = attributes.get(ATTR_VALUE_DATA, b"")
        encoded = base64.b64encode(value).decode("ascii")
        result = self._run(
            "add-generic-password",
            *self._item_args(attributes),
            "-w", encoded,
        )
        if result.returncode != STATUS_SUCCESS:
            logger.debug(
                "add-generic-password failed (%d): %s",
                result.returncode,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
        return result.returncode

    def item_delete(self, query: Query) -> int:
        args = self._item_args(query)
        if ATTR_ACCOUNT in query:
            return self._run("delete-generic-password", *args).returncode

        # The CLI removes a single item per call, so an account-less query
        # is drained one item at a time.
        if ATTR_SERVICE not in query:
            raise ValueError("Refusing to delete generic passwords without a service")
        deleted = 0
        while True:
            returncode = self._run("delete-generic-password", *args).returncode
            if returncode != STATUS_SUCCESS:
                break
            deleted += 1
        logger.debug("Deleted %d keychain items for %s", deleted, query[ATTR_SERVICE])
        if returncode == STATUS_ITEM_NOT_FOUND and deleted:
            return STATUS_SUCCESS
        return returncode

    def item_copy_matching(self, query: Query) -> tuple[int, bytes | None]:
        if query.get(ATTR_MATCH_LIMIT, MATCH_LIMIT_ONE) != MATCH_LIMIT_ONE:
            raise ValueError("Only single-item matches are supported")
        result = self._run("find-generic-password", *self._item_args(query), "-w")
        if result.returncode != STATUS_SUCCESS:
            return result.returncode, None
        if not query.get(ATTR_RETURN_DATA):
            return STATUS_SUCCESS, None

        # -w prints the password followed by a newline
        try:
            data = base64.b64decode(result.stdout.strip(), validate=True)
        except binascii.Error:
            logger.warning(
                "Keychain item %r holds a value that is not base64; ignoring it",
                query.get(ATTR_ACCOUNT),
            )
            return STATUS_SUCCESS, None
        return STATUS_SUCCESS, data


def create_keychain_api(
    security_path: str = "security",
    keychain_file: str | None = None,
) -> KeychainAPI:
    """Create the Keychain binding for the current platform.

    Raises ``KeychainUnavailable`` anywhere but macOS.
    """
    if sys.platform != "darwin":
        raise KeychainUnavailable(f"No keychain backend for platform {sys.platform!r}")
    return SecurityCommandKeychain(
        security_path=security_path,
        keychain_file=keychain_file,
    )
