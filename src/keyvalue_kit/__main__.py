"""keyvalue-kit -- command-line access to a configured store.

Usage::

    python -m keyvalue_kit [--config PATH] [--backend {memory,keychain}] get KEY
    python -m keyvalue_kit set KEY VALUE
    python -m keyvalue_kit delete KEY
    python -m keyvalue_kit clear

Exit status is 0 on success, 1 when the key has no value and 2 for any
other store failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from keyvalue_kit.config import Settings, create_store, load_settings
from keyvalue_kit.errors import KeyValueStoreError, NoValueFound, ValueWriteFailed
from keyvalue_kit.store import KeyValueStore

logger = logging.getLogger("keyvalue_kit")

EXIT_NO_VALUE = 1
EXIT_STORE_ERROR = 2


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv:
        Argument list.  Defaults to ``sys.argv[1:]`` when ``None``.
    """
    parser = argparse.ArgumentParser(
        prog="keyvalue_kit",
        description="Read and write values in a keyvalue-kit store",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--backend",
        choices=["memory", "keychain"],
        default=None,
        help="Override the configured store backend",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    get_cmd = commands.add_parser("get", help="Print the value stored under KEY")
    get_cmd.add_argument("key")
    set_cmd = commands.add_parser("set", help="Store VALUE (UTF-8 text) under KEY")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    delete_cmd = commands.add_parser("delete", help="Delete the value stored under KEY")
    delete_cmd.add_argument("key")
    commands.add_parser("clear", help="Delete every value in the store")

    return parser.parse_args(argv)


def load_config(config_path: str | None, backend: str | None = None) -> Settings:
    """Load settings, applying the ``--backend`` override if given."""
    settings = load_settings(config_path=Path(config_path) if config_path else None)
    if backend is not None:
        settings.store.backend = backend  # type: ignore[assignment]
    return settings


def run_command(store: KeyValueStore, args: argparse.Namespace) -> None:
    """Execute the parsed subcommand against *store*."""
    if args.command == "get":
        sys.stdout.buffer.write(store.get_value(args.key))
        sys.stdout.buffer.flush()
    elif args.command == "set":
        store.set_value(args.value.encode("utf-8"), args.key)
    elif args.command == "delete":
        store.delete_value(args.key)
    elif args.command == "clear":
        store.delete_all_values()


# ---------------------------------------------------------------------------
# Script entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args and run one store command. Returns the exit status."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        store = create_store(load_config(args.config, args.backend))
        run_command(store, args)
    except ValueWriteFailed as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_STORE_ERROR
    except NoValueFound as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_NO_VALUE
    except KeyValueStoreError as exc:
        logger.debug("Store command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_STORE_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
