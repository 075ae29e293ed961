"""Configuration loader for keyvalue-kit.

Loads settings from a YAML file with built-in defaults. Supports environment
variable overrides using the KEYVALUE_KIT_ prefix with double-underscore
nesting (e.g., KEYVALUE_KIT_KEYCHAIN__SERVICE=com.example.app).
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from keyvalue_kit.keychain.native import create_keychain_api
from keyvalue_kit.keychain.store import DEFAULT_SERVICE, KeychainKeyValueStore
from keyvalue_kit.memory import InMemoryKeyValueStore
from keyvalue_kit.store import KeyValueStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Config sub-models
# ---------------------------------------------------------------------------

class StoreConfig(BaseModel):
    backend: Literal["memory", "keychain"] = "keychain"


class KeychainConfig(BaseModel):
    service: str = DEFAULT_SERVICE
    security_path: str = "security"
    keychain_file: str | None = None


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    keychain: KeychainConfig = Field(default_factory=KeychainConfig)


# ---------------------------------------------------------------------------
# Deep merge helper
# ---------------------------------------------------------------------------

def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into *base*, returning a new dict."""
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

_ENV_PREFIX = "KEYVALUE_KIT_"


def _collect_env_overrides() -> dict[str, Any]:
    """Collect KEYVALUE_KIT_* env vars and build a nested dict.

    Double-underscore separates nesting levels.
    Example: KEYVALUE_KIT_STORE__BACKEND=memory
    becomes  {"store": {"backend": "memory"}}
    """
    overrides: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        parts = key[len(_ENV_PREFIX):].lower().split("__")
        if len(parts) < 2:
            # Flat variables (e.g. KEYVALUE_KIT_REAL_KEYCHAIN) are not settings
            continue
        current = overrides
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value
    return overrides


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

_BUILTIN_DEFAULTS_PATH = (
    pathlib.Path(__file__).resolve().parents[3] / "config" / "keyvalue_defaults.yaml"
)


def load_settings(config_path: pathlib.Path | None = None) -> Settings:
    """Load settings with layered precedence: defaults < file < env vars.

    Parameters
    ----------
    config_path:
        Path to a YAML config file. If ``None`` or the file does not exist,
        built-in defaults are used.
    """
    base: dict[str, Any] = {}

    path = config_path if config_path is not None else _BUILTIN_DEFAULTS_PATH
    if path.exists():
        with open(path) as fh:
            file_data = yaml.safe_load(fh)
        if isinstance(file_data, dict):
            base = _deep_merge(base, file_data)
    elif config_path is not None:
        logger.warning("Config file %s not found, using defaults", config_path)

    env_overrides = _collect_env_overrides()
    if env_overrides:
        base = _deep_merge(base, env_overrides)

    return Settings(**base)


# ---------------------------------------------------------------------------
# Store construction
# ---------------------------------------------------------------------------

def create_store(settings: Settings) -> KeyValueStore:
    """Create a new store for the configured backend."""
    if settings.store.backend == "memory":
        return InMemoryKeyValueStore()

    keychain_cfg = settings.keychain
    keychain = create_keychain_api(
        security_path=keychain_cfg.security_path,
        keychain_file=keychain_cfg.keychain_file,
    )
    logger.debug("Using keychain store for service %s", keychain_cfg.service)
    return KeychainKeyValueStore(keychain=keychain, service=keychain_cfg.service)
