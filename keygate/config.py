"""YAML + environment variable configuration loading.

Config file: config/keygate.yaml (or --config on the command line)
Env var override prefix: KEYGATE_
Nesting convention: double underscore (e.g. KEYGATE_AUTH__REALM)

The loaded config is checked before it is returned: the realm ends up
quoted inside a WWW-Authenticate header and the port goes straight to
web.run_app, so bad values fail at startup with ConfigError.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("config/keygate.yaml")
ENV_PREFIX = "KEYGATE_"

_DEFAULTS: dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8081},
    "auth": {"realm": "keygate"},
    "logging": {"level": "INFO"},
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when a config value keygate reads is missing or unusable."""


def _merge_section(config: dict, section: str, values: Any, source: str) -> None:
    if not isinstance(values, dict):
        raise ConfigError(f"{source}: section {section!r} must be a mapping")
    config.setdefault(section, {}).update(values)


def _read_file(path: Path) -> dict[str, Any]:
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def _env_value(value: str) -> int | bool | str:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        return value


def _env_overrides() -> dict[str, dict[str, Any]]:
    """Collect KEYGATE_<SECTION>__<KEY> variables into {section: {key: value}}."""
    overrides: dict[str, dict[str, Any]] = {}
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, sep, key = name[len(ENV_PREFIX) :].lower().partition("__")
        if not sep or not key:
            raise ConfigError(f"{name}: expected {ENV_PREFIX}<SECTION>__<KEY>")
        overrides.setdefault(section, {})[key] = _env_value(value)
    return overrides


def _validate(config: dict[str, Any]) -> None:
    host = config["server"]["host"]
    if not isinstance(host, str) or not host:
        raise ConfigError(f"server.host must be a non-empty string, got {host!r}")

    port = config["server"]["port"]
    # bool is an int subclass
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ConfigError(f"server.port must be an integer in 1-65535, got {port!r}")

    realm = config["auth"]["realm"]
    if not isinstance(realm, str) or not realm.strip():
        raise ConfigError(f"auth.realm must be a non-empty string, got {realm!r}")
    if '"' in realm or "\\" in realm or any(ord(c) < 32 for c in realm):
        raise ConfigError(f"auth.realm cannot be quoted in a header: {realm!r}")

    level = config["logging"]["level"]
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")
    config["logging"]["level"] = level.upper()


def log_level(config: dict[str, Any]) -> int:
    return getattr(logging, config["logging"]["level"])


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with env var overrides.

    Precedence (highest wins): env vars > YAML file > defaults. An explicit
    config_path must exist; the default path is optional.
    """
    config = copy.deepcopy(_DEFAULTS)

    path = config_path or DEFAULT_CONFIG_PATH
    if config_path is not None or path.exists():
        for section, values in _read_file(path).items():
            _merge_section(config, section, values, str(path))

    for section, values in _env_overrides().items():
        _merge_section(config, section, values, "environment")

    _validate(config)
    return config
