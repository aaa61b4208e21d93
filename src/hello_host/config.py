# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Configuration loading for hello-host.

Config lives in a single YAML file. Lookup order:
1. Explicit path (--config)
2. $HELLO_HOST_CONFIG
3. ~/.hello-host/config.yaml
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "~/.hello-host/config.yaml"

DEFAULTS: Dict[str, Any] = {
    "log_level": "WARNING",
    "events_log": None,
    "include": [],
    "dump_memory": False,
    "trace_memory": False,
}


class ConfigError(Exception):
    """Raised when the config file is not a valid config document."""

    pass


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    """Pick the config file path following the lookup order."""
    if config_path:
        return Path(config_path).expanduser()
    env_path = os.environ.get("HELLO_HOST_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_PATH).expanduser()


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        config_path: Explicit config file. Must exist when given.

    Returns:
        Config dict. Unknown keys are preserved.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ConfigError: If the YAML is invalid or not a mapping.
    """
    path = resolve_config_path(config_path)
    explicit = bool(config_path or os.environ.get("HELLO_HOST_CONFIG"))

    config = dict(DEFAULTS)
    config["include"] = list(DEFAULTS["include"])

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        return config

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}")

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a YAML mapping")

    include = data.get("include")
    if include is not None and not isinstance(include, list):
        raise ConfigError(f"include must be a list of paths, got: {include!r}")

    config.update(data)
    if config["include"] is None:
        config["include"] = []
    return config
