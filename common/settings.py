"""Access to the site ``config.yml`` outside of a Flask application."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"
CONFIG_ENV = "MIXTURE_MASS_CONFIG"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    return Path(override).expanduser() if override else CONFIG_PATH


def load_yaml_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def plugin_settings(name: str) -> dict[str, Any]:
    """Return the ``plugins.<name>`` section of the active configuration."""

    plugins = load_yaml_config().get("plugins", {}) or {}
    return plugins.get(name, {}) or {}


__all__ = ["CONFIG_ENV", "CONFIG_PATH", "config_path", "load_yaml_config", "plugin_settings"]
