"""Helpers for resolving bundled data file paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping


def resolve_data_path(
    plugin_settings: Mapping[str, object] | None,
    key: str,
    *,
    env_var: str | None,
    default: Path,
    base_dir: Path,
) -> Path:
    """Resolve a data file from the environment, plugin settings or a default.

    ``env_var`` wins over ``plugin_settings[key]``; relative paths are taken
    relative to ``base_dir``.
    """

    plugin_settings = plugin_settings or {}
    env_value = os.getenv(env_var) if env_var else None
    raw = env_value or plugin_settings.get(key) or default

    path = Path(str(raw)).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


__all__ = ["resolve_data_path"]
