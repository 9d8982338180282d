#!/usr/bin/env python3
"""
Settings
========
Reads passg/configs/app.yaml (or the file named by $PASSG_CONFIG) once per
process and serves values by dotted path.

Usage:
    from passg.settings import get_setting, get_limits

    get_setting("password.length")          # 12
    get_limits("password", "universal")     # (8, 18)
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"

CONFIG_ENV_VAR = "PASSG_CONFIG"


def config_path() -> Path:
    """The active settings file: $PASSG_CONFIG if set, else the bundled app.yaml."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return resolve_path(override, Path.cwd())
    return APP_CONFIG_PATH


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    path = config_path()
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"App config must be a mapping: {path}")
    return data or {}


def reload_settings() -> dict:
    """Drop the cached settings and read the file again."""
    load_app_config.cache_clear()
    return load_app_config()


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def get_limits(section: str, mode: Optional[str] = None) -> Optional[Tuple[int, int]]:
    """
    (min, max) bounds for a generator's length or word count, or None when
    the section has no complete limits block.
    """
    key = f"{section}.limits.{mode}" if mode else f"{section}.limits"
    limits = get_setting(key) or {}
    low, high = limits.get("min"), limits.get("max")
    if low is None or high is None:
        return None
    return int(low), int(high)


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Expand ~ and resolve relative paths against `base` (project root by default)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or PROJECT_ROOT) / path).resolve()


__all__ = [
    "load_app_config",
    "reload_settings",
    "get_setting",
    "get_limits",
    "resolve_path",
    "config_path",
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]
