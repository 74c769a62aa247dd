"""TOML configuration loader.

Reads config/default.toml and then config/{MAIAR_ENV}.toml, merging the
environment file over the defaults table by table.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

# How far up from the working directory to look for config/
_SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Locate the configuration directory.

    MAIAR_CONFIG_DIR wins when set and must exist. Otherwise the closest
    config/ directory at or above the working directory is used.
    """
    explicit = os.environ.get("MAIAR_CONFIG_DIR")
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    cwd = Path.cwd()
    for candidate in [cwd, *cwd.parents][:_SEARCH_DEPTH]:
        if (candidate / "config").is_dir():
            return candidate / "config"
    return Path("config")


def get_environment() -> str:
    """Current environment name from MAIAR_ENV, 'development' by default."""
    return os.environ.get("MAIAR_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return base with override applied; nested tables merge, anything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Load and merge the default and environment TOML files.

    Either file may be missing; with neither present the result is empty
    and the Settings model defaults apply.
    """
    config_dir = get_config_dir()
    config: dict[str, Any] = {}
    for filename in ("default.toml", f"{get_environment()}.toml"):
        path = config_dir / filename
        if path.exists():
            config = deep_merge(config, load_toml(path))
    return config
