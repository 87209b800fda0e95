"""
Configuration for Arbor.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/arbor/config.toml) if exists
3. Environment variables (ARBOR_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Config directory, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "arbor"
    return Path.home() / ".config" / "arbor"


@dataclass
class StoreConfig:
    """Where the registry document lives and how it is encoded."""
    path: str = ""  # empty = <config dir>/registry.json
    format: str = ""  # codec name; empty = detect from the file extension

    @property
    def resolved_path(self) -> Path:
        if self.path:
            return Path(self.path).expanduser()
        return get_config_dir() / "registry.json"


@dataclass
class RenderConfig:
    """Output formatting."""
    pretty: bool = True  # indent saved documents
    indent: str = "  "  # per-depth unit for the markup indent pass


@dataclass
class Config:
    """Root config with all settings."""
    store: StoreConfig = field(default_factory=StoreConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if isinstance(data.get("store"), dict):
        s = data["store"]
        if "path" in s:
            config.store.path = str(s["path"])
        if "format" in s:
            config.store.format = str(s["format"])

    if isinstance(data.get("render"), dict):
        r = data["render"]
        if "pretty" in r:
            config.render.pretty = bool(r["pretty"])
        if "indent" in r:
            config.render.indent = str(r["indent"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "ARBOR_STORE_PATH": ("store", "path", str),
        "ARBOR_STORE_FORMAT": ("store", "format", str),
        "ARBOR_PRETTY": ("render", "pretty", bool),
        "ARBOR_INDENT": ("render", "indent", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                # Bool needs special handling: "true", "1", "yes" -> True
                converted = val.lower() in ("true", "1", "yes") if conv is bool else conv(val)
                setattr(getattr(config, section), attr, converted)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config so the next get_config() reloads it."""
    global _config
    _config = None
