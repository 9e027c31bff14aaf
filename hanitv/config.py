"""Configuration management for hanitv."""

import json
import logging
import os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Literal, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hanime.tv"
DEFAULT_API_URL = "https://hanime.tv/api/v8"


def get_config_dir() -> Path:
    """Get config directory path."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home()))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "hanitv"


@dataclass
class Config:
    """hanitv configuration."""
    base_url: str = DEFAULT_BASE_URL
    api_url: str = DEFAULT_API_URL
    # None leaves httpx's own default timeout in place
    timeout: Optional[float] = None
    output: Literal["table", "json"] = "table"


_config: Config | None = None


def _apply_env(config: Config) -> Config:
    """Return a copy of config with HANITV_* environment overrides applied."""
    config = replace(config)

    base_url = os.environ.get("HANITV_BASE_URL")
    if base_url:
        config.base_url = base_url.rstrip("/")

    api_url = os.environ.get("HANITV_API_URL")
    if api_url:
        config.api_url = api_url.rstrip("/")

    timeout = os.environ.get("HANITV_TIMEOUT")
    if timeout:
        try:
            config.timeout = float(timeout)
        except ValueError:
            logger.warning("Ignoring HANITV_TIMEOUT=%r: not a number", timeout)

    return config


def load_file_config() -> Config:
    """Load configuration from file, without environment overrides."""
    global _config
    if _config is not None:
        return _config

    config_file = get_config_dir() / "config.json"

    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            _config = Config(**{k: v for k, v in data.items() if hasattr(Config, k)})
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s", config_file, e)
            _config = Config()
    else:
        _config = Config()

    return _config


def load_config() -> Config:
    """Load the effective configuration: file values plus environment overrides."""
    return _apply_env(load_file_config())


def save_config(config: Config) -> None:
    """Save configuration to file."""
    global _config
    _config = config

    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_file = config_dir / "config.json"

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2)


def get_config() -> Config:
    """Get current configuration."""
    return load_config()


def reset_config() -> None:
    """Drop the cached configuration so the next load re-reads it."""
    global _config
    _config = None
