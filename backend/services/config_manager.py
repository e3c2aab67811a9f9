"""
Configuration Manager - Handle noise filter settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .logging_setup import LOG_LEVELS

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "DIFF_NOISE_FILTER_CONFIG_DIR"


def check_server(server: Any) -> dict[str, Any]:
    """Return a server section with a string host and an int port, or raise ValueError"""
    if not isinstance(server, dict):
        raise ValueError(f"expected an object, got {server!r}")
    host = server.get("host")
    if not isinstance(host, str) or not host:
        raise ValueError(f"invalid host: {host!r}")
    port = server.get("port")
    # bool is an int subclass
    if isinstance(port, bool) or not isinstance(port, (int, str)):
        raise ValueError(f"invalid port: {port!r}")
    try:
        port = int(port)
    except ValueError:
        raise ValueError(f"invalid port: {port!r}")
    if not 0 < port < 65536:
        raise ValueError(f"port out of range: {port}")
    return {**server, "port": port}


def check_logging(section: Any) -> dict[str, Any]:
    """Return a logging section with an upper-cased known level, or raise ValueError"""
    if not isinstance(section, dict):
        raise ValueError(f"expected an object, got {section!r}")
    level = str(section.get("level", "")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {section.get('level')!r}")
    return {**section, "level": level}


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # 1. environment variable, 2. ~/.diff_noise_filter, 3. temp dir
        config_dir = os.environ.get(CONFIG_DIR_ENV) or os.path.expanduser("~/.diff_noise_filter")

        config_path = Path(config_dir)
        try:
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning("Cannot write to %s: %s", config_dir, e)
            tmp_dir = Path(tempfile.gettempdir()) / "diff_noise_filter"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.warning("Using temporary config path: %s", self._config_file)

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton so the next get_instance() reloads from disk"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config %s: %s", self._config_file, e)
            return config

        if not isinstance(stored, dict):
            logger.warning("Ignoring config %s: top level is not an object", self._config_file)
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

        defaults = self._default_config()
        for key, check in (("server", check_server), ("logging", check_logging)):
            try:
                config[key] = check(config[key])
            except ValueError as e:
                logger.warning("Invalid %r section in %s, using defaults: %s", key, self._config_file, e)
                config[key] = defaults[key]
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "server": {"host": "127.0.0.1", "port": 8000},
            "logging": {"level": "INFO"},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)
