"""
config.py

Configuration management for PortProbe.
Loads settings from config.yaml and provides access throughout the application.
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULTS: Dict[str, Any] = {
    "probe": {
        "timeout_ms": 2000,
        "liveness_check": True,
        "max_workers": 16,
    },
    "logging": {
        "level": "WARNING",
        "console_output": True,
        "file_output": False,
        "max_log_size_mb": 10,
        "backup_count": 5,
    },
    "paths": {
        "logs_dir": "logs",
        "reports_dir": "reports",
    },
    "reports": {
        "format": "table",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config_path() -> Optional[Path]:
    """
    Locate config.yaml.

    PORTPROBE_CONFIG wins, then the working directory, then the project root.
    """
    env_path = os.environ.get("PORTPROBE_CONFIG")
    if env_path:
        return Path(env_path)

    for candidate in (Path("config.yaml"), Path(__file__).resolve().parent.parent / "config.yaml"):
        if candidate.exists():
            return candidate

    return None


def load_config_file(config_path: Optional[Path]) -> Dict[str, Any]:
    """Read a YAML config file and merge it over the built-in defaults."""
    if config_path is None or not config_path.exists():
        return copy.deepcopy(DEFAULTS)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(loaded, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level")

    return _merge(DEFAULTS, loaded)


class ConfigManager:
    """
    Singleton configuration manager that loads and provides access to settings.
    """
    
    _instance = None
    _config: Dict[str, Any] = {}
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance
    
    def _load_config(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from config.yaml, falling back to defaults."""
        self._config = load_config_file(config_path or resolve_config_path())
    
    def reload(self, config_path: Optional[Path] = None) -> None:
        """Re-read configuration, optionally from an explicit file."""
        self._load_config(config_path)
    
    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.
        
        Example:
            config.get("probe.timeout_ms")
            config.get("paths.reports_dir")
        """
        keys = key_path.split(".")
        value = self._config
        
        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default
    
    def get_all(self) -> Dict[str, Any]:
        """Return the entire configuration dictionary."""
        return copy.deepcopy(self._config)


# shared instance
config = ConfigManager()
