"""
Configuration settings for pagekit
"""

import copy
import os
import json
from typing import Dict, Any

from simple_logger import Slogger
from pagekit.errors import ConfigError


DEFAULT_CONFIG = {
    "pagination": {
        "page_size": 20,
        "debug_events": False,
    },
    "logging": {
        "path": "logs/pagekit.log",
        "level": "INFO",
    },
    "ui": {
        "theme": "dark",
        "list_key": "breed_logs",
        "fetch_delay": 0.3,
    }
}

CONFIG_FILE = os.path.expanduser("~/.pagekit_config.json")

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge `override` into `base` section by section."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _validate(config: Dict[str, Any]) -> Dict[str, Any]:
    page_size = config["pagination"].get("page_size")
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise ConfigError(f"pagination.page_size must be a positive integer, got {page_size!r}")

    level = str(config["logging"].get("level", "")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {sorted(_LOG_LEVELS)}, got {level!r}")
    config["logging"]["level"] = level
    return config


def load_config(config_file: str = CONFIG_FILE) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(config_file):
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            Slogger.warning(f"Error loading config file: {e}", {"path": config_file})
        else:
            if not isinstance(file_config, dict):
                raise ConfigError(f"{config_file} must contain a JSON object")
            _merge(config, file_config)

    # Override with environment variables
    if os.environ.get("PAGEKIT_PAGE_SIZE"):
        try:
            config["pagination"]["page_size"] = int(os.environ["PAGEKIT_PAGE_SIZE"])
        except ValueError:
            raise ConfigError(f"PAGEKIT_PAGE_SIZE must be an integer, got {os.environ['PAGEKIT_PAGE_SIZE']!r}")

    if os.environ.get("PAGEKIT_LOG_LEVEL"):
        config["logging"]["level"] = os.environ["PAGEKIT_LOG_LEVEL"]

    if os.environ.get("PAGEKIT_LIST_KEY"):
        config["ui"]["list_key"] = os.environ["PAGEKIT_LIST_KEY"]

    return _validate(config)


def save_config(config: Dict[str, Any], config_file: str = CONFIG_FILE) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        Slogger.error(f"Error saving config file: {e}", {"path": config_file})
        return False
