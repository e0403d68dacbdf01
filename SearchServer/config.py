"""
Configuration loading for the search server.

Settings live in ``config.json`` next to this module. Missing sections or
keys fall back to the defaults below.
"""
import copy
import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

MAX_RESULT_DOCUMENT_COUNT = 5
RELEVANCE_EPSILON = 1e-6
NO_RESULT_WINDOW_SIZE = 1440
PAGE_SIZE = 2

DEFAULT_CONFIG = {
    "search": {
        "max_result_document_count": MAX_RESULT_DOCUMENT_COUNT,
        "relevance_epsilon": RELEVANCE_EPSILON,
    },
    "request_queue": {
        "window_size": NO_RESULT_WINDOW_SIZE,
    },
    "paginator": {
        "page_size": PAGE_SIZE,
    },
}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file (defaults to the bundled config.json)

    Returns:
        Configuration dictionary with defaults filled in
    """
    config_path = config_path or CONFIG_PATH

    if not os.path.exists(config_path):
        logger.info("No config file at %s, using default settings", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load config: %s, using default settings", e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def get_setting(config: Dict[str, Any], section: str, key: str):
    """Read ``config[section][key]``, falling back to the built-in default."""
    return config.get(section, {}).get(key, DEFAULT_CONFIG[section][key])
