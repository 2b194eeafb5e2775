"""
Configuration of the text preprocessing pipeline.

The configuration is a JSON document (``config.json`` next to this module by
default). Lines may carry ``//`` comments.
"""
import copy
import json
import logging
import os
from typing import Any, Dict, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

DEFAULT_CONFIG = {
    "preprocessing": {
        "lowercase": True,
        "remove_diacritics": True,
        "stop_words": {"use": True, "language": "fr"},
        "nonsense_tokens": {"remove": True, "min_word_length": 1}
    },
    "stemming": {
        "use": True,
        "language": "fr"
    },
    "pipeline_order": [
        "tokenize", "lowercase", "remove_diacritics",
        "nonsense_tokens", "stemming", "stop_words"
    ]
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _strip_comments(content: str) -> str:
    # Remove line comments (everything after //) and blank lines
    filtered_lines = []
    for line in content.splitlines():
        line_without_comment = line.split("//")[0]
        if line_without_comment.strip():
            filtered_lines.append(line_without_comment)
    return "\n".join(filtered_lines)


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, handling comments.

    Values from the file are merged over DEFAULT_CONFIG, so a file only
    needs the keys it changes.

    Args:
        config_file: Path to configuration file (defaults to the packaged config.json)

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file exists but is not valid JSON
    """
    config_file = config_file or CONFIG_PATH
    if not os.path.exists(config_file):
        logger.warning("Configuration file %s not found, using default settings", config_file)
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_file, "r", encoding="utf-8") as f:
        content = f.read()

    try:
        loaded = json.loads(_strip_comments(content)) if content.strip() else {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse configuration file {config_file}: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a JSON object")

    logger.debug("Loaded configuration from %s", config_file)
    return _merge(DEFAULT_CONFIG, loaded)


def with_language(config: Dict[str, Any], language: str) -> Dict[str, Any]:
    """Return a copy of config with both stemming and stop words switched to language."""
    updated = copy.deepcopy(config)
    updated.setdefault("stemming", {})["language"] = language
    updated.setdefault("preprocessing", {}).setdefault("stop_words", {})["language"] = language
    return updated
