#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test configuration loading
"""

import pytest

from TextSearchEngine.config import CONFIG_PATH, DEFAULT_CONFIG, load_config, with_language
from TextSearchEngine.errors import ConfigError


def test_packaged_config_matches_defaults():
    assert load_config(CONFIG_PATH) == DEFAULT_CONFIG


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.json"))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_partial_file_with_comments_is_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        '{\n'
        '    // English documents\n'
        '    "stemming": {"language": "en"},\n'
        '    "preprocessing": {"stop_words": {"language": "en"}}  // same language\n'
        '}\n',
        encoding="utf-8",
    )
    config = load_config(str(path))

    assert config["stemming"] == {"use": True, "language": "en"}
    assert config["preprocessing"]["stop_words"] == {"use": True, "language": "en"}
    assert config["preprocessing"]["lowercase"] is True
    assert config["pipeline_order"] == DEFAULT_CONFIG["pipeline_order"]


def test_invalid_file_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_with_language_copies():
    config = with_language(DEFAULT_CONFIG, "en")

    assert config["stemming"]["language"] == "en"
    assert config["preprocessing"]["stop_words"]["language"] == "en"
    assert DEFAULT_CONFIG["stemming"]["language"] == "fr"
