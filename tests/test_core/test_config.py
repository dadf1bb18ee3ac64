"""
Tests for Configuration Module

Tests for showrunner/core/config.py
"""

import pytest
import json

from showrunner.core.config import (
    ShowrunnerConfig,
    CastingConfig,
    ResolutionConfig,
    load_config,
    save_config,
    get_default_config
)
from showrunner.core.exceptions import InvalidConfigError, ShowrunnerError


class TestShowrunnerConfig:
    """Tests for ShowrunnerConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = get_default_config()

        assert config.app_name == "Showrunner"
        assert config.screenplay.page_element_limit == 55
        assert config.screenplay.cue_lookahead == 2
        assert config.casting.batch_size == 6
        assert config.casting.identity_field == "characterName"
        assert config.resolution.min_merge_key_length == 0
        assert config.resolution.require_word_boundary is False

    def test_config_from_dict(self, sample_config):
        """Test creating config from dictionary."""
        config = ShowrunnerConfig.from_dict(sample_config)

        assert config.verbose_logging is True
        assert config.screenplay.page_element_limit == 40
        assert config.resolution.require_word_boundary is True
        assert config.casting.batch_size == 4
        assert config.casting.max_batch_tokens == 30000

    def test_config_to_dict(self):
        """Test converting config to dictionary."""
        config_dict = get_default_config().to_dict()

        assert config_dict["logs_dir"] == "logs"
        assert config_dict["casting"]["array_key"] == "cast"
        json.dumps(config_dict)

    def test_invalid_batch_size(self):
        """Non-positive integers are rejected."""
        with pytest.raises(InvalidConfigError):
            CastingConfig.from_dict({"batch_size": 0})

    def test_inverted_token_bounds(self):
        """The token floor may not exceed the ceiling."""
        with pytest.raises(InvalidConfigError):
            CastingConfig.from_dict({"min_batch_tokens": 40000, "max_batch_tokens": 30000})

    def test_negative_merge_key_length(self):
        with pytest.raises(InvalidConfigError):
            ResolutionConfig.from_dict({"min_merge_key_length": -1})

    def test_root_must_be_object(self):
        with pytest.raises(InvalidConfigError):
            ShowrunnerConfig.from_dict(["not", "a", "dict"])


class TestLoadSaveConfig:
    """Tests for config loading and saving."""

    def test_load_config_from_file(self, temp_dir, sample_config):
        """Test loading config from JSON file."""
        config_path = temp_dir / "test_config.json"

        with open(config_path, 'w') as f:
            json.dump(sample_config, f)

        config = load_config(str(config_path))

        assert config.casting.tokens_per_character == 1500

    def test_load_missing_file_returns_defaults(self, temp_dir):
        """A missing config file falls back to defaults."""
        config = load_config(temp_dir / "missing.json")

        assert config.casting.batch_size == 6

    def test_load_malformed_json(self, temp_dir):
        """Malformed JSON raises InvalidConfigError."""
        config_path = temp_dir / "broken.json"
        config_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(InvalidConfigError):
            load_config(config_path)

    def test_load_from_environment(self, temp_dir, sample_config, monkeypatch):
        """SHOWRUNNER_CONFIG points load_config at a file."""
        config_path = temp_dir / "env_config.json"
        config_path.write_text(json.dumps(sample_config), encoding="utf-8")
        monkeypatch.setenv("SHOWRUNNER_CONFIG", str(config_path))

        config = load_config()

        assert config.screenplay.max_cue_length == 30

    def test_save_and_reload(self, temp_dir, sample_config):
        """Test saving config then loading it back."""
        config = ShowrunnerConfig.from_dict(sample_config)
        saved = save_config(config, temp_dir / "nested" / "config.json")

        reloaded = load_config(saved)

        assert reloaded.to_dict() == config.to_dict()


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_details_in_str(self):
        error = ShowrunnerError("Something broke", {"path": "x.json"})

        assert str(error) == "Something broke | Details: {'path': 'x.json'}"

    def test_message_only(self):
        assert str(ShowrunnerError("Plain")) == "Plain"
