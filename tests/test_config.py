"""Tests for Config"""
import pytest

from gitopolis.config import Config
from gitopolis.constants import STATE_FILENAME


class TestConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Test default configuration values."""
        config = Config()
        assert config.state_file == STATE_FILENAME == ".gitopolis.toml"
        assert config.default_remote == "origin"
        assert config.get("verbose") is False

    def test_empty_state_file_rejected(self):
        """Test an empty state file name is rejected."""
        with pytest.raises(ValueError, match="state_file"):
            Config(state_file=" ")

    def test_empty_default_remote_rejected(self):
        """Test an empty default remote name is rejected."""
        with pytest.raises(ValueError, match="default_remote"):
            Config(default_remote="")

    def test_from_dict_ignores_unknown_and_none(self):
        """Test from_dict skips unknown keys and None values."""
        config = Config.from_dict({"state_file": "x.toml", "unknown": 1, "default_remote": None})
        assert config.state_file == "x.toml"
        assert config.default_remote == "origin"

    def test_from_env(self, monkeypatch):
        """Test from_env reads the state file from the environment."""
        monkeypatch.setenv("GITOPOLIS_STATE_FILE", "env.toml")
        assert Config.from_env().state_file == "env.toml"
        assert Config.from_env(state_file="arg.toml").state_file == "arg.toml"

    def test_to_dict_round_trip(self):
        """Test to_dict output rebuilds an equal config."""
        config = Config(state_file="s.toml", verbose=True)
        assert Config.from_dict(config.to_dict()) == config
