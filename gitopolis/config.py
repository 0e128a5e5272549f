"""Configuration handling for gitopolis"""

import os
from dataclasses import dataclass

from gitopolis.constants import DEFAULT_REMOTE, STATE_FILE_ENV, STATE_FILENAME


@dataclass
class Config:
    """Configuration for gitopolis with validation."""

    # Persisted registry location
    state_file: str = STATE_FILENAME

    # Remote preferred when cloning
    default_remote: str = DEFAULT_REMOTE

    # Output modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_state_file()
        self._validate_default_remote()

    def _validate_state_file(self):
        """Validate state_file is not empty."""
        if not self.state_file or not str(self.state_file).strip():
            raise ValueError("state_file cannot be empty")
        self.state_file = str(self.state_file).strip()

    def _validate_default_remote(self):
        """Validate default_remote is not empty."""
        if not self.default_remote or not self.default_remote.strip():
            raise ValueError("default_remote cannot be empty")
        self.default_remote = self.default_remote.strip()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "state_file": self.state_file,
            "default_remote": self.default_remote,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {"state_file", "default_remote", "verbose", "debug"}

        filtered = {k: v for k, v in config_dict.items() if k in known_fields and v is not None}
        return cls(**filtered)

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Create Config from the environment, with explicit values taking precedence."""
        values = {}
        env_state_file = os.environ.get(STATE_FILE_ENV)
        if env_state_file:
            values["state_file"] = env_state_file
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)
