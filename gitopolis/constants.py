"""Shared constants for gitopolis."""

from dataclasses import dataclass
from typing import List


STATE_FILENAME = ".gitopolis.toml"
STATE_FILE_ENV = "GITOPOLIS_STATE_FILE"

# Top-level key of the persisted document
STATE_REPOS_KEY = "repos"

DEFAULT_REMOTE = "origin"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns for `list --long`
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Name", 24),
    ColumnDefinition("path", "Path", 40),
    ColumnDefinition("tags", "Tags", 24),
    ColumnDefinition("remotes", "Remotes", 0),
]


# Symbol constants
SYMBOL_OK = "✓"
SYMBOL_FAILED = "✗"
SYMBOL_REPO = "🏢"


# Rich styles
STYLE_NAME = "bold"
STYLE_TAG = "cyan"
STYLE_REMOTE = "green"
STYLE_ERROR = "red"
STYLE_WARNING = "yellow"
