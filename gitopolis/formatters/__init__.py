"""Formatting utilities for gitopolis.

- repo: repo name, tag and remote formatting
- result: bulk operation summaries
"""

from .repo import format_tags, format_remote, format_remotes, format_repo_name
from .result import format_bulk_summary, format_bulk_error

__all__ = [
    "format_tags",
    "format_remote",
    "format_remotes",
    "format_repo_name",
    "format_bulk_summary",
    "format_bulk_error",
]
