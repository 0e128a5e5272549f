"""Data model for gitopolis."""

from .url import RemoteUrl, derive_directory_name
from .repo import Remote, Repo, normalize_path, sort_tags
from .tag_filter import TagFilter
from .registry import Registry

__all__ = [
    "RemoteUrl",
    "derive_directory_name",
    "Remote",
    "Repo",
    "normalize_path",
    "sort_tags",
    "TagFilter",
    "Registry",
]
