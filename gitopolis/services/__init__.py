"""Services for gitopolis."""

from .git_service import GitBackend, GitService
from .display_service import DisplayService
from .storage_service import FileStorage, MemoryStorage, StateStore, Storage, parse, serialize

__all__ = [
    "DisplayService",
    "GitBackend",
    "GitService",
    "Storage",
    "FileStorage",
    "MemoryStorage",
    "StateStore",
    "parse",
    "serialize",
]
