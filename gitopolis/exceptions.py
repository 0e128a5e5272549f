"""Custom exceptions for gitopolis"""

from typing import Optional


class GitopolisError(Exception):
    """Base exception for all gitopolis errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class GitError(GitopolisError):
    """Exception raised when a git backend call fails."""

    @classmethod
    def cannot_open(cls, path, reason: Optional[str] = None) -> "GitError":
        message = f"Couldn't open git repo '{path}'"
        if reason:
            message += f": {reason}"
        return cls(message)


class RemoteError(GitopolisError):
    """Exception raised for a specific named remote."""

    def __init__(self, message: str, remote: str):
        self.remote = remote
        super().__init__(f"Error with remote '{remote}': {message}")

    @classmethod
    def not_found(cls, remote: str) -> "RemoteError":
        return cls("Not found.", remote)


class StateError(GitopolisError):
    """Exception raised for registry-level inconsistencies."""

    @classmethod
    def repo_not_found(cls, repo_id) -> "StateError":
        return cls(f"Repo '{repo_id}' not found.")

    @classmethod
    def invalid_url(cls, url: str, reason: Optional[str] = None) -> "StateError":
        if reason:
            return cls(f"Invalid Git URL {url}: {reason}.")
        return cls(f"Invalid Git URL {url}.")

    @classmethod
    def unnameable_url(cls, url: str) -> "StateError":
        return cls(f"Could not extract repository name from URL: {url}")


class IoError(GitopolisError):
    """Exception raised when a filesystem operation fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
