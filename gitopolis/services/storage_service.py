"""Persistence of the registry as a TOML document"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
import tomllib
from typing import Optional, Union

import tomli_w

from gitopolis.constants import STATE_FILENAME, STATE_REPOS_KEY
from gitopolis.exceptions import GitopolisError, StateError
from gitopolis.logging_config import get_logger
from gitopolis.models.registry import Registry
from gitopolis.models.repo import Repo

# Import fcntl for POSIX file locking (Unix/Linux/macOS)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

logger = get_logger(__name__)


class Storage(ABC):
    """Where the serialized registry lives."""

    @abstractmethod
    def exists(self) -> bool:
        """True if a document has been saved."""

    @abstractmethod
    def read(self) -> str:
        """Return the raw document."""

    @abstractmethod
    def save(self, document: str) -> None:
        """Replace the raw document."""


class FileStorage(Storage):
    """Stores the registry document in a file."""

    def __init__(self, path: Union[str, Path] = STATE_FILENAME):
        self.path = Path(path)

    @contextmanager
    def _acquire_lock(self, file_handle, operation: str = "read"):
        """Acquire a shared (read) or exclusive (write) lock on an open file."""
        if not HAS_FCNTL:
            logger.debug("File locking not available on this platform")
            yield
            return

        lock_type = fcntl.LOCK_EX if operation == "write" else fcntl.LOCK_SH
        fcntl.flock(file_handle.fileno(), lock_type)
        try:
            yield
        finally:
            fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            with self._acquire_lock(f, operation="read"):
                return f.read()

    def save(self, document: str) -> None:
        """Write atomically: temp file, then rename over the target."""
        temp_file = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                with self._acquire_lock(f, operation="write"):
                    f.write(document)
                    f.flush()
            temp_file.replace(self.path)
            logger.debug(f"Saved state to {self.path}")
        finally:
            if temp_file.exists():
                temp_file.unlink()


class MemoryStorage(Storage):
    """Keeps the registry document in memory."""

    def __init__(self, document: Optional[str] = None):
        self.document = document

    def exists(self) -> bool:
        return self.document is not None

    def read(self) -> str:
        if self.document is None:
            raise StateError("No state has been saved")
        return self.document

    def save(self, document: str) -> None:
        self.document = document


def serialize(registry: Registry) -> str:
    """Render the registry as a TOML document."""
    try:
        return tomli_w.dumps(registry.to_dict())
    except (TypeError, ValueError) as e:
        raise StateError(f"Failed to generate toml for repo list. {e}") from e


def parse(document: str) -> Registry:
    """Parse a TOML document into a registry.

    Raises:
        StateError: If the document is not valid TOML or lacks the repos list
    """
    try:
        data = tomllib.loads(document)
    except tomllib.TOMLDecodeError as e:
        raise StateError(f"Failed to parse state data as valid TOML. {e}") from e

    if not data:
        return Registry()

    entries = data.get(STATE_REPOS_KEY)
    if not isinstance(entries, list):
        raise StateError(f"Failed to read '{STATE_REPOS_KEY}' entry from state TOML")

    try:
        return Registry(Repo.from_dict(entry) for entry in entries)
    except StateError:
        raise
    except GitopolisError as e:
        raise StateError(f"Invalid repo entry in state TOML. {e}") from e


class StateStore:
    """Loads and saves the registry through a Storage."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def load(self) -> Registry:
        if not self.storage.exists():
            logger.debug("No state found, starting with an empty registry")
            return Registry()
        return parse(self.storage.read())

    def save(self, registry: Registry) -> None:
        self.storage.save(serialize(registry))
