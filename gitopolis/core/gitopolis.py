"""Core functionality for gitopolis"""

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from gitopolis.config import Config
from gitopolis.exceptions import GitopolisError, IoError, StateError
from gitopolis.logging_config import get_logger
from gitopolis.models.registry import Registry
from gitopolis.models.repo import PathLike, Repo, normalize_path
from gitopolis.models.tag_filter import TagFilter
from gitopolis.models.url import RemoteUrl, derive_directory_name
from gitopolis.services.git_service import GitBackend
from gitopolis.services.storage_service import StateStore, Storage

logger = get_logger(__name__)


@dataclass
class BulkResult:
    """Outcome of an operation applied to many repos.

    Every selected repo is attempted; failures are collected rather than
    raised. `failed` counts repos with at least one error.
    """

    operation: str
    attempted: int = 0
    skipped: List[str] = field(default_factory=list)
    errors: List[Tuple[str, GitopolisError]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len({path for path, _ in self.errors})

    @property
    def ok(self) -> bool:
        return not self.errors

    def record_error(self, path: str, error: GitopolisError) -> None:
        self.errors.append((path, error))


class Gitopolis:
    """Registry operations: each one loads the state, changes it and saves it back."""

    def __init__(self, storage: Storage, git: GitBackend, config: Optional[Union[Config, dict]] = None):
        """Initialize Gitopolis.

        Args:
            storage: Where the registry document is persisted
            git: Backend used to inspect and change working copies
            config: Configuration dict or Config object
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.store = StateStore(storage)
        self.git = git
        self.default_remote = config.default_remote

    def _load(self) -> Registry:
        try:
            return self.store.load()
        except OSError as e:
            raise IoError(f"Failed to read state: {e}", getattr(e, "filename", None)) from e

    def _save(self, registry: Registry) -> None:
        try:
            self.store.save(registry)
        except OSError as e:
            raise IoError(f"Failed to save state: {e}", getattr(e, "filename", None)) from e

    # Read-only operations

    def read(self) -> Registry:
        """The whole registry in canonical path order."""
        return self._load()

    def list(self, tag_filter: Optional[TagFilter] = None) -> List[Repo]:
        """Repos matching the filter, sorted by name."""
        return self._load().list(tag_filter)

    def tags(self) -> List[str]:
        return self._load().tags()

    def repos_by_tag(self) -> Dict[str, List[str]]:
        return self._load().repos_by_tag()

    def show(self, name_or_path: str) -> Repo:
        """Find a repo by path, falling back to name."""
        registry = self._load()
        repo = registry.find_by_path(name_or_path) or registry.find_by_name(name_or_path)
        if repo is None:
            raise StateError.repo_not_found(name_or_path)
        return repo

    # Single-target operations

    def add(self, paths: Union[PathLike, Sequence[PathLike]]) -> List[str]:
        """Register working copies with the remotes git reports for them.

        Already tracked paths are ignored. Nothing is saved if any path fails.

        Returns:
            Normalized paths that were newly added
        """
        if isinstance(paths, (str, os.PathLike)):
            paths = [paths]

        registry = self._load()
        added = []
        for path in paths:
            normalized = normalize_path(path)
            if normalized in registry:
                logger.info(f"{normalized} already added, ignoring.")
                continue

            remotes = self.git.read_all_remotes(normalized)
            registry.add(Repo.from_remote_urls(normalized, remotes))
            added.append(normalized)

        self._save(registry)
        return added

    def remove(self, names: Iterable[str]) -> List[str]:
        """Remove repos by name. Unknown names are logged and skipped.

        Returns:
            Names that were not found
        """
        registry = self._load()
        missing = registry.remove_by_names(names)
        self._save(registry)
        return missing

    def add_tag(self, tag: str, names: Iterable[str]) -> None:
        registry = self._load()
        registry.add_tag(tag, names)
        self._save(registry)

    def remove_tag(self, tag: str, names: Iterable[str]) -> None:
        registry = self._load()
        registry.remove_tag(tag, names)
        self._save(registry)

    def clone_and_add(
        self,
        url: Union[str, RemoteUrl],
        target_path: Optional[PathLike] = None,
        tags: Iterable[str] = (),
    ) -> str:
        """Clone a URL, register the new working copy and tag it.

        Returns:
            Normalized path of the working copy
        """
        remote_url = RemoteUrl.parse(url)
        if target_path:
            path = normalize_path(target_path)
        else:
            path = derive_directory_name(remote_url)

        self.git.clone(path, remote_url)
        self.add([path])

        tags = list(tags)
        if tags:
            registry = self._load()
            repo = registry.find_by_path(path)
            if repo is None:
                raise StateError.repo_not_found(path)
            for tag in tags:
                repo.add_tag(tag)
            self._save(registry)

        return path

    def move(self, old_path: PathLike, new_path: PathLike) -> Repo:
        """Move a working copy on disk and re-key it in the registry.

        The registry is not rolled back if saving fails after the rename.
        """
        registry = self._load()
        old = normalize_path(old_path)
        new = normalize_path(new_path)

        repo = registry.find_by_path(old)
        if repo is None:
            raise StateError.repo_not_found(old)
        if new in registry:
            raise StateError(f"Repo '{new}' is already tracked.")

        parent = os.path.dirname(new)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            os.rename(old, new)
        except OSError as e:
            raise IoError(f"Failed to move {old} to {new}: {e.strerror or e}", old) from e

        registry.remove(repo)
        moved = Repo(path=new, tags=list(repo.tags), remotes=dict(repo.remotes))
        registry.add(moved)

        try:
            self._save(registry)
        except GitopolisError:
            logger.error(f"Moved {old} to {new} on disk but the registry still lists {old}")
            raise
        logger.info(f"Moved {old} to {new}")
        return moved

    # Bulk operations

    def clone(self, repos: Iterable[Repo]) -> BulkResult:
        """Clone each repo from its primary remote and add its other remotes.

        A failing repo is recorded and the next one is attempted.
        """
        result = BulkResult("clone")
        for repo in repos:
            result.attempted += 1
            primary = repo.primary_remote(self.default_remote)
            if primary is None:
                logger.warning(f"{repo.path} has no remotes, skipped")
                result.skipped.append(repo.path)
                continue

            try:
                self.git.clone(repo.path, primary.url)
            except GitopolisError as e:
                logger.warning(f"Could not clone {repo.path}: {e}")
                result.record_error(repo.path, e)
                continue

            self._add_missing_remotes(repo, result)

        if result.failed:
            logger.warning(f"{result.failed} repos failed to clone")
        return result

    def sync_read_remotes(self, tag_filter: Optional[TagFilter] = None) -> BulkResult:
        """Replace each selected repo's declared remotes with its live remotes."""
        registry = self._load()
        result = BulkResult("sync-read-remotes")

        for repo in registry.list(tag_filter):
            result.attempted += 1
            try:
                live = self.git.read_all_remotes(repo.path)
            except GitopolisError as e:
                logger.warning(f"Could not read remotes from {repo.path}: {e}")
                result.record_error(repo.path, e)
                continue

            repo.replace_remotes(live)
            logger.info(f"Updated {repo.path} with remotes from git")

        self._save(registry)

        if result.failed:
            logger.warning(f"{result.failed} repos failed to sync")
        return result

    def sync_write_remotes(self, tag_filter: Optional[TagFilter] = None) -> BulkResult:
        """Add declared remotes missing from each selected working copy. Never removes any."""
        result = BulkResult("sync-write-remotes")

        for repo in self._load().list(tag_filter):
            result.attempted += 1
            self._add_missing_remotes(repo, result)

        if result.failed:
            logger.warning(f"{result.failed} repos failed to sync")
        return result

    def _add_missing_remotes(self, repo: Repo, result: BulkResult) -> None:
        """Create every declared remote the working copy lacks, recording failures."""
        try:
            live = self.git.read_all_remotes(repo.path)
        except GitopolisError as e:
            logger.warning(f"Could not read remotes from {repo.path}: {e}")
            result.record_error(repo.path, e)
            return

        for name, remote in repo.remotes.items():
            if name in live:
                continue
            try:
                self.git.add_remote(repo.path, name, remote.url)
                logger.info(f"Added remote {name} to {repo.path}")
            except GitopolisError as e:
                logger.warning(f"Could not add remote {name} to {repo.path}: {e}")
                result.record_error(repo.path, e)
