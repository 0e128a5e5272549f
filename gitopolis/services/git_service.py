"""Git backend service"""
import os
from abc import ABC, abstractmethod
from typing import Dict, Union

import git
from rich.console import Console

from gitopolis.constants import SYMBOL_REPO
from gitopolis.exceptions import GitError, RemoteError, StateError
from gitopolis.logging_config import get_logger
from gitopolis.models.url import RemoteUrl

console = Console(stderr=True)
logger = get_logger(__name__)

PathArg = Union[str, "os.PathLike[str]"]
UrlArg = Union[str, RemoteUrl]


class GitBackend(ABC):
    """Operations gitopolis needs from a version-control backend."""

    @abstractmethod
    def read_all_remotes(self, path: PathArg) -> Dict[str, RemoteUrl]:
        """Return every remote configured in the working copy at `path`."""

    @abstractmethod
    def read_remote_url(self, path: PathArg, remote_name: str) -> RemoteUrl:
        """Return the URL of one remote."""

    @abstractmethod
    def add_remote(self, path: PathArg, remote_name: str, url: UrlArg) -> None:
        """Create a remote in the working copy at `path`."""

    @abstractmethod
    def clone(self, path: PathArg, url: UrlArg) -> None:
        """Clone `url` into `path`; succeeds without doing anything if `path` exists."""


class GitService(GitBackend):
    """GitBackend implemented with GitPython."""

    def __init__(self, quiet: bool = False):
        """Initialize the service.

        Args:
            quiet: If True, don't print clone progress lines
        """
        self.quiet = quiet

    def _console_print(self, *args, **kwargs):
        if not self.quiet:
            console.print(*args, **kwargs)

    def _get_repo(self, path: PathArg) -> git.Repo:
        """Open the working copy at `path`.

        Raises:
            GitError: If the path is missing or not a git repository
        """
        try:
            return git.Repo(os.fspath(path))
        except git.NoSuchPathError as e:
            raise GitError.cannot_open(path, "no such path") from e
        except git.InvalidGitRepositoryError as e:
            raise GitError.cannot_open(path, "not a git repository") from e

    def read_all_remotes(self, path: PathArg) -> Dict[str, RemoteUrl]:
        repo = self._get_repo(path)
        try:
            remotes: Dict[str, RemoteUrl] = {}
            for remote in repo.remotes:
                try:
                    urls = list(remote.urls)
                except git.GitCommandError:
                    urls = []
                if not urls:
                    logger.debug(f"Remote {remote.name} in {path} has no URL, skipped")
                    continue
                try:
                    remotes[remote.name] = self._parse_url(urls[0], remote.name)
                except RemoteError as e:
                    logger.warning(f"Skipping remote in {os.fspath(path)}: {e}")
            logger.debug(f"Found {len(remotes)} remotes in {path}")
            return dict(sorted(remotes.items()))
        finally:
            repo.close()

    def read_remote_url(self, path: PathArg, remote_name: str) -> RemoteUrl:
        repo = self._get_repo(path)
        try:
            try:
                remote = repo.remote(remote_name)
            except ValueError as e:
                raise RemoteError.not_found(remote_name) from e
            try:
                url = next(iter(remote.urls))
            except (StopIteration, git.GitCommandError) as e:
                raise RemoteError("Remote URL is missing", remote_name) from e
            return self._parse_url(url, remote_name)
        finally:
            repo.close()

    def add_remote(self, path: PathArg, remote_name: str, url: UrlArg) -> None:
        repo = self._get_repo(path)
        try:
            if remote_name in [r.name for r in repo.remotes]:
                raise RemoteError("Already exists.", remote_name)
            repo.create_remote(remote_name, str(url))
            logger.debug(f"Created remote {remote_name} -> {url} in {path}")
        except git.GitCommandError as e:
            raise RemoteError(str(e.stderr or e).strip(), remote_name) from e
        finally:
            repo.close()

    def clone(self, path: PathArg, url: UrlArg) -> None:
        if os.path.exists(path):
            self._console_print(f"{SYMBOL_REPO} {os.fspath(path)}> Already exists, skipped.")
            return

        self._console_print(f"{SYMBOL_REPO} {os.fspath(path)}> Cloning {url} ...")
        try:
            repo = git.Repo.clone_from(str(url), os.fspath(path))
        except git.GitCommandError as e:
            logger.debug(f"git clone failed: {e}")
            raise GitError(f"Failed to clone {url} to {os.fspath(path)}") from e
        repo.close()

    @staticmethod
    def _parse_url(url: str, remote_name: str) -> RemoteUrl:
        try:
            return RemoteUrl.parse(url)
        except StateError as e:
            raise RemoteError(e.message, remote_name) from e
