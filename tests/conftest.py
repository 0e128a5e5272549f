"""Pytest fixtures for gitopolis tests"""
import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional

import git
import pytest

from gitopolis.core import Gitopolis
from gitopolis.exceptions import GitError, RemoteError
from gitopolis.models.repo import normalize_path
from gitopolis.models.url import RemoteUrl
from gitopolis.services.git_service import GitBackend
from gitopolis.services.storage_service import MemoryStorage


class FakeGit(GitBackend):
    """In-memory backend returning scripted remote sets."""

    def __init__(self, remotes: Optional[Dict[str, Dict[str, str]]] = None):
        self.live: Dict[str, Dict[str, RemoteUrl]] = {}
        for path, urls in (remotes or {}).items():
            self.set_remotes(path, urls)
        self.fail_read = set()
        self.fail_clone = set()
        self.fail_add = set()
        self.clone_calls = []
        self.add_remote_calls = []

    def set_remotes(self, path, urls: Dict[str, str]) -> None:
        self.live[normalize_path(path)] = {n: RemoteUrl.parse(u) for n, u in urls.items()}

    def read_all_remotes(self, path):
        key = normalize_path(path)
        if key in self.fail_read or key not in self.live:
            raise GitError.cannot_open(path)
        return dict(sorted(self.live[key].items()))

    def read_remote_url(self, path, remote_name):
        remotes = self.read_all_remotes(path)
        if remote_name not in remotes:
            raise RemoteError.not_found(remote_name)
        return remotes[remote_name]

    def add_remote(self, path, remote_name, url):
        key = normalize_path(path)
        self.add_remote_calls.append((key, remote_name, str(url)))
        if key in self.fail_add:
            raise RemoteError("add failed", remote_name)
        remotes = self.live.setdefault(key, {})
        if remote_name in remotes:
            raise RemoteError("Already exists.", remote_name)
        remotes[remote_name] = RemoteUrl.parse(url)

    def clone(self, path, url):
        key = normalize_path(path)
        self.clone_calls.append((key, str(url)))
        if key in self.fail_clone:
            raise GitError(f"Failed to clone {url} to {key}")
        if key in self.live:
            return
        self.live[key] = {"origin": RemoteUrl.parse(url)}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def gitopolis(storage, fake_git):
    return Gitopolis(storage, fake_git)


@pytest.fixture
def populated(gitopolis, fake_git):
    """Three tracked repos with tags.

    alpha: origin           tags: backend, core
    beta:  origin, fork     tags: frontend
    gamma: upstream         tags: backend
    """
    fake_git.set_remotes("src/alpha", {"origin": "git@github.com:org/alpha.git"})
    fake_git.set_remotes(
        "src/beta",
        {"origin": "https://github.com/org/beta.git", "fork": "git@github.com:me/beta.git"},
    )
    fake_git.set_remotes("src/gamma", {"upstream": "https://gitlab.com/group/gamma"})
    gitopolis.add(["src/alpha", "src/beta/", "src/gamma"])
    gitopolis.add_tag("core", ["alpha"])
    gitopolis.add_tag("backend", ["alpha", "gamma"])
    gitopolis.add_tag("frontend", ["beta"])
    return gitopolis


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with an origin remote."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.create_remote('origin', 'git@github.com:test/test-repo.git')

    yield repo

    repo.close()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
