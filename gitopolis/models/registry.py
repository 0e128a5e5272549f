"""Registry of tracked repos"""
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from gitopolis.constants import STATE_REPOS_KEY
from gitopolis.exceptions import StateError
from gitopolis.logging_config import get_logger
from gitopolis.models.repo import PathLike, Repo, normalize_path
from gitopolis.models.tag_filter import TagFilter

logger = get_logger(__name__)


def _path_components(repo: Repo) -> List[str]:
    """Sort key comparing paths segment by segment, so `a/b` sorts before `a-b`."""
    return repo.path.replace("\\", "/").split("/")


class Registry:
    """Ordered collection of repos, at most one per normalized path.

    Canonical order is ascending path, compared segment by segment, and is
    re-established after every insertion.
    """

    def __init__(self, repos: Optional[Iterable[Repo]] = None):
        self._repos: List[Repo] = []
        for repo in repos or []:
            self.add(repo)

    def __iter__(self) -> Iterator[Repo]:
        return iter(self._repos)

    def __len__(self) -> int:
        return len(self._repos)

    def __contains__(self, path) -> bool:
        return self.find_by_path(path) is not None

    def __repr__(self) -> str:
        return f"Registry({[r.path for r in self._repos]!r})"

    @property
    def repos(self) -> List[Repo]:
        """A copy of the repos in canonical order."""
        return list(self._repos)

    def find(self, predicate: Callable[[Repo], bool]) -> Optional[Repo]:
        for repo in self._repos:
            if predicate(repo):
                return repo
        return None

    def find_by_path(self, path: PathLike) -> Optional[Repo]:
        normalized = normalize_path(path)
        return self.find(lambda r: r.path == normalized)

    def find_by_name(self, name: str) -> Optional[Repo]:
        """First repo with this name in canonical order; names may collide."""
        return self.find(lambda r: r.name == name)

    def resolve(self, name: str) -> Repo:
        """Find by name, raising if absent."""
        repo = self.find_by_name(name)
        if repo is None:
            raise StateError.repo_not_found(name)
        return repo

    def add(self, repo: Repo) -> bool:
        """Insert a repo; adding an already tracked path is a no-op.

        Returns:
            True if the repo was inserted
        """
        if self.find_by_path(repo.path) is not None:
            logger.info(f"{repo.path} already added, ignoring.")
            return False
        self._repos.append(repo)
        self._repos.sort(key=_path_components)
        logger.info(f"Added {repo.path}")
        return True

    def remove(self, repo: Repo) -> None:
        self._repos = [r for r in self._repos if r.path != repo.path]

    def remove_by_names(self, names: Iterable[str]) -> List[str]:
        """Remove repos by name; absent names are skipped.

        Returns:
            Names that were not found
        """
        missing = []
        for name in names:
            repo = self.find_by_name(name)
            if repo is None:
                logger.info(f"Repo already absent, skipped: {name}")
                missing.append(name)
                continue
            self.remove(repo)
            logger.info(f"Removed {repo.path}")
        return missing

    def _resolve_all(self, names: Iterable[str]) -> List[Repo]:
        return [self.resolve(name) for name in names]

    def add_tag(self, tag: str, names: Iterable[str]) -> None:
        """Tag every named repo. Fails before changing anything if a name is unknown."""
        for repo in self._resolve_all(names):
            if repo.add_tag(tag):
                logger.info(f"Tagged {repo.name} with '{tag}'")

    def remove_tag(self, tag: str, names: Iterable[str]) -> None:
        """Untag every named repo. Fails before changing anything if a name is unknown."""
        for repo in self._resolve_all(names):
            if repo.remove_tag(tag):
                logger.info(f"Removed tag '{tag}' from {repo.name}")

    def list(self, tag_filter: Optional[TagFilter] = None) -> List[Repo]:
        """Repos matching the filter, sorted by display name (case-insensitive)."""
        tag_filter = tag_filter or TagFilter.all()
        selected = [r for r in self._repos if tag_filter.matches(r.tags)]
        return sorted(selected, key=lambda r: r.name.lower())

    def tags(self) -> List[str]:
        """Union of all tags, sorted and de-duplicated."""
        return sorted({tag for repo in self._repos for tag in repo.tags})

    def repos_by_tag(self) -> Dict[str, List[str]]:
        """Map each tag to the sorted names of the repos carrying it."""
        return {
            tag: sorted((r.name for r in self._repos if tag in r.tags), key=str.lower)
            for tag in self.tags()
        }

    def to_dict(self) -> dict:
        return {STATE_REPOS_KEY: [repo.to_dict() for repo in self._repos]}
