"""Repo and Remote models"""
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Union

from gitopolis.exceptions import RemoteError, StateError
from gitopolis.models.url import RemoteUrl

PathLike = Union[str, "os.PathLike[str]"]

_SEPARATORS = "/\\"


def normalize_path(path: PathLike) -> str:
    """Strip trailing path separators so `repo/` and `repo` are the same key."""
    text = os.fspath(path)
    stripped = text.rstrip(_SEPARATORS)
    # Keep a bare root ("/") usable
    return stripped or text


def name_from_path(path: PathLike) -> str:
    """Final segment of a path, accepting both `/` and `\\` separators."""
    normalized = normalize_path(path).replace("\\", "/")
    name = normalized.rsplit("/", 1)[-1]
    if not name:
        raise StateError(f"Could not extract name from path '{path}'")
    return name


def sort_tags(tags: Iterable[str]) -> List[str]:
    """De-duplicate and sort tags case-insensitively."""
    return sorted(set(tags), key=lambda t: (t.lower(), t))


@dataclass(frozen=True)
class Remote:
    """A named URL associated with a repo."""

    name: str
    url: RemoteUrl

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise RemoteError("Remote name is missing", self.name or "")
        if not isinstance(self.url, RemoteUrl):
            object.__setattr__(self, "url", RemoteUrl.parse(self.url))

    @classmethod
    def from_url(cls, name: str, url: Union[str, RemoteUrl]) -> "Remote":
        """Build a remote, reporting URL problems against the remote name."""
        try:
            return cls(name, RemoteUrl.parse(url))
        except StateError as e:
            raise RemoteError(e.message, name) from e

    def to_dict(self) -> dict:
        return {"name": self.name, "url": str(self.url)}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Remote":
        return cls.from_url(data.get("name", ""), data.get("url", ""))


RemoteUrls = Mapping[str, Union[str, RemoteUrl]]


def remotes_from_urls(urls: RemoteUrls) -> Dict[str, Remote]:
    """Turn a name -> url mapping into a name -> Remote mapping."""
    return {name: Remote.from_url(name, url) for name, url in sorted(urls.items())}


@dataclass
class Repo:
    """One tracked working copy with its tags and remotes.

    The normalized path is the repo's identity. The name defaults to the final
    path segment and is only used for display and best-effort selection.
    """

    path: str
    name: str = ""
    tags: List[str] = field(default_factory=list)
    remotes: Dict[str, Remote] = field(default_factory=dict)

    def __post_init__(self):
        self.path = normalize_path(self.path)
        if not self.name:
            self.name = name_from_path(self.path)
        self.tags = sort_tags(self.tags)
        for key, remote in self.remotes.items():
            if key != remote.name:
                raise StateError(
                    f"Remote key '{key}' does not match remote name '{remote.name}' in {self.path}"
                )

    @classmethod
    def from_remote_urls(cls, path: PathLike, urls: RemoteUrls) -> "Repo":
        return cls(path=os.fspath(path), remotes=remotes_from_urls(urls))

    def add_tag(self, tag: str) -> bool:
        """Add a tag; returns False if it was already present."""
        if tag in self.tags:
            return False
        self.tags = sort_tags([*self.tags, tag])
        return True

    def remove_tag(self, tag: str) -> bool:
        """Remove a tag; returns False if it was not present."""
        if tag not in self.tags:
            return False
        self.tags = [t for t in self.tags if t != tag]
        return True

    def replace_remotes(self, urls: RemoteUrls) -> None:
        """Replace every declared remote with the given set."""
        self.remotes = remotes_from_urls(urls)

    def remote_urls(self) -> Dict[str, RemoteUrl]:
        return {name: remote.url for name, remote in self.remotes.items()}

    def primary_remote(self, preferred: str = "origin") -> Optional[Remote]:
        """The remote to clone from: the preferred one if declared, else the first by name."""
        if preferred in self.remotes:
            return self.remotes[preferred]
        for name in sorted(self.remotes):
            return self.remotes[name]
        return None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "name": self.name,
            "tags": list(self.tags),
            "remotes": {name: remote.to_dict() for name, remote in self.remotes.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Repo":
        if not isinstance(data, Mapping) or not data.get("path"):
            raise StateError(f"Repo entry is missing a path: {data!r}")

        remotes = {}
        for key, value in (data.get("remotes") or {}).items():
            if not isinstance(value, Mapping):
                raise StateError(f"Remote '{key}' of {data['path']} is not a table")
            # Entries written by hand may omit the redundant name field
            remotes[key] = Remote.from_dict({"name": key, **value})

        return cls(
            path=str(data["path"]),
            name=data.get("name") or "",
            tags=list(data.get("tags") or []),
            remotes=remotes,
        )
