"""Remote repository URL value type"""
import re
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlparse

from gitopolis.exceptions import StateError

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:([\\/]|$)")
# user@host:group/name.git
_SCP_RE = re.compile(r"^(?:(?P<user>[^@/\\]+)@)?(?P<host>[^:/\\]+):(?P<path>.*)$")

GIT_SUFFIX = ".git"


@dataclass(frozen=True, order=True)
class RemoteUrl:
    """An immutable, validated remote repository URL.

    Equality and ordering use the canonical text only. Supports URLs with a
    scheme (https, ssh, git, file, ...), scp-like SSH addresses and local
    paths, including Windows paths.
    """

    text: str
    scheme: str = field(default="", compare=False)
    host: str = field(default="", compare=False)
    path: str = field(default="", compare=False)
    user: Optional[str] = field(default=None, compare=False, repr=False)

    @classmethod
    def parse(cls, value: Union[str, "RemoteUrl"]) -> "RemoteUrl":
        """Parse a URL string.

        Raises:
            StateError: If the value is empty or not a usable git URL
        """
        if isinstance(value, RemoteUrl):
            return value
        if not isinstance(value, str):
            raise StateError.invalid_url(repr(value), "expected a string")

        text = value.strip()
        if not text or any(c in text for c in "\r\n\0"):
            raise StateError.invalid_url(repr(value))

        if _SCHEME_RE.match(text):
            parsed = urlparse(text)
            scheme = parsed.scheme.lower()
            host = parsed.hostname or ""
            if not host and scheme != "file":
                raise StateError.invalid_url(text, "missing host")
            return cls(text, scheme, host, parsed.path, parsed.username)

        if not _WINDOWS_DRIVE_RE.match(text):
            scp = _SCP_RE.match(text)
            if scp:
                return cls(text, "ssh", scp.group("host"), scp.group("path"), scp.group("user"))

        return cls(text, "file", "", text)

    @property
    def is_local(self) -> bool:
        return self.scheme == "file"

    def directory_name(self) -> str:
        """Name `git clone` would give the working copy for this URL."""
        return derive_directory_name(self)

    def __str__(self) -> str:
        return self.text


def derive_directory_name(url: Union[str, RemoteUrl]) -> str:
    """Extract the final path segment of a URL or path, without any `.git` suffix.

    A final segment that is exactly `.git` (a path to the git directory itself)
    is skipped in favour of the segment before it, as `git clone` does.

    Examples:
        git@github.com:user/repo.git -> repo
        https://github.com/user/repo -> repo
        https://dev.azure.com/org/project/_git/myrepo -> myrepo
        source_repo -> source_repo
        C:\\Users\\test\\repo.git -> repo

    Raises:
        StateError: If no non-empty final segment exists
    """
    remote_url = RemoteUrl.parse(url)
    segments = [s for s in remote_url.path.replace("\\", "/").split("/") if s]

    while segments:
        name = segments.pop()
        if name.endswith(GIT_SUFFIX):
            name = name[: -len(GIT_SUFFIX)]
        if name:
            return name

    raise StateError.unnameable_url(remote_url.text)
