"""Repo formatting utilities."""

from typing import Iterable, Mapping

from rich.markup import escape

from gitopolis.constants import STYLE_NAME, STYLE_REMOTE, STYLE_TAG
from gitopolis.models.repo import Remote, Repo


def format_tags(tags: Iterable[str], markup: bool = True) -> str:
    """
    Format a tag list for display.

    Args:
        tags: Tags in display order
        markup: Whether to add Rich markup

    Returns:
        Comma separated tags, or an empty string
    """
    tags = list(tags)
    if not markup:
        return ", ".join(tags)
    return ", ".join(f"[{STYLE_TAG}]{escape(t)}[/{STYLE_TAG}]" for t in tags)


def format_remote(remote: Remote, markup: bool = True) -> str:
    if not markup:
        return f"{remote.name} {remote.url}"
    return f"[{STYLE_REMOTE}]{escape(remote.name)}[/{STYLE_REMOTE}] {escape(str(remote.url))}"


def format_remotes(remotes: Mapping[str, Remote], markup: bool = True) -> str:
    """One remote per line."""
    return "\n".join(format_remote(r, markup) for r in remotes.values())


def format_repo_name(repo: Repo, markup: bool = True) -> str:
    if not markup:
        return repo.name
    return f"[{STYLE_NAME}]{escape(repo.name)}[/{STYLE_NAME}]"
