"""Display service for registry information"""
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from gitopolis.constants import COLUMNS, STYLE_WARNING
from gitopolis.formatters import (
    format_bulk_error,
    format_bulk_summary,
    format_remotes,
    format_repo_name,
    format_tags,
)
from gitopolis.logging_config import get_logger
from gitopolis.models.repo import Repo

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def display_repo_list(self, repos: List[Repo], long: bool = False) -> None:
        """Print repo names, or a table of repos when `long` is set."""
        if not long:
            for repo in repos:
                self.console.print(repo.name, markup=False, highlight=False)
            return

        table = Table()
        for col in COLUMNS:
            table.add_column(col.label, max_width=col.width or None)

        for repo in repos:
            table.add_row(
                format_repo_name(repo),
                repo.path,
                format_tags(repo.tags),
                format_remotes(repo.remotes),
            )

        self.console.print(table)

    def display_tags(self, tags: List[str]) -> None:
        for tag in tags:
            self.console.print(tag, markup=False, highlight=False)

    def display_tags_long(self, repos_by_tag: Dict[str, List[str]]) -> None:
        """Print each tag followed by the repos carrying it."""
        for tag, names in repos_by_tag.items():
            tree = Tree(format_tags([tag]))
            for name in names:
                tree.add(name)
            self.console.print(tree)

    def display_repo(self, repo: Repo) -> None:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Name", format_repo_name(repo, markup=False))
        table.add_row("Path", repo.path)
        table.add_row("Tags", format_tags(repo.tags))
        table.add_row("Remotes", format_remotes(repo.remotes))
        self.console.print(table)

    def display_bulk_result(self, result) -> None:
        """Print per-repo failures and a one-line summary."""
        for path, error in result.errors:
            self.console.print(format_bulk_error(path, error))
        if self.verbose:
            for path in result.skipped:
                self.console.print(f"[{STYLE_WARNING}]Skipped {path}[/{STYLE_WARNING}]")
        self.console.print(format_bulk_summary(result))
