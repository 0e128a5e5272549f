"""Bulk result formatting utilities."""

from typing import TYPE_CHECKING

from rich.markup import escape

from gitopolis.constants import STYLE_ERROR, SYMBOL_FAILED, SYMBOL_OK

if TYPE_CHECKING:
    from gitopolis.core.gitopolis import BulkResult
    from gitopolis.exceptions import GitopolisError


def format_bulk_error(path: str, error: "GitopolisError") -> str:
    return f"[{STYLE_ERROR}]{SYMBOL_FAILED}[/{STYLE_ERROR}] {escape(path)}: {escape(str(error))}"


def format_bulk_summary(result: "BulkResult") -> str:
    """
    Summarize a bulk operation.

    Examples:
        "✓ clone: 3 repos"
        "✗ clone: 1 of 3 repos failed"
    """
    noun = "repo" if result.attempted == 1 else "repos"
    if result.ok:
        summary = f"{SYMBOL_OK} {result.operation}: {result.attempted} {noun}"
    else:
        summary = (
            f"[{STYLE_ERROR}]{SYMBOL_FAILED} {result.operation}: "
            f"{result.failed} of {result.attempted} {noun} failed[/{STYLE_ERROR}]"
        )
    if result.skipped:
        summary += f" ({len(result.skipped)} skipped)"
    return summary
