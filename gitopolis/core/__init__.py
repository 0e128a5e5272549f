"""Core orchestration for gitopolis."""

from .gitopolis import BulkResult, Gitopolis

__all__ = ["BulkResult", "Gitopolis"]
