"""
gitopolis - Manage a registry of git working copies, their remotes and tags
"""

from .__version__ import __version__
from .core import Gitopolis
from .cli.main import main

__all__ = ["Gitopolis", "main", "__version__"]
