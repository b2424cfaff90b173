# workspace_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import info
from . import restore

__all__ = [
    "deploy",
    "info",
    "restore",
]
