"""Command line interface for workspace-deploy"""

from .main import cli, main

__all__ = ["cli", "main"]
