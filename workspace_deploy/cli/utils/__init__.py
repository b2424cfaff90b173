"""CLI utilities"""

from .output import (
    console,
    format_deploy_result,
    format_file_event,
    format_targets,
    format_packages,
    format_plugins,
)

__all__ = [
    "console",
    "format_deploy_result",
    "format_file_event",
    "format_targets",
    "format_packages",
    "format_plugins",
]
