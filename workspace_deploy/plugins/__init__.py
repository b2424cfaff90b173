"""Transport plugin system for workspace-deploy"""

from .base import DeployPlugin, DeployPluginInfo, CompletionGuard
from .registry import PluginRegistry

__all__ = [
    'DeployPlugin',
    'DeployPluginInfo',
    'CompletionGuard',
    'PluginRegistry',
]
