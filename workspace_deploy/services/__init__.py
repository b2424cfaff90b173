"""Services for workspace-deploy"""

from .config_service import ConfigService

__all__ = [
    'ConfigService',
]
