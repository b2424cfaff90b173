"""Global constants for workspace-deploy"""

APP_NAME = "workspace-deploy"

# Project identification
PROJECT_CONFIG_FILE = ".deploy.yaml"

# Target defaults
DEFAULT_TARGET_DIR = "./"
DEFAULT_SORT_ORDER = 0

# Copy settings
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Logging
LOG_FORMAT = "%(message)s"

# Builtin transport plugins, in load order
BUILTIN_PLUGIN_MODULES = [
    "workspace_deploy.plugins.builtin.local",
    "workspace_deploy.plugins.builtin.test",
]

# Name of the factory every plugin module must expose
PLUGIN_FACTORY_NAME = "create_plugin"

# After-deployed operation types
OPERATION_TYPE_OPEN = "open"


class ErrorCode:
    CONFIG_ERROR = "WD001"
    PLUGIN_ERROR = "WD002"
    MAPPING_FAILED = "WD101"
    DIRECTORY_FAILED = "WD102"
    WRITE_FAILED = "WD103"
    TRANSFORM_FAILED = "WD104"
    HOOK_FAILED = "WD105"
    CANCELLED = "WD200"


# Environment variables
ENV_CONFIG_PATH = "WORKSPACE_DEPLOY_CONFIG"
ENV_WORKSPACE_ROOT = "WORKSPACE_DEPLOY_ROOT"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_CANCELED = "⊘"
