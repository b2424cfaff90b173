"""Exception definitions for workspace-deploy"""

from ..constants import ErrorCode


class WorkspaceDeployError(Exception):
    """Base exception for workspace-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(WorkspaceDeployError):
    """Invalid or unresolvable configuration (fatal before any I/O)"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class PluginError(WorkspaceDeployError):
    """Plugin loading or registration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PLUGIN_ERROR)


class DeployError(WorkspaceDeployError):
    """Per-file deployment error"""
    pass


class MappingError(DeployError):
    """Source path cannot be resolved against base directory and mappings"""

    def __init__(self, file_path: str, base_directory: str = None):
        message = f"Could not get relative path for '{file_path}'!"
        if base_directory:
            message = f"Could not get relative path for '{file_path}' (base: '{base_directory}')!"
        super().__init__(message, ErrorCode.MAPPING_FAILED)
        self.file_path = file_path
        self.base_directory = base_directory


class DirectoryError(DeployError):
    """Destination directory cannot be created or emptied"""

    def __init__(self, directory: str, reason: str = None):
        message = f"Could not prepare directory '{directory}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.DIRECTORY_FAILED)
        self.directory = directory


class WriteError(DeployError):
    """Transport-specific write failure"""

    def __init__(self, destination: str, reason: str = None):
        message = f"Could not write '{destination}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.WRITE_FAILED)
        self.destination = destination


class TransformError(DeployError):
    """Transform module missing a direction, failing to load, or raising"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.TRANSFORM_FAILED)


class UserCancelledError(WorkspaceDeployError):
    """User cancelled the operation"""

    def __init__(self):
        super().__init__("Operation cancelled by user", ErrorCode.CANCELLED)
