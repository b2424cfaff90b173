"""Configuration management service"""

import os
import shutil
from pathlib import Path
from typing import Optional, Union

import yaml

from ..api.exceptions import ConfigurationError
from ..constants import ENV_CONFIG_PATH, PROJECT_CONFIG_FILE
from ..models.config import DeployConfiguration


class ConfigService:
    """Service for loading and saving the workspace configuration"""

    def __init__(self, workspace_root: Union[str, Path],
                 config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            workspace_root: Workspace root directory
            config_path: Configuration file; defaults to $WORKSPACE_DEPLOY_CONFIG
                or ``.deploy.yaml`` in the workspace root
        """
        self.workspace_root = Path(workspace_root)

        config_path = config_path or os.environ.get(ENV_CONFIG_PATH)
        if config_path:
            path = Path(config_path)
            self.config_path = path if path.is_absolute() else self.workspace_root / path
        else:
            self.config_path = self.workspace_root / PROJECT_CONFIG_FILE

        self._config: Optional[DeployConfiguration] = None

    @property
    def config(self) -> DeployConfiguration:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    @property
    def exists(self) -> bool:
        return self.config_path.is_file()

    def load_config(self) -> DeployConfiguration:
        """Load configuration from file

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid configuration file {self.config_path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")

        try:
            self._config = DeployConfiguration.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        return self._config

    def save_config(self, config: Optional[DeployConfiguration] = None) -> None:
        """Save configuration to file

        Args:
            config: Configuration to save (uses current if not provided)
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        # Create backup
        if self.config_path.exists():
            backup_path = self.config_path.with_suffix('.yaml.bak')
            shutil.copy2(self.config_path, backup_path)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self._config.to_dict(), f, default_flow_style=False, sort_keys=False)
