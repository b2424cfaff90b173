"""Destination path resolution for deployed files

Everything in here is lexical: paths are joined and normalized as strings
and the filesystem is never consulted, so results only depend on the
arguments.
"""

import os
import posixpath
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import MappingError
from ..models.target import Target, TargetMapping

PathLike = Union[str, Path]


def normalize_dir(directory: Optional[str]) -> str:
    """Normalize a mapping directory to ``a/b`` form ("" for the root)"""
    value = str(directory or "").strip().replace("\\", "/")
    if not value:
        return ""

    value = posixpath.normpath(value).strip("/")
    return "" if value == "." else value


def _is_dir_prefix(prefix: str, directory: str) -> bool:
    if not prefix:
        return True
    return directory == prefix or directory.startswith(prefix + "/")


class PathMapper:
    """Maps workspace files to destination paths of a target"""

    def __init__(self, workspace_root: PathLike):
        """Initialize path mapper

        Args:
            workspace_root: Root directory of the workspace
        """
        self.workspace_root = os.path.normpath(os.path.abspath(str(workspace_root)))

    def absolute(self, path: PathLike) -> str:
        """Make a path absolute against the workspace root"""
        path = str(path)
        if not os.path.isabs(path):
            path = os.path.join(self.workspace_root, path)
        return os.path.normpath(path)

    def get_target_root(self, target: Target) -> str:
        """Root directory of a target (``target.dir``, default ``./``)"""
        return self.absolute(target.base_dir)

    def to_relative_path(self, path: PathLike,
                         base_directory: Optional[PathLike] = None) -> Optional[str]:
        """Make a path relative to a base directory

        Args:
            path: File path (absolute, or relative to the workspace root)
            base_directory: Base directory, defaults to the workspace root

        Returns:
            Relative path with ``/`` separators or None if the path is not
            below the base directory
        """
        base = self.absolute(base_directory) if base_directory else self.workspace_root
        full = self.absolute(path)

        prefix = base if base.endswith(os.sep) else base + os.sep
        if not full.startswith(prefix) or full == base:
            return None

        return full[len(prefix):].replace(os.sep, "/")

    def to_relative_target_path(self, file: PathLike, target: Target,
                                base_directory: Optional[PathLike] = None) -> str:
        """Compute the destination path of a file relative to the target root

        Mappings are checked in declaration order and the first one whose
        source prefixes the file's directory wins. Without a matching
        mapping the relative path is kept as is.

        Raises:
            MappingError: If the file is outside the base directory
        """
        relative = self.to_relative_path(file, base_directory)
        if relative is None:
            raise MappingError(str(file), str(base_directory or self.workspace_root))

        for mapping in target.mappings:
            mapped = self._apply_mapping(mapping, relative)
            if mapped is not None:
                return mapped

        return relative

    def resolve(self, file: PathLike, target: Target,
                base_directory: Optional[PathLike] = None) -> Path:
        """Full destination path of a file inside a target

        Raises:
            MappingError: If the file cannot be mapped
        """
        relative = self.to_relative_target_path(file, target, base_directory)
        root = self.get_target_root(target)
        return Path(os.path.normpath(os.path.join(root, *relative.split("/"))))

    @staticmethod
    def _apply_mapping(mapping: TargetMapping, relative: str) -> Optional[str]:
        # "/src" and "src" both name the workspace folder src
        prefix = normalize_dir(mapping.source)
        directory, filename = posixpath.split(relative)
        if not _is_dir_prefix(prefix, directory):
            return None

        remainder = directory[len(prefix):].strip("/")
        parts = [p for p in (normalize_dir(mapping.target), remainder) if p]
        return posixpath.join(*parts, filename)
