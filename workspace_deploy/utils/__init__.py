"""Utility functions for workspace-deploy"""

from .async_utils import run_async, maybe_await, run_blocking
from .file_utils import (
    directory_exists,
    ensure_directory,
    read_bytes_async,
    write_bytes_async,
    copy_file_async,
    empty_directory,
)

__all__ = [
    "run_async",
    "maybe_await",
    "run_blocking",
    "directory_exists",
    "ensure_directory",
    "read_bytes_async",
    "write_bytes_async",
    "copy_file_async",
    "empty_directory",
]
