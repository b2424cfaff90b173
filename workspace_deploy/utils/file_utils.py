"""File operation utilities"""

import os
import shutil
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

from ..constants import DEFAULT_CHUNK_SIZE
from .async_utils import run_blocking

PathLike = Union[str, Path]


async def directory_exists(path: PathLike) -> bool:
    """Check for an existing directory without blocking the loop"""
    return await aiofiles.os.path.isdir(str(path))


async def ensure_directory(path: PathLike) -> None:
    """Create a directory (and parents) unless it already exists"""
    if not await directory_exists(path):
        await aiofiles.os.makedirs(str(path), exist_ok=True)


async def read_bytes_async(path: PathLike) -> bytes:
    """Read a whole file"""
    async with aiofiles.open(str(path), 'rb') as f:
        return await f.read()


async def write_bytes_async(path: PathLike, data: bytes) -> None:
    """Write (and replace) a whole file"""
    async with aiofiles.open(str(path), 'wb') as f:
        await f.write(data)


async def copy_file_async(source: PathLike,
                          destination: PathLike,
                          preserve_timestamps: bool = True,
                          chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Copy a file, overwriting the destination

    Args:
        source: Source file
        destination: Destination file
        preserve_timestamps: Copy access/modification times and mode bits
        chunk_size: Read chunk size

    Returns:
        Number of bytes copied
    """
    copied = 0

    async with aiofiles.open(str(source), 'rb') as src:
        async with aiofiles.open(str(destination), 'wb') as dst:
            while True:
                chunk = await src.read(chunk_size)
                if not chunk:
                    break

                await dst.write(chunk)
                copied += len(chunk)

    if preserve_timestamps:
        await run_blocking(shutil.copystat, str(source), str(destination))

    return copied


def empty_directory(path: PathLike) -> None:
    """
    Make sure a directory exists and is empty

    The directory itself is kept; everything below it is deleted.

    Args:
        path: Directory to empty
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)

    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            os.unlink(entry)
