#!/usr/bin/env python3
"""
Filesystem helpers for the fepull Core Layer.

Provides the recursive Directory Copier used to move a fetched subtree out of
its temporary workspace, plus small helpers used by the install flow.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
    copy_directory("/tmp/.fepull-temp-ab12/packages/button", "./src/components/button")

Expected output:
- ./src/components/button with the same relative paths and byte-identical files
- FileNotFoundError if the source directory does not exist
"""

import os
import shutil
from pathlib import Path
from typing import Union

from loguru import logger

PathLike = Union[str, Path]


def copy_directory(src: PathLike, dst: PathLike) -> None:
    """
    Recursively copy the contents of ``src`` into ``dst``.

    ``dst`` and its parents are created when missing. Files are copied
    byte-for-byte; permissions and timestamps are not preserved. A failure
    part way through leaves a partial copy behind.

    Args:
        src: Existing directory to copy from
        dst: Directory to copy into

    Raises:
        FileNotFoundError: ``src`` does not exist
        OSError: ``src`` is unreadable or ``dst`` is not writable
    """
    src_path = Path(src)
    dst_path = Path(dst)
    # Fails before touching dst when src is missing
    with os.scandir(src_path) as it:
        entries = list(it)
    dst_path.mkdir(parents=True, exist_ok=True)

    for entry in entries:
        target = dst_path / entry.name
        if entry.is_dir():
            copy_directory(entry.path, target)
        else:
            shutil.copyfile(entry.path, target)


def directory_exists(path: PathLike) -> bool:
    return Path(path).is_dir()


def remove_directory(path: PathLike) -> None:
    """Delete a directory tree if present."""
    path = Path(path)
    if path.is_dir():
        logger.debug(f"Removing existing directory {path}")
        shutil.rmtree(path)
