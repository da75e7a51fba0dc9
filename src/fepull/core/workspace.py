#!/usr/bin/env python3
"""
Temporary Workspace Allocator

Every fetch runs in its own throwaway git working copy. This module hands out
uniquely named scratch directories, remembers which are still open and
removes them when the owning operation exits, including on errors and
cancellation.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Links to documentation:
- pathlib: https://docs.python.org/3/library/pathlib.html
- shutil.rmtree: https://docs.python.org/3/library/shutil.html#shutil.rmtree

Sample input:
    allocator = WorkspaceAllocator(root="/path/to/project")
    async with allocator.workspace() as temp_dir:
        ...

Expected output:
- temp_dir: /path/to/project/.fepull-temp-3f2a9c0e5b7d4e1f8a6b2c9d0e1f2a3b
- The directory no longer exists after the block exits
"""

import shutil
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional, Set, Union

from loguru import logger

from fepull.core.constants import WORKSPACE_PREFIX


class WorkspaceAllocator:
    """
    Creates and tracks TempWorkspaces.

    Names use a random uuid4 suffix, so concurrent pipelines never collide.
    ``release`` is best-effort: removal failures are logged and swallowed so
    they never mask the outcome of the operation that used the workspace.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, prefix: str = WORKSPACE_PREFIX):
        self.root = Path(root) if root is not None else Path.cwd()
        self.prefix = prefix
        self._open: Set[Path] = set()

    @property
    def open_workspaces(self) -> List[Path]:
        return sorted(self._open)

    def allocate(self) -> Path:
        """Create a new empty workspace directory and start tracking it."""
        path = self.root / f"{self.prefix}{uuid.uuid4().hex}"
        path.mkdir(parents=True)
        self._open.add(path)
        logger.debug(f"Allocated workspace {path}")
        return path

    def release(self, path: Path) -> None:
        """Remove a workspace; errors are swallowed."""
        self._open.discard(path)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Ignoring cleanup failure for {path}: {e}")

    def release_all(self) -> None:
        """Remove every workspace still open, e.g. at interpreter shutdown."""
        for path in list(self._open):
            self.release(path)

    @asynccontextmanager
    async def workspace(self) -> AsyncIterator[Path]:
        path = self.allocate()
        try:
            yield path
        finally:
            self.release(path)
