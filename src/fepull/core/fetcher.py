#!/usr/bin/env python3
"""
Sparse Source Fetcher Module

This module turns a remote URL plus a packages directory into local files.
Every operation runs the same pipeline in a fresh temporary workspace:

    init -> remote add origin -> sparse-checkout config -> transport config
         -> fetch --depth=1 (retried) -> branch resolution -> read subtree

and removes the workspace afterwards, whatever the outcome.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Links to documentation:
- Git sparse checkout: https://git-scm.com/docs/git-sparse-checkout
- Git fetch --depth: https://git-scm.com/docs/git-fetch
- loguru: https://github.com/Delgan/loguru

Sample input:
    fetcher = SparseSourceFetcher()
    source = PackageSource(url="https://github.com/org/ui-kit", packagesDir="packages")
    packages = await fetcher.list_packages(source)
    await fetcher.download_package(source, "button", "./src/components/button")

Expected output:
    [PackageInfo(name='button', path='/.../packages/button', description='A button'), ...]
    # ./src/components/button populated with the package files
"""

import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, List, Optional, Union

from loguru import logger

from fepull.core.branches import resolve_and_checkout
from fepull.core.cancellation import CancellationToken
from fepull.core.constants import (
    DEFAULT_FETCH_ATTEMPTS,
    DEFAULT_GIT_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
    FETCH_DEPTH,
    MANIFEST_FILE,
    REMOTE_NAME,
)
from fepull.core.errors import FetchError, OperationCancelledError
from fepull.core.filesystem import copy_directory
from fepull.core.git_client import GitClient
from fepull.core.models import PackageInfo, PackageSource
from fepull.core.retry import retry
from fepull.core.transport import configure_transport
from fepull.core.workspace import WorkspaceAllocator

GitFactory = Callable[..., GitClient]


def sparse_pattern(source: PackageSource, package_name: Optional[str] = None) -> str:
    """Sparse-checkout pattern for a whole packages directory or one package in it."""
    if package_name:
        return f"{source.packages_dir}/{package_name}/"
    return f"{source.packages_dir}/"


def read_description(package_dir: Path) -> Optional[str]:
    """Best-effort ``description`` from the package manifest; None when unavailable."""
    try:
        manifest = json.loads((package_dir / MANIFEST_FILE).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    description = manifest.get("description") if isinstance(manifest, dict) else None
    return description if isinstance(description, str) else None


def scan_packages(packages_path: Path) -> List[PackageInfo]:
    """
    Describe every immediate subdirectory of ``packages_path``.

    A missing or unreadable directory yields an empty list.
    """
    try:
        children = sorted(p for p in packages_path.iterdir() if p.is_dir())
    except OSError as e:
        logger.debug(f"No packages readable at {packages_path}: {e}")
        return []

    return [
        PackageInfo(name=child.name, path=str(child), description=read_description(child))
        for child in children
    ]


class SparseSourceFetcher:
    """
    Fetches packages out of remote repositories with sparse, shallow checkouts.

    The collaborators are injectable so tests can swap git for a fake and
    avoid real backoff delays.
    """

    def __init__(
        self,
        allocator: Optional[WorkspaceAllocator] = None,
        git_factory: GitFactory = GitClient,
        cancel_token: Optional[CancellationToken] = None,
        git_timeout: float = DEFAULT_GIT_TIMEOUT,
        fetch_attempts: int = DEFAULT_FETCH_ATTEMPTS,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        sleep: Optional[Callable[[float], Any]] = None,
    ):
        self.allocator = allocator or WorkspaceAllocator()
        self.git_factory = git_factory
        self.cancel_token = cancel_token
        self.git_timeout = git_timeout
        self.fetch_attempts = fetch_attempts
        self.retry_base_delay = retry_base_delay
        self._sleep = sleep

    def _make_git(self, base_dir: Path) -> GitClient:
        return self.git_factory(base_dir, timeout=self.git_timeout, cancel_token=self.cancel_token)

    async def _fetch(self, git: GitClient, source: PackageSource) -> None:
        retry_kwargs = {"max_attempts": self.fetch_attempts, "base_delay": self.retry_base_delay}
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep
        try:
            await retry(lambda: git.fetch(REMOTE_NAME, depth=FETCH_DEPTH), **retry_kwargs)
        except OperationCancelledError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch repository {source.url}: {e}") from e

    @asynccontextmanager
    async def checkout(
        self, source: PackageSource, package_name: Optional[str] = None
    ) -> AsyncIterator[Path]:
        """
        Run the fetch pipeline and yield the checked-out subtree.

        Args:
            source: Repository and packages directory to fetch
            package_name: Narrow the sparse checkout to a single package

        Yields:
            Path: ``{workspace}/{packages_dir}`` or ``{workspace}/{packages_dir}/{package_name}``;
            the path may not exist when the remote lacks it

        Raises:
            FetchError: the fetch failed on every attempt
            BranchResolutionError: no branch could be checked out
            GitCommandError: a local git step failed
        """
        async with self.allocator.workspace() as temp_dir:
            git = self._make_git(temp_dir)
            pattern = sparse_pattern(source, package_name)
            logger.info(f"Fetching {source.url} ({pattern})")

            await git.init()
            await git.add_remote(REMOTE_NAME, source.url)
            await git.set_config("core.sparseCheckout", "true")
            sparse_file = temp_dir / ".git" / "info" / "sparse-checkout"
            sparse_file.parent.mkdir(parents=True, exist_ok=True)
            sparse_file.write_text(f"{pattern}\n", encoding="utf-8")
            await configure_transport(git)

            await self._fetch(git, source)
            await resolve_and_checkout(git)

            subtree = temp_dir / source.packages_dir
            if package_name:
                subtree = subtree / package_name
            yield subtree

    async def list_packages(self, source: PackageSource) -> List[PackageInfo]:
        """
        List the packages available in ``source``.

        ``path`` values point into the temporary workspace, which is removed
        before this returns; they identify the package within the source.
        """
        async with self.checkout(source) as packages_path:
            packages = scan_packages(packages_path)
        logger.info(f"Found {len(packages)} package(s) in {source.url}")
        return packages

    async def download_package(
        self, source: PackageSource, package_name: str, target_dir: Union[str, Path]
    ) -> None:
        """Materialize a single package into ``target_dir``."""
        async with self.checkout(source, package_name) as package_path:
            copy_directory(package_path, target_dir)
        logger.info(f"Downloaded {package_name} from {source.url} to {target_dir}")

    async def download_source(self, source: PackageSource, target_dir: Union[str, Path]) -> None:
        """Materialize the whole packages directory into ``target_dir``."""
        async with self.checkout(source) as packages_path:
            copy_directory(packages_path, target_dir)
        logger.info(f"Downloaded {source.packages_dir} from {source.url} to {target_dir}")
