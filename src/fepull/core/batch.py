#!/usr/bin/env python3
"""
Batch Downloader Module

Installs many PackageEntry requests at once. Entries that share a source
(same URL and packages directory) are grouped so each source is fetched
exactly once; the shared checkout is then copied to every entry's target.

Failures never abort the batch: a failed fetch marks every entry of its group
as failed, a failed copy marks only its own entry.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Links to documentation:
- asyncio synchronization primitives: https://docs.python.org/3/library/asyncio-sync.html

Sample input:
    results = await install_many(entries, concurrency=4)

Expected output:
    [DownloadResult(name='button', success=True, error=None),
     DownloadResult(name='modal', success=False, error='Failed to fetch repository ...')]
"""

import asyncio
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from fepull.core.constants import DEFAULT_CONCURRENCY
from fepull.core.errors import FepullError, OperationCancelledError
from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.filesystem import copy_directory
from fepull.core.models import DownloadResult, PackageEntry


def group_entries(entries: List[PackageEntry]) -> Dict[str, List[PackageEntry]]:
    """Partition entries by ``source.key``, keeping first-seen order."""
    groups: Dict[str, List[PackageEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.source.key, []).append(entry)
    return groups


async def _copy_entry(subtree: Path, entry: PackageEntry) -> DownloadResult:
    src = subtree / entry.package if entry.package else subtree
    try:
        await asyncio.to_thread(copy_directory, src, entry.target)
    except Exception as e:
        logger.error(f"Copy failed for {entry.name} -> {entry.target}: {e}")
        return DownloadResult(name=entry.name, success=False, error=str(e))
    logger.success(f"{entry.name} installed to {entry.target}")
    return DownloadResult(name=entry.name, success=True)


async def _install_group(
    fetcher: SparseSourceFetcher, group: List[PackageEntry]
) -> List[DownloadResult]:
    source = group[0].source
    try:
        async with fetcher.checkout(source) as subtree:
            return list(await asyncio.gather(*(_copy_entry(subtree, e) for e in group)))
    except OperationCancelledError:
        raise
    except FepullError as e:
        logger.error(f"Source {source.url} ({source.packages_dir}) failed: {e}")
        return [DownloadResult(name=entry.name, success=False, error=str(e)) for entry in group]


async def install_many(
    entries: List[PackageEntry],
    fetcher: Optional[SparseSourceFetcher] = None,
    concurrency: Optional[int] = None,
) -> List[DownloadResult]:
    """
    Download every entry, fetching each distinct source once.

    Args:
        entries: Install requests
        fetcher: Pipeline to use; a default SparseSourceFetcher when omitted
        concurrency: Maximum number of groups fetched at the same time

    Returns:
        List[DownloadResult]: One result per entry, grouped by source

    Raises:
        OperationCancelledError: the run was cancelled
        OSError: a temporary workspace could not be created
    """
    fetcher = fetcher or SparseSourceFetcher()
    limit = DEFAULT_CONCURRENCY if concurrency is None else concurrency
    if limit < 1:
        raise ValueError(f"concurrency must be at least 1, got {limit}")

    groups = group_entries(entries)
    logger.info(f"Installing {len(entries)} package(s) from {len(groups)} source(s)")
    semaphore = asyncio.Semaphore(limit)

    async def run_group(group: List[PackageEntry]) -> List[DownloadResult]:
        async with semaphore:
            return await _install_group(fetcher, group)

    group_results = await asyncio.gather(*(run_group(g) for g in groups.values()))
    return [result for results in group_results for result in results]
