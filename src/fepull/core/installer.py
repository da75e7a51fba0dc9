"""
Install planning on top of the batch downloader.

Splits configured entries into those whose target is free and those whose
target already exists, removes the targets the user chose to overwrite and
runs ``install_many`` on the rest.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from fepull.core.batch import group_entries, install_many
from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.filesystem import directory_exists, remove_directory
from fepull.core.models import DownloadResult, PackageEntry


@dataclass
class InstallPlan:
    new: List[PackageEntry] = field(default_factory=list)
    existing: List[PackageEntry] = field(default_factory=list)


@dataclass
class InstallReport:
    results: List[DownloadResult]
    installed: List[PackageEntry]
    skipped: int

    @property
    def failed(self) -> List[DownloadResult]:
        return [r for r in self.results if not r.success]


def plan_install(entries: List[PackageEntry]) -> InstallPlan:
    plan = InstallPlan()
    for entry in entries:
        (plan.existing if directory_exists(entry.target) else plan.new).append(entry)
    return plan


async def run_install(
    plan: InstallPlan,
    overwrite: List[PackageEntry],
    fetcher: Optional[SparseSourceFetcher] = None,
    concurrency: Optional[int] = None,
) -> InstallReport:
    """
    Install new entries plus the chosen subset of existing ones.

    Targets of overwritten entries are removed before downloading.
    """
    for entry in overwrite:
        remove_directory(entry.target)

    to_install = plan.new + list(overwrite)
    skipped = len(plan.existing) - len(overwrite)
    if not to_install:
        logger.info("Nothing to install")
        return InstallReport(results=[], installed=[], skipped=skipped)

    results = await install_many(to_install, fetcher=fetcher, concurrency=concurrency)
    # install_many reports results in group order
    ordered = [e for group in group_entries(to_install).values() for e in group]
    installed = [e for e, r in zip(ordered, results) if r.success]
    return InstallReport(results=results, installed=installed, skipped=skipped)
