"""
fepull

Pull named packages (subdirectories) out of remote git repositories into local
target directories, fetching only the requested subtree with sparse, shallow
checkouts.

This package follows a two-layer architecture:

1. Core Layer: the fetch pipeline and batch downloader
2. Presentation Layer: Typer CLI with rich formatting

Usage:
    # Direct API usage (Core Layer)
    from fepull.core import SparseSourceFetcher, PackageSource
    packages = await SparseSourceFetcher().list_packages(
        PackageSource(url="https://github.com/org/ui-kit", packagesDir="packages")
    )

    # CLI usage (Presentation Layer)
    # fepull init
    # fepull install
"""

__version__ = "0.2.0"

from fepull.core import (
    PackageSource,
    PackageEntry,
    PackageInfo,
    DownloadResult,
    SparseSourceFetcher,
    install_many,
)

__all__ = [
    'PackageSource',
    'PackageEntry',
    'PackageInfo',
    'DownloadResult',
    'SparseSourceFetcher',
    'install_many',
    '__version__',
]
