"""
Core Layer for fepull

This package contains the source-fetch pipeline: sparse, shallow git fetches
into temporary workspaces, branch resolution, and the batch downloader that
fetches each distinct source once. It provides pure functions and classes that
can be used independently of the CLI.

The core layer is designed to be:
1. Independent of UI concerns (no console output, only logging)
2. Fully testable in isolation (git and sleeping are injectable)
3. Focused on business logic only

Usage:
    from fepull.core import install_many, PackageEntry, PackageSource
    source = PackageSource(url="https://github.com/org/ui-kit", packagesDir="packages")
    results = await install_many([PackageEntry(name="ui", source=source, target="./ui")])
"""

# Data models and errors
from fepull.core.models import (
    PackageSource,
    PackageEntry,
    PackageInfo,
    DownloadResult,
    FepullConfig,
)
from fepull.core.errors import (
    FepullError,
    GitCommandError,
    GitTimeoutError,
    FetchError,
    BranchResolutionError,
    ConfigError,
    OperationCancelledError,
)

# Pipeline building blocks
from fepull.core.cancellation import CancellationToken
from fepull.core.git_client import GitClient
from fepull.core.transport import configure_transport
from fepull.core.retry import retry
from fepull.core.branches import resolve_and_checkout, default_strategies
from fepull.core.workspace import WorkspaceAllocator
from fepull.core.filesystem import copy_directory

# Fetching and installing
from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.batch import install_many, group_entries
from fepull.core.installer import plan_install, run_install, InstallPlan, InstallReport

# Configuration file
from fepull.core.config_file import (
    config_exists,
    load_config,
    read_config,
    write_config,
    init_config,
    default_config,
)

__all__ = [
    # Models
    'PackageSource',
    'PackageEntry',
    'PackageInfo',
    'DownloadResult',
    'FepullConfig',

    # Errors
    'FepullError',
    'GitCommandError',
    'GitTimeoutError',
    'FetchError',
    'BranchResolutionError',
    'ConfigError',
    'OperationCancelledError',

    # Pipeline
    'CancellationToken',
    'GitClient',
    'configure_transport',
    'retry',
    'resolve_and_checkout',
    'default_strategies',
    'WorkspaceAllocator',
    'copy_directory',
    'SparseSourceFetcher',

    # Installing
    'install_many',
    'group_entries',
    'plan_install',
    'run_install',
    'InstallPlan',
    'InstallReport',

    # Configuration
    'config_exists',
    'load_config',
    'read_config',
    'write_config',
    'init_config',
    'default_config',
]
