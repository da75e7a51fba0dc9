"""Command-line interface for fepull.

This module provides a Typer-based CLI for fepull, allowing users to create a
configuration file, install the configured packages, list the packages of a
source and pull a single package.

Links to third-party package documentation:
- Typer: https://typer.tiangolo.com/
- Rich: https://rich.readthedocs.io/en/latest/

Sample input:
    $ fepull init
    $ fepull install
    $ fepull list https://github.com/org/ui-kit --packages-dir packages
    $ fepull pull https://github.com/org/ui-kit button ./src/components/button

Expected output:
    ✅ Created fepull.config.yml
    ✅ button installed successfully
    (table of available packages)
    ✅ Pulled button into ./src/components/button
"""

import asyncio
import contextlib
import signal
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.prompt import Confirm

from fepull import __version__
from fepull.config import CONFIG, validate_config
from fepull.core.cancellation import CancellationToken
from fepull.core.config_file import config_exists, init_config, load_config
from fepull.core.constants import CONFIG_FILE
from fepull.core.errors import FepullError, OperationCancelledError
from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.installer import plan_install, run_install
from fepull.core.models import PackageEntry, PackageSource
from fepull.core.workspace import WorkspaceAllocator
from fepull.utils.log_utils import setup_logger

from .formatters import (
    console,
    get_spinner,
    print_error,
    print_info,
    print_install_results,
    print_install_summary,
    print_packages_table,
    print_success,
    print_warning,
)
from .validators import (
    validate_git_installed,
    validate_git_url,
    validate_package_name,
    validate_packages_dir,
)

T = TypeVar("T")

# Create Typer app
app = typer.Typer(
    name="fepull",
    help="Pull packages out of remote git repositories with sparse checkout",
    rich_markup_mode="rich",
)


def build_fetcher(token: CancellationToken, allocator: WorkspaceAllocator) -> SparseSourceFetcher:
    """Fetcher configured from the runtime settings."""
    return SparseSourceFetcher(
        allocator=allocator,
        cancel_token=token,
        git_timeout=CONFIG["git"]["timeout"],
        fetch_attempts=CONFIG["fetch"]["attempts"],
        retry_base_delay=CONFIG["fetch"]["retry_base_delay"],
    )


def run_pipeline(operation: Callable[[SparseSourceFetcher], Awaitable[T]]) -> T:
    """
    Run an async operation with SIGINT/SIGTERM wired to a CancellationToken.

    A signal cancels in-flight git calls; the operation then unwinds normally
    and every temporary workspace is removed before returning.
    """
    allocator = WorkspaceAllocator(root=CONFIG["workspace"]["root"])

    async def runner() -> T:
        token = CancellationToken()
        loop = asyncio.get_running_loop()
        installed = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Not available on every platform (e.g. Windows event loops)
            with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                loop.add_signal_handler(sig, token.cancel, f"{sig.name} received")
                installed.append(sig)
        try:
            return await operation(build_fetcher(token, allocator))
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)

    try:
        return asyncio.run(runner())
    finally:
        allocator.release_all()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"fepull v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def common(
    ctx: typer.Context,
    log_level: str = typer.Option(
        CONFIG["logging"]["level"],
        "--log-level",
        "-l",
        help="Set the logging level (DEBUG, INFO, WARNING, ERROR)",
        envvar="FEPULL_LOG_LEVEL",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version number",
    ),
) -> None:
    """Main callback to configure logging for the CLI."""
    setup_logger(log_level, CONFIG["logging"]["file"])
    if not validate_config():
        print_error("Invalid FEPULL_* settings, see the log output above")
        raise typer.Exit(1)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command("init")
def init_command(
    config_path: Path = typer.Option(
        Path(CONFIG_FILE), "--config", "-c", help="Configuration file to create"
    ),
) -> None:
    """Initialize the configuration file.

    Examples:
        [bold]$ fepull init[/bold]
    """
    try:
        created = init_config(config_path)
    except FepullError as e:
        print_error(f"Failed to create configuration file: {e}")
        raise typer.Exit(1)

    if not created:
        print_warning("Configuration file already exists.")
        console.print(f"[dim]Remove {config_path} to regenerate.[/]")
        return

    print_success(f"Created {config_path}")
    console.print("\n[cyan]Next steps:[/]")
    console.print(f"[dim]  1. Edit {config_path} to configure your package entries[/]")
    console.print('[dim]  2. Run "fepull install" to install packages[/]')


def _choose_overwrites(existing: List[PackageEntry], yes: bool, skip_existing: bool) -> List[PackageEntry]:
    if not existing:
        return []
    print_warning(f"{len(existing)} package(s) already exist locally")
    if skip_existing:
        return []
    if yes:
        return list(existing)
    return [
        entry for entry in existing
        if Confirm.ask(f"Overwrite [cyan]{entry.name}[/] at {entry.target}?", default=False)
    ]


@app.command("install")
def install_command(
    config_path: Path = typer.Option(
        Path(CONFIG_FILE), "--config", "-c", help="Configuration file to read"
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Overwrite existing targets without asking"
    ),
    skip_existing: bool = typer.Option(
        False, "--skip-existing", "-s", help="Never overwrite existing targets"
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-j",
        min=1,
        help="Number of sources fetched in parallel",
    ),
) -> None:
    """Install the packages listed in the configuration file.

    Examples:
        [bold]$ fepull install[/bold]

        [bold]$ fepull install --yes --concurrency 8[/bold]
    """
    if not config_exists(config_path):
        print_error('No configuration file found. Run "fepull init" first.')
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
    except FepullError as e:
        print_error(f"Failed to read configuration file: {e}")
        raise typer.Exit(1)

    if not config.packages:
        print_warning('No packages configured. Add package entries to the configuration file.')
        return

    validate_git_installed()

    plan = plan_install(config.packages)
    overwrite = _choose_overwrites(plan.existing, yes, skip_existing)
    total = len(plan.new) + len(overwrite)
    if total == 0:
        print_warning("No packages to install.")
        return

    print_info(f"Installing {total} package(s)...")
    try:
        with get_spinner(f"Downloading {total} package(s)...") as progress:
            progress.add_task("download", total=None)
            report = run_pipeline(
                lambda fetcher: run_install(
                    plan,
                    overwrite,
                    fetcher=fetcher,
                    concurrency=concurrency or CONFIG["fetch"]["concurrency"],
                )
            )
    except OperationCancelledError:
        print_warning("Operation cancelled")
        raise typer.Exit(130)
    except (FepullError, OSError) as e:
        print_error(f"Failed to download packages: {e}")
        raise typer.Exit(1)

    print_install_results(report.results)
    print_install_summary(report)
    if report.failed:
        raise typer.Exit(1)


@app.command("list")
def list_command(
    url: str = typer.Argument(
        ...,
        callback=validate_git_url,
        help="URL of the Git repository holding the packages",
    ),
    packages_dir: str = typer.Option(
        "packages",
        "--packages-dir",
        "-p",
        callback=validate_packages_dir,
        help="Directory inside the repository that holds the packages",
    ),
) -> None:
    """List the packages available in a source.

    Examples:
        [bold]$ fepull list https://github.com/org/ui-kit[/bold]

        [bold]$ fepull list git@github.com:org/ui-kit.git --packages-dir libs[/bold]
    """
    validate_git_installed()
    source = PackageSource(url=url, packages_dir=packages_dir)

    try:
        with get_spinner(f"Fetching {url}") as progress:
            progress.add_task("list", total=None)
            packages = run_pipeline(lambda fetcher: fetcher.list_packages(source))
    except OperationCancelledError:
        print_warning("Operation cancelled")
        raise typer.Exit(130)
    except FepullError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        print_error(f"Could not prepare a workspace for {url}: {e}")
        raise typer.Exit(1)

    print_packages_table(packages, title=f"Packages in {url} ({packages_dir})")


@app.command("pull")
def pull_command(
    url: str = typer.Argument(
        ...,
        callback=validate_git_url,
        help="URL of the Git repository holding the package",
    ),
    package: str = typer.Argument(
        ...,
        callback=validate_package_name,
        help="Name of the package directory to pull",
    ),
    target: Path = typer.Argument(..., help="Local directory receiving the package"),
    packages_dir: str = typer.Option(
        "packages",
        "--packages-dir",
        "-p",
        callback=validate_packages_dir,
        help="Directory inside the repository that holds the packages",
    ),
) -> None:
    """Pull a single package into a local directory.

    Examples:
        [bold]$ fepull pull https://github.com/org/ui-kit button ./src/components/button[/bold]
    """
    validate_git_installed()
    source = PackageSource(url=url, packages_dir=packages_dir)

    try:
        with get_spinner(f"Pulling {package}") as progress:
            progress.add_task("pull", total=None)
            run_pipeline(lambda fetcher: fetcher.download_package(source, package, target))
    except OperationCancelledError:
        print_warning("Operation cancelled")
        raise typer.Exit(130)
    except FepullError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        print_error(f"Package {package} could not be copied to {target}: {e}")
        raise typer.Exit(1)

    print_success(f"Pulled {package} into {target}")


def main() -> None:
    app()
