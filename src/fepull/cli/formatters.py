"""Rich-based formatters for CLI output in fepull.

This module provides formatted console output for the fepull CLI using the Rich library.
It includes functions for standard output, errors, warnings, package tables and the
installation summary.

Links to third-party package documentation:
- Rich: https://rich.readthedocs.io/en/latest/
- Rich Tables: https://rich.readthedocs.io/en/latest/tables.html
- Rich Console: https://rich.readthedocs.io/en/latest/console.html

Sample input:
    print_success("Created fepull.config.yml")
    print_packages_table([PackageInfo(name="button", path="...", description="A button")])

Expected output:
    ✅ Created fepull.config.yml

    ┏━━━━━━━━┳━━━━━━━━━━━━━┓
    ┃ Name   ┃ Description ┃
    ┡━━━━━━━━╇━━━━━━━━━━━━━┩
    │ button │ A button    │
    └────────┴─────────────┘
"""

from typing import List

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from fepull.core.installer import InstallReport
from fepull.core.models import DownloadResult, PackageInfo

# Create console instance
console = Console()


def print_success(message: str) -> None:
    """Print a success message to the console with a green checkmark.

    Args:
        message: The success message to display
    """
    console.print(f"✅ [bold green]{message}[/]")
    logger.success(message)


def print_error(message: str) -> None:
    """Print an error message to the console with a red X.

    Args:
        message: The error message to display
    """
    console.print(f"❌ [bold red]Error:[/] {message}")
    logger.error(message)


def print_warning(message: str) -> None:
    """Print a warning message to the console with a yellow warning sign.

    Args:
        message: The warning message to display
    """
    console.print(f"⚠️ [bold yellow]Warning:[/] {message}")
    logger.warning(message)


def print_info(message: str) -> None:
    """Print an info message to the console with a blue info sign."""
    console.print(f"ℹ️ [bold blue]Info:[/] {message}")
    logger.info(message)


def print_packages_table(packages: List[PackageInfo], title: str = "Available Packages") -> None:
    """Print a table of packages with name and description.

    Args:
        packages: Packages discovered in a source
        title: Table title
    """
    if not packages:
        print_warning("No packages found")
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="green")

    for package in packages:
        table.add_row(package.name, package.description or "")

    console.print(table)


def print_install_results(results: List[DownloadResult]) -> None:
    """Print one line per package result."""
    for result in results:
        if result.success:
            console.print(f"  ✅ [green]{result.name} installed successfully[/]")
        else:
            console.print(f"  ❌ [red]Failed to install {result.name}[/]")
            if result.error:
                console.print(Text(f"     Error: {result.error}", style="red"))


def print_install_summary(report: InstallReport) -> None:
    """Print the installation summary panel.

    Args:
        report: Outcome of an install run
    """
    installed_count = len(report.results) - len(report.failed)
    lines = [f"[bold green]✅ {installed_count} package(s) installed successfully[/]"]
    if report.skipped:
        lines.append(f"[bold yellow]⏭️  {report.skipped} package(s) skipped[/]")
    if report.failed:
        lines.append(f"[bold red]❌ {len(report.failed)} package(s) failed to install[/]")
    if report.installed:
        lines.append("")
        lines.append("[bold blue]📦 Installed packages:[/]")
        for entry in report.installed:
            lines.append(f"   • {entry.name} → {entry.target}")

    console.print(
        Panel(
            Text.from_markup("\n".join(lines)),
            title="Installation Summary",
            border_style="red" if report.failed else "green",
        )
    )


def get_spinner(text: str) -> Progress:
    """Create and return a spinner progress indicator.

    Args:
        text: Text to display next to the spinner

    Returns:
        A Progress object that can be used in a context manager
    """
    return Progress(
        SpinnerColumn(),
        TextColumn(f"[bold blue]{text}[/]"),
        console=console,
        transient=True,
    )
