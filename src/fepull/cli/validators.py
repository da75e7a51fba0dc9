"""Input validators for the fepull CLI.

This module provides validation callbacks for CLI parameters. Each returns
the (possibly normalized) value or raises ``typer.BadParameter`` with a
helpful message.

Links to third-party package documentation:
- Typer: https://typer.tiangolo.com/

Sample input:
    validate_git_url("https://github.com/org/ui-kit")
    validate_packages_dir("packages/")

Expected output:
    'https://github.com/org/ui-kit'
    'packages'
"""

import re
import shutil
from urllib.parse import urlparse

import typer

SSH_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+@[A-Za-z0-9.-]+:[A-Za-z0-9_./~-]+$")
URL_SCHEMES = ("http", "https", "ssh", "git", "file")


def validate_git_url(url: str) -> str:
    """Validate a Git repository URL.

    Args:
        url: The repository URL to validate

    Returns:
        The validated URL

    Raises:
        typer.BadParameter: If the URL is invalid
    """
    url = (url or "").strip()
    if not url:
        raise typer.BadParameter("Repository URL cannot be empty")

    # scp-like SSH syntax (git@github.com:org/repo.git)
    if SSH_PATTERN.match(url):
        return url

    parsed = urlparse(url)
    if parsed.scheme not in URL_SCHEMES:
        raise typer.BadParameter(
            f"Invalid Git URL: {url}. Use https://, ssh://, git://, file:// or user@host:path"
        )
    if parsed.scheme != "file" and not parsed.netloc:
        raise typer.BadParameter(f"Invalid Git URL: {url}. URL must include a host name.")
    return url


def validate_packages_dir(path: str) -> str:
    """Validate a repository-relative packages directory."""
    cleaned = (path or "").strip().strip("/")
    if not cleaned:
        raise typer.BadParameter("Packages directory cannot be empty")
    if ".." in cleaned.split("/"):
        raise typer.BadParameter(f"Packages directory '{path}' cannot contain '..'")
    return cleaned


def validate_package_name(name: str) -> str:
    """Validate a single package directory name."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise typer.BadParameter("Package name cannot be empty")
    if "/" in cleaned or cleaned in (".", ".."):
        raise typer.BadParameter(f"Invalid package name '{name}'")
    return cleaned


def validate_git_installed() -> None:
    """Abort when no git executable is on PATH."""
    if shutil.which("git") is None:
        raise typer.BadParameter("Git is not installed or not found on PATH")
