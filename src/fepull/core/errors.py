"""
Exception hierarchy for the fepull Core Layer.

Every failure raised by the pipeline derives from FepullError so callers
(the batch downloader, the CLI) can catch pipeline failures without
catching programming errors.
"""

from typing import Optional, Sequence


class FepullError(Exception):
    """Base exception for fepull errors."""

    pass


class GitCommandError(FepullError):
    """Raised when a git subprocess exits with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(self.command)} failed: {detail}")


class GitTimeoutError(GitCommandError):
    """Raised when a git subprocess exceeds its block timeout."""

    def __init__(self, args: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(args, -1, f"timed out after {timeout:g}s")


class FetchError(FepullError):
    """Raised when fetching a remote failed on every attempt."""

    pass


class BranchResolutionError(FepullError):
    """Raised when no branch could be checked out after a fetch."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        self.last_error = last_error
        super().__init__(message)


class ConfigError(FepullError):
    """Raised when the configuration file is invalid or cannot be written."""

    pass


class OperationCancelledError(FepullError):
    """Raised at a suspension point once cancellation was requested."""

    pass
