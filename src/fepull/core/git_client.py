#!/usr/bin/env python3
"""
Async Git Client Module

This module wraps the git command-line client for the fetch pipeline. Each
call runs ``git`` as an asyncio subprocess in the client's working directory,
enforces a block timeout and honours a CancellationToken.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Links to documentation:
- Git: https://git-scm.com/docs
- asyncio subprocesses: https://docs.python.org/3/library/asyncio-subprocess.html

Sample input:
    git = GitClient("/tmp/.fepull-temp-1a2b", timeout=30)
    await git.init()
    await git.add_remote("origin", "https://github.com/org/ui-kit")
    await git.fetch("origin", depth=1)

Expected output:
- Command stdout as a string
- GitCommandError / GitTimeoutError / OperationCancelledError on failure
"""

import asyncio
import contextlib
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from fepull.core.cancellation import CancellationToken
from fepull.core.constants import DEFAULT_GIT_TIMEOUT, FETCH_DEPTH, REMOTE_NAME
from fepull.core.errors import GitCommandError, GitTimeoutError, OperationCancelledError


class GitClient:
    """Runs git commands inside one working directory."""

    def __init__(
        self,
        base_dir: Union[str, Path],
        timeout: float = DEFAULT_GIT_TIMEOUT,
        cancel_token: Optional[CancellationToken] = None,
        executable: str = "git",
    ):
        self.base_dir = Path(base_dir)
        self.timeout = timeout
        self.cancel_token = cancel_token
        self.executable = executable

    async def run(self, *args: str) -> str:
        """
        Run ``git <args>`` and return its stdout.

        Raises:
            GitCommandError: non-zero exit status
            GitTimeoutError: the call exceeded ``self.timeout``
            OperationCancelledError: the cancel token fired first
        """
        if self.cancel_token is not None:
            self.cancel_token.raise_if_cancelled()

        logger.debug(f"git {' '.join(args)} (cwd={self.base_dir})")
        process = await asyncio.create_subprocess_exec(
            self.executable,
            *args,
            cwd=str(self.base_dir),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        communicate = asyncio.ensure_future(process.communicate())
        waiters = {communicate}
        cancel_wait = None
        if self.cancel_token is not None:
            cancel_wait = asyncio.ensure_future(self.cancel_token.wait())
            waiters.add(cancel_wait)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=self.timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            raise
        finally:
            if cancel_wait is not None:
                cancel_wait.cancel()

        if communicate not in done:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await communicate
            if self.cancel_token is not None and self.cancel_token.cancelled:
                raise OperationCancelledError(f"git {' '.join(args)} cancelled")
            raise GitTimeoutError(args, self.timeout)

        stdout, stderr = communicate.result()
        if process.returncode != 0:
            raise GitCommandError(
                args, process.returncode, stderr.decode("utf-8", errors="replace")
            )
        return stdout.decode("utf-8", errors="replace")

    async def init(self) -> None:
        await self.run("init")

    async def add_remote(self, name: str, url: str) -> None:
        await self.run("remote", "add", name, url)

    async def set_config(self, key: str, value: str) -> None:
        await self.run("config", key, value)

    async def fetch(self, remote: str = REMOTE_NAME, depth: int = FETCH_DEPTH) -> None:
        await self.run("fetch", remote, f"--depth={depth}")

    async def checkout(self, ref: str) -> None:
        await self.run("checkout", ref)

    async def remote_branches(self) -> List[str]:
        """Names listed by ``git branch -r``, symbolic ``a -> b`` lines reduced to ``a``."""
        output = await self.run("branch", "-r")
        branches = []
        for line in output.splitlines():
            name = line.strip().split(" -> ")[0]
            if name:
                branches.append(name)
        return branches
