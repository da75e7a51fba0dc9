#!/usr/bin/env python3
"""
Branch Resolver

Shallow, sparse fetches do not reliably expose a default branch name across
hosting providers, so after fetching we try an ordered list of checkout
strategies and stop at the first one that works:

1. remote-qualified common branches (origin/main, origin/master, origin/develop)
2. the first non-HEAD branch reported by ``git branch -r``
3. the common branch names as local branches

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
    ref = await resolve_and_checkout(git)

Expected output:
    'origin/main'
    # or BranchResolutionError("Failed to checkout any branch. Last error: ...")
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from loguru import logger

from fepull.core.constants import COMMON_BRANCHES, REMOTE_NAME
from fepull.core.errors import BranchResolutionError, FepullError, OperationCancelledError
from fepull.core.git_client import GitClient


@dataclass(frozen=True)
class BranchStrategy:
    """One way of getting a branch checked out; ``attempt`` returns the ref used."""

    description: str
    attempt: Callable[[GitClient], Awaitable[str]]


def checkout_ref(ref: str) -> BranchStrategy:
    async def attempt(git: GitClient) -> str:
        await git.checkout(ref)
        return ref

    return BranchStrategy(f"checkout {ref}", attempt)


async def _checkout_first_remote_branch(git: GitClient) -> str:
    branches = [
        b for b in await git.remote_branches()
        if b.startswith(f"{REMOTE_NAME}/") and "HEAD" not in b
    ]
    if not branches:
        raise BranchResolutionError("Remote reports no branches")
    await git.checkout(branches[0])
    return branches[0]


def default_strategies(branches: Sequence[str] = COMMON_BRANCHES) -> List[BranchStrategy]:
    strategies = [checkout_ref(f"{REMOTE_NAME}/{name}") for name in branches]
    strategies.append(BranchStrategy("first remote branch", _checkout_first_remote_branch))
    strategies.extend(checkout_ref(name) for name in branches)
    return strategies


async def resolve_and_checkout(
    git: GitClient,
    strategies: Optional[Sequence[BranchStrategy]] = None,
) -> str:
    """
    Check out a branch of a freshly fetched remote.

    Args:
        git: Client bound to the fetched working copy
        strategies: Ordered strategies; defaults to ``default_strategies()``

    Returns:
        str: The ref that was checked out

    Raises:
        BranchResolutionError: every strategy failed; carries the last error
    """
    last_error: Optional[BaseException] = None
    for strategy in strategies if strategies is not None else default_strategies():
        try:
            ref = await strategy.attempt(git)
        except OperationCancelledError:
            raise
        except FepullError as e:
            logger.debug(f"Branch strategy '{strategy.description}' failed: {e}")
            last_error = e
            continue
        logger.info(f"Checked out {ref}")
        return ref

    raise BranchResolutionError(
        f"Failed to checkout any branch. Last error: {last_error or 'Unknown error'}",
        last_error=last_error,
    )
