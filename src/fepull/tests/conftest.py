"""Shared fixtures for the fepull test suite."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.workspace import WorkspaceAllocator
from fepull.tests.fakes import (
    UI_KIT_FILES,
    UI_KIT_URL,
    ConcurrencyProbe,
    FakeGitClient,
    FakeRemote,
)


@pytest.fixture
def remotes() -> Dict[str, FakeRemote]:
    return {UI_KIT_URL: FakeRemote(UI_KIT_FILES)}


@pytest.fixture
def git_clients() -> List[FakeGitClient]:
    return []


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def workspace_root(tmp_path) -> Path:
    return tmp_path / "work"


@pytest.fixture
def make_fetcher(remotes, git_clients, sleeps, workspace_root):
    """Factory for fetchers wired to FakeGitClient and a recording sleep."""

    async def record_sleep(delay: float) -> None:
        sleeps.append(delay)

    def factory(probe: Optional[ConcurrencyProbe] = None, **kwargs) -> SparseSourceFetcher:
        def make_git(base_dir, **git_kwargs):
            client = FakeGitClient(base_dir, remotes=remotes, probe=probe, **git_kwargs)
            git_clients.append(client)
            return client

        kwargs.setdefault("allocator", WorkspaceAllocator(root=workspace_root))
        return SparseSourceFetcher(git_factory=make_git, sleep=record_sleep, **kwargs)

    return factory


@pytest.fixture
def fetcher(make_fetcher) -> SparseSourceFetcher:
    return make_fetcher()
