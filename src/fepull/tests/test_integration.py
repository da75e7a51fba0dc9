#!/usr/bin/env python3
"""
End-to-end tests against a real local git repository served over file://.

Skipped when git is not installed.
"""

import json
import shutil
import subprocess

import pytest

from fepull.core.batch import install_many
from fepull.core.fetcher import SparseSourceFetcher
from fepull.core.models import PackageEntry, PackageSource
from fepull.core.workspace import WorkspaceAllocator
from fepull.tests.fakes import leftover_workspaces

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(cwd, *args):
    subprocess.run(
        [
            "git",
            "-c", "user.name=fepull",
            "-c", "user.email=fepull@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def origin(tmp_path):
    """A repository with two packages on a `trunk` branch."""
    repo = tmp_path / "origin"
    (repo / "packages" / "button").mkdir(parents=True)
    (repo / "packages" / "card").mkdir(parents=True)
    (repo / "packages" / "button" / "package.json").write_text(
        json.dumps({"name": "button", "description": "A button"})
    )
    (repo / "packages" / "button" / "index.js").write_text("export const Button = 1;\n")
    (repo / "packages" / "card" / "index.js").write_text("export const Card = 1;\n")
    (repo / "README.md").write_text("# origin\n")
    git(repo, "init")
    git(repo, "checkout", "-b", "trunk")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "initial")
    return repo


@pytest.fixture
def source(origin):
    return PackageSource(url=origin.as_uri(), packages_dir="packages")


@pytest.fixture
def fetcher(tmp_path):
    return SparseSourceFetcher(allocator=WorkspaceAllocator(root=tmp_path / "work"))


class TestRealGit:
    """Test cases running the whole pipeline with the git binary"""

    @pytest.mark.asyncio
    async def test_list_packages(self, fetcher, source, tmp_path):
        packages = await fetcher.list_packages(source)

        assert [p.name for p in packages] == ["button", "card"]
        assert packages[0].description == "A button"
        assert leftover_workspaces(tmp_path / "work") == []

    @pytest.mark.asyncio
    async def test_download_package(self, fetcher, source, tmp_path):
        target = tmp_path / "out" / "card"

        await fetcher.download_package(source, "card", target)

        assert (target / "index.js").read_text() == "export const Card = 1;\n"
        assert not (tmp_path / "out" / "README.md").exists()

    @pytest.mark.asyncio
    async def test_install_many(self, fetcher, source, tmp_path):
        entries = [
            PackageEntry(name="button", source=source, target=str(tmp_path / "b"), package="button"),
            PackageEntry(name="all", source=source, target=str(tmp_path / "all")),
        ]

        results = await install_many(entries, fetcher=fetcher)

        assert all(r.success for r in results), results
        assert (tmp_path / "b" / "package.json").is_file()
        assert sorted(p.name for p in (tmp_path / "all").iterdir()) == ["button", "card"]
