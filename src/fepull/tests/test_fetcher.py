#!/usr/bin/env python3
"""
Unit tests for core/fetcher.py

The pipeline runs against FakeGitClient, so no network or git binary is
needed.
"""

import pytest

from fepull.core.cancellation import CancellationToken
from fepull.core.constants import TRANSPORT_SETTINGS
from fepull.core.errors import (
    BranchResolutionError,
    FetchError,
    GitCommandError,
    OperationCancelledError,
)
from fepull.core.fetcher import read_description, scan_packages, sparse_pattern
from fepull.core.models import PackageSource
from fepull.tests.fakes import UI_KIT_URL, FakeRemote, leftover_workspaces


@pytest.fixture
def ui_kit():
    return PackageSource(url=UI_KIT_URL, packages_dir="packages")


class TestHelpers:
    """Test cases for the fetcher helper functions"""

    def test_sparse_pattern(self, ui_kit):
        assert sparse_pattern(ui_kit) == "packages/"
        assert sparse_pattern(ui_kit, "button") == "packages/button/"

    def test_read_description(self, tmp_path):
        (tmp_path / "ok").mkdir()
        (tmp_path / "ok" / "package.json").write_text('{"description": "Fancy"}')
        (tmp_path / "bad").mkdir()
        (tmp_path / "bad" / "package.json").write_text("{oops")
        (tmp_path / "list").mkdir()
        (tmp_path / "list" / "package.json").write_text("[1, 2]")

        assert read_description(tmp_path / "ok") == "Fancy"
        assert read_description(tmp_path / "bad") is None
        assert read_description(tmp_path / "list") is None
        assert read_description(tmp_path / "missing") is None

    def test_scan_packages_missing_directory(self, tmp_path):
        assert scan_packages(tmp_path / "nope") == []


class TestListPackages:
    """Test cases for listing the packages of a source"""

    @pytest.mark.asyncio
    async def test_lists_subdirectories_with_descriptions(self, fetcher, ui_kit, workspace_root):
        packages = await fetcher.list_packages(ui_kit)

        assert [p.name for p in packages] == ["button", "card", "modal"]
        assert [p.description for p in packages] == ["A button", None, None]
        assert leftover_workspaces(workspace_root) == []

    @pytest.mark.asyncio
    async def test_missing_packages_dir(self, fetcher, workspace_root):
        """Test that an absent packages directory yields an empty list"""
        source = PackageSource(url=UI_KIT_URL, packages_dir="components")

        assert await fetcher.list_packages(source) == []
        assert leftover_workspaces(workspace_root) == []

    @pytest.mark.asyncio
    async def test_pipeline_configuration(self, fetcher, ui_kit, git_clients):
        """Test sparse-checkout, transport settings and shallow fetch"""
        await fetcher.list_packages(ui_kit)

        (git,) = git_clients
        assert git.url == UI_KIT_URL
        assert git.config["core.sparseCheckout"] == "true"
        for key, value in TRANSPORT_SETTINGS.items():
            assert git.config[key] == value
        assert git.checkouts == ["origin/main"]

    @pytest.mark.asyncio
    async def test_git_options_forwarded(self, make_fetcher, ui_kit, git_clients):
        token = CancellationToken()
        fetcher = make_fetcher(cancel_token=token, git_timeout=5)

        await fetcher.list_packages(ui_kit)

        assert git_clients[0].timeout == 5
        assert git_clients[0].cancel_token is token


class TestFetchFailures:
    """Test cases for fetch retries and error wrapping"""

    @pytest.mark.asyncio
    async def test_transient_failures_retried(self, fetcher, ui_kit, remotes, sleeps):
        remotes[UI_KIT_URL].fetch_failures = 2

        packages = await fetcher.list_packages(ui_kit)

        assert len(packages) == 3
        assert remotes[UI_KIT_URL].fetch_calls == 3
        assert sleeps == [1, 2]

    @pytest.mark.asyncio
    async def test_fetch_error_wraps_cause(self, fetcher, workspace_root):
        source = PackageSource(url="https://example.com/missing.git", packages_dir="packages")

        with pytest.raises(FetchError) as exc_info:
            await fetcher.list_packages(source)

        assert str(exc_info.value).startswith(
            "Failed to fetch repository https://example.com/missing.git:"
        )
        assert isinstance(exc_info.value.__cause__, GitCommandError)
        assert leftover_workspaces(workspace_root) == []

    @pytest.mark.asyncio
    async def test_attempts_configurable(self, make_fetcher, ui_kit, remotes, sleeps):
        remotes[UI_KIT_URL].fetch_failures = 5
        fetcher = make_fetcher(fetch_attempts=2, retry_base_delay=0.25)

        with pytest.raises(FetchError):
            await fetcher.list_packages(ui_kit)

        assert remotes[UI_KIT_URL].fetch_calls == 2
        assert sleeps == [0.25]

    @pytest.mark.asyncio
    async def test_no_branch(self, fetcher, remotes, workspace_root):
        remotes["https://example.com/empty.git"] = FakeRemote({}, branches=[])
        source = PackageSource(url="https://example.com/empty.git", packages_dir="packages")

        with pytest.raises(BranchResolutionError):
            await fetcher.list_packages(source)

        assert leftover_workspaces(workspace_root) == []

    @pytest.mark.asyncio
    async def test_cancelled_before_fetch(self, make_fetcher, ui_kit, remotes, workspace_root):
        """Test that cancellation is neither retried nor wrapped"""
        token = CancellationToken()
        token.cancel("test")
        fetcher = make_fetcher(cancel_token=token)

        with pytest.raises(OperationCancelledError):
            await fetcher.list_packages(ui_kit)

        assert remotes[UI_KIT_URL].fetch_calls == 0
        assert leftover_workspaces(workspace_root) == []


class TestDownload:
    """Test cases for materializing packages"""

    @pytest.mark.asyncio
    async def test_download_package(self, fetcher, ui_kit, tmp_path, git_clients):
        target = tmp_path / "components" / "button"

        await fetcher.download_package(ui_kit, "button", target)

        assert (target / "index.js").read_text() == "export const Button = () => null;\n"
        assert (target / "styles" / "button.css").is_file()
        assert git_clients[0].sparse_patterns == ["packages/button/"]
        assert not git_clients[0].base_dir.exists()

    @pytest.mark.asyncio
    async def test_download_package_narrows_checkout(self, fetcher, ui_kit, tmp_path, git_clients):
        """Test that only the requested package is checked out"""
        await fetcher.download_package(ui_kit, "card", tmp_path / "card")

        assert git_clients[0].sparse_patterns == ["packages/card/"]
        assert sorted(p.name for p in (tmp_path / "card").iterdir()) == ["index.js"]

    @pytest.mark.asyncio
    async def test_download_missing_package(self, fetcher, ui_kit, tmp_path, workspace_root):
        target = tmp_path / "ghost"

        with pytest.raises(FileNotFoundError):
            await fetcher.download_package(ui_kit, "ghost", target)

        assert not target.exists()
        assert leftover_workspaces(workspace_root) == []

    @pytest.mark.asyncio
    async def test_download_source(self, fetcher, ui_kit, tmp_path):
        """Test that the whole packages directory is copied, nothing outside it"""
        target = tmp_path / "vendor"

        await fetcher.download_source(ui_kit, target)

        assert sorted(p.name for p in target.iterdir()) == ["NOTES.txt", "button", "card", "modal"]
        assert not (target / "README.md").exists()
        assert not (target / "libs").exists()
