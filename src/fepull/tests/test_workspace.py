#!/usr/bin/env python3
"""
Unit tests for core/workspace.py
"""

import shutil

import pytest

from fepull.core.constants import WORKSPACE_PREFIX
from fepull.core.workspace import WorkspaceAllocator


class TestWorkspaceAllocator:
    """Test cases for temporary workspace allocation"""

    def test_allocate_unique_names(self, tmp_path):
        allocator = WorkspaceAllocator(root=tmp_path)

        first = allocator.allocate()
        second = allocator.allocate()

        assert first != second
        assert first.is_dir() and second.is_dir()
        assert first.parent == tmp_path
        assert first.name.startswith(WORKSPACE_PREFIX)
        assert allocator.open_workspaces == sorted([first, second])

    def test_release_removes_directory(self, tmp_path):
        allocator = WorkspaceAllocator(root=tmp_path)
        path = allocator.allocate()
        (path / "file.txt").write_text("data")

        allocator.release(path)

        assert not path.exists()
        assert allocator.open_workspaces == []

    def test_release_missing_directory(self, tmp_path):
        """Test that releasing twice is harmless"""
        allocator = WorkspaceAllocator(root=tmp_path)
        path = allocator.allocate()

        allocator.release(path)
        allocator.release(path)

        assert not path.exists()

    def test_release_swallows_errors(self, tmp_path, monkeypatch):
        """Test that a failing removal is logged, not raised"""
        allocator = WorkspaceAllocator(root=tmp_path)
        path = allocator.allocate()

        def fail(_path):
            raise PermissionError("busy")

        monkeypatch.setattr(shutil, "rmtree", fail)
        allocator.release(path)

        assert allocator.open_workspaces == []

    def test_release_all(self, tmp_path):
        allocator = WorkspaceAllocator(root=tmp_path)
        paths = [allocator.allocate() for _ in range(3)]

        allocator.release_all()

        assert not any(p.exists() for p in paths)
        assert allocator.open_workspaces == []

    def test_root_created_on_demand(self, tmp_path):
        allocator = WorkspaceAllocator(root=tmp_path / "nested" / "root")

        path = allocator.allocate()

        assert path.is_dir()

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert WorkspaceAllocator().root == tmp_path

    @pytest.mark.asyncio
    async def test_context_manager_cleans_up_on_error(self, tmp_path):
        """Test that the workspace is removed when the block raises"""
        allocator = WorkspaceAllocator(root=tmp_path)

        with pytest.raises(RuntimeError):
            async with allocator.workspace() as path:
                (path / "partial").mkdir()
                raise RuntimeError("boom")

        assert not path.exists()
        assert allocator.open_workspaces == []
