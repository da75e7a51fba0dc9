#!/usr/bin/env python3
"""
Unit tests for core/models.py
"""

import pytest
from pydantic import ValidationError

from fepull.core.models import PackageEntry, PackageSource


class TestPackageSource:
    """Test cases for PackageSource validation"""

    def test_alias_and_field_name(self):
        by_alias = PackageSource(url="https://example.com/r.git", packagesDir="packages")
        by_name = PackageSource(url="https://example.com/r.git", packages_dir="packages")

        assert by_alias == by_name
        assert by_alias.model_dump(by_alias=True) == {
            "url": "https://example.com/r.git",
            "packagesDir": "packages",
        }

    def test_normalization(self):
        source = PackageSource(url="  https://example.com/r.git ", packages_dir="/src/packages/")

        assert source.url == "https://example.com/r.git"
        assert source.packages_dir == "src/packages"

    def test_key(self):
        source = PackageSource(url="https://example.com/r.git", packages_dir="packages")

        assert source.key == "https://example.com/r.git\0packages"

    @pytest.mark.parametrize("packages_dir", ["", "  ", "/", "../outside", "a/../b"])
    def test_invalid_packages_dir(self, packages_dir):
        with pytest.raises(ValidationError):
            PackageSource(url="https://example.com/r.git", packages_dir=packages_dir)

    def test_blank_url(self):
        with pytest.raises(ValidationError):
            PackageSource(url=" ", packages_dir="packages")

    def test_frozen(self):
        source = PackageSource(url="https://example.com/r.git", packages_dir="packages")

        with pytest.raises(ValidationError):
            source.url = "https://example.com/other.git"


class TestPackageEntry:
    def _source(self):
        return PackageSource(url="https://example.com/r.git", packages_dir="packages")

    def test_package_optional(self):
        entry = PackageEntry(name="all", source=self._source(), target="./vendor")

        assert entry.package is None
        assert entry.description is None

    @pytest.mark.parametrize("package", ["a/b", "..", ".", ""])
    def test_invalid_package(self, package):
        with pytest.raises(ValidationError):
            PackageEntry(name="x", source=self._source(), target="./x", package=package)

    def test_blank_target(self):
        with pytest.raises(ValidationError):
            PackageEntry(name="x", source=self._source(), target="  ")

    @pytest.mark.parametrize("field", ["name", "target"])
    def test_nul_rejected(self, field):
        values = {"name": "x", "source": self._source(), "target": "./x"}
        values[field] = "bad\0value"

        with pytest.raises(ValidationError):
            PackageEntry(**values)
