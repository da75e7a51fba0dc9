#!/usr/bin/env python3
"""
Pydantic models for the fepull Core Layer.

This module provides the data models shared by the fetch pipeline, the batch
downloader and the configuration loader.

Links to third-party package documentation:
- Pydantic: https://docs.pydantic.dev/latest/
- Pydantic Aliases: https://docs.pydantic.dev/latest/concepts/alias/

Sample input:
    source = PackageSource(url="https://github.com/org/ui-kit", packagesDir="packages")
    entry = PackageEntry(name="button", source=source, target="./src/components/button")

Expected output:
    source.key
    # 'https://github.com/org/ui-kit\\x00packages'

    entry.model_dump(by_alias=True, exclude_none=True)
    # {'name': 'button', 'source': {'url': ..., 'packagesDir': 'packages'}, 'target': ...}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _check_relative_path(value: str, label: str) -> str:
    cleaned = value.strip().strip("/")
    if not cleaned:
        raise ValueError(f"{label} cannot be empty")
    if ".." in cleaned.split("/"):
        raise ValueError(f"{label} '{value}' cannot contain '..'")
    return cleaned


class PackageSource(BaseModel):
    """A remote repository plus the subdirectory holding its packages."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., description="Repository URL")
    packages_dir: str = Field(
        ..., alias="packagesDir", description="Subdirectory holding installable packages"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject blank repository URLs."""
        v = v.strip()
        if not v:
            raise ValueError("Repository URL cannot be empty")
        return v

    @field_validator("packages_dir")
    @classmethod
    def validate_packages_dir(cls, v: str) -> str:
        """Normalize the packages directory to a clean relative path."""
        return _check_relative_path(v, "packagesDir")

    @property
    def key(self) -> str:
        """Grouping key: entries with the same key share one fetch."""
        return f"{self.url}\0{self.packages_dir}"


class PackageEntry(BaseModel):
    """A named install request: fetch ``source`` and place it at ``target``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Display name of the entry")
    source: PackageSource = Field(..., description="Where the package comes from")
    target: str = Field(..., description="Local directory receiving the files")
    description: Optional[str] = Field(None, description="Free-form description")
    package: Optional[str] = Field(
        None,
        description="Single package inside packagesDir; the whole directory when omitted",
    )

    @field_validator("name", "target")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value cannot be empty")
        if "\0" in v:
            raise ValueError("value cannot contain NUL characters")
        return v.strip()

    @field_validator("package")
    @classmethod
    def validate_package(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        cleaned = _check_relative_path(v, "package")
        if "/" in cleaned or cleaned == ".":
            raise ValueError(f"package '{v}' must be a single directory name")
        return cleaned


class PackageInfo(BaseModel):
    """A package discovered by listing a source's packages directory."""

    name: str
    path: str
    description: Optional[str] = None


class DownloadResult(BaseModel):
    """Outcome of materializing one PackageEntry."""

    name: str
    success: bool
    error: Optional[str] = None


class FepullConfig(BaseModel):
    """Contents of ``fepull.config.yml``."""

    packages: List[PackageEntry] = Field(default_factory=list)
