"""
Package models — Cargo metadata and the resolved binding crate.

``CargoMetadata`` mirrors the subset of ``cargo metadata --format-version 1``
output that the locator consumes. ``PackageIdentity`` is what the rest
of the pipeline knows about the binding crate.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# SemVer 2.0: MAJOR.MINOR.PATCH[-pre][+build], no leading zeros
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


class SemanticVersion(BaseModel):
    """A parsed semantic version."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int
    patch: int
    pre: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse a version string.

        Raises:
            ValueError: If *text* is not a valid semantic version.
        """
        match = _SEMVER_RE.match(text.strip())
        if not match:
            raise ValueError(f"Invalid semantic version: {text!r}")
        major, minor, patch, pre, build = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            pre=pre or "",
            build=build or "",
        )

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += f"-{self.pre}"
        if self.build:
            text += f"+{self.build}"
        return text


class CargoPackage(BaseModel):
    """One entry of the ``packages`` array."""

    name: str
    version: str | None = None
    id: str = ""
    manifest_path: str = ""

    @property
    def directory(self) -> Path:
        """Directory holding the package's Cargo.toml."""
        return Path(self.manifest_path).parent


class CargoMetadata(BaseModel):
    """Workspace metadata as reported by Cargo."""

    packages: list[CargoPackage] = Field(default_factory=list)
    workspace_members: list[str] = Field(default_factory=list)
    workspace_root: str = ""

    def members(self) -> list[CargoPackage]:
        """Packages that belong to the workspace, in metadata order."""
        ids = set(self.workspace_members)
        return [p for p in self.packages if p.id in ids]

    def find_by_name(self, name: str) -> CargoPackage | None:
        """Look up a package by name, preferring workspace members."""
        for pkg in self.members():
            if pkg.name == name:
                return pkg
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None

    def find_by_manifest(self, manifest: Path) -> CargoPackage | None:
        """Look up the package declared by a given Cargo.toml."""
        target = manifest.resolve()
        for pkg in self.packages:
            if pkg.manifest_path and Path(pkg.manifest_path).resolve() == target:
                return pkg
        return None


class PackageIdentity(BaseModel):
    """The binding crate: name, version and where it lives."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: SemanticVersion
    root_directory: Path


class LocatedPackage(BaseModel):
    """Everything the locator hands downstream."""

    identity: PackageIdentity
    metadata: CargoMetadata
    metadata_json: str
    lockfile: Path | None = None
    root_fallback: bool = False

    @property
    def name(self) -> str:
        return self.identity.name
