"""
Package locator — find the binding crate inside a Cargo workspace.

Given a path at or below a crate, resolves the workspace metadata
(from Cargo or a precomputed metadata file), picks the binding crate,
validates its version and works out the directory its gbindgen.toml
lives in.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from gbindgen.adapters.cargo import CargoAdapter
from gbindgen.core.errors import LocationError
from gbindgen.core.models.package import (
    CargoMetadata,
    CargoPackage,
    LocatedPackage,
    PackageIdentity,
    SemanticVersion,
)

logger = logging.getLogger(__name__)

MANIFEST_FILE = "Cargo.toml"
LOCKFILE = "Cargo.lock"


def find_manifest(start: Path) -> Path | None:
    """Search for Cargo.toml at *start*, walking up.

    *start* may be a directory or a file inside the crate. A file named
    Cargo.toml is returned as is.

    Returns:
        Path to Cargo.toml, or None if not found.
    """
    start = start.resolve()
    if start.is_file():
        if start.name == MANIFEST_FILE:
            return start
        start = start.parent

    current = start
    for _ in range(20):  # safety limit
        candidate = current / MANIFEST_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _input_root(input_path: Path) -> Path:
    return input_path.parent if input_path.is_file() else input_path


def _read_metadata_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LocationError(f"Cannot read metadata file {path}: {e}") from e


def _run_cargo(cargo: CargoAdapter, manifest: Path) -> str:
    receipt = cargo.metadata(manifest)
    if receipt.failed:
        raise LocationError(f"cargo metadata failed for {manifest}: {receipt.error}")
    logger.info("Resolved metadata for %s in %dms", manifest, receipt.duration_ms)
    return receipt.output


def _parse_metadata(raw: str, source: str) -> CargoMetadata:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LocationError(f"Invalid metadata JSON from {source}: {e}") from e
    if not isinstance(data, dict):
        raise LocationError(f"Expected a JSON object from {source}, got {type(data).__name__}")
    try:
        return CargoMetadata.model_validate(data)
    except ValidationError as e:
        raise LocationError(f"Invalid metadata from {source}: {e}") from e


def _resolve_lockfile(lockfile: Path | None, metadata: CargoMetadata) -> Path | None:
    if lockfile is not None:
        if not lockfile.is_file():
            raise LocationError(f"Lockfile not found: {lockfile}")
        return lockfile.resolve()

    if metadata.workspace_root:
        candidate = Path(metadata.workspace_root) / LOCKFILE
        if candidate.is_file():
            logger.debug("Using lockfile %s", candidate)
            return candidate
    return None


def _member_names(metadata: CargoMetadata) -> str:
    names = [p.name for p in metadata.members()] or [p.name for p in metadata.packages]
    return ", ".join(names) if names else "(none)"


def select_binding_package(
    metadata: CargoMetadata,
    manifest: Path | None,
    crate: str | None = None,
) -> CargoPackage:
    """Pick the package whose bindings are generated.

    An explicit *crate* name wins; otherwise the package declared by
    *manifest* is the binding crate.

    Raises:
        LocationError: If no package matches.
    """
    if crate:
        pkg = metadata.find_by_name(crate)
        if pkg is None:
            raise LocationError(
                f"Crate '{crate}' not found in workspace. Available: {_member_names(metadata)}"
            )
        return pkg

    if manifest is None:
        raise LocationError("No Cargo.toml found; pass --crate to choose the binding crate.")

    pkg = metadata.find_by_manifest(manifest)
    if pkg is None:
        raise LocationError(
            f"{manifest} does not declare a package (virtual workspace?). "
            f"Pass --crate with one of: {_member_names(metadata)}"
        )
    return pkg


def parse_package_version(pkg: CargoPackage) -> SemanticVersion:
    """Parse the package's declared version; failure is fatal."""
    if not pkg.version:
        raise LocationError(f"Crate '{pkg.name}' has no version")
    try:
        return SemanticVersion.parse(pkg.version)
    except ValueError as e:
        raise LocationError(f"Failed to parse version of crate '{pkg.name}': {e}") from e


def locate_package(
    input_path: Path,
    *,
    lockfile: Path | None = None,
    crate: str | None = None,
    clean: bool = False,
    metadata_file: Path | None = None,
    cargo: CargoAdapter | None = None,
) -> LocatedPackage:
    """Resolve the binding crate for *input_path*.

    Args:
        input_path: Crate directory or a file inside it.
        lockfile: Explicit Cargo.lock; otherwise the workspace one is used if present.
        crate: Explicit binding crate name.
        clean: Re-resolve metadata with Cargo even when *metadata_file* is given.
        metadata_file: Precomputed ``cargo metadata`` JSON.
        cargo: Cargo adapter (default: ``CargoAdapter()``).

    Raises:
        LocationError: If the workspace, the crate or its version cannot be resolved.
    """
    if not input_path.exists():
        raise LocationError(f"Input path does not exist: {input_path}")

    manifest = find_manifest(input_path)
    if manifest is not None:
        logger.debug("Found manifest %s", manifest)

    if metadata_file is not None and clean:
        logger.warning("--clean given: ignoring precomputed metadata %s", metadata_file)
        metadata_file = None

    if metadata_file is not None:
        raw = _read_metadata_file(metadata_file)
        source = str(metadata_file)
    else:
        if manifest is None:
            raise LocationError(f"No {MANIFEST_FILE} found at or above {input_path}")
        raw = _run_cargo(cargo or CargoAdapter(), manifest)
        source = "cargo metadata"

    metadata = _parse_metadata(raw, source)
    pkg = select_binding_package(metadata, manifest, crate)
    version = parse_package_version(pkg)

    root = pkg.directory if pkg.manifest_path else None
    fallback = root is None or not root.is_dir()
    if fallback:
        root = _input_root(input_path.resolve())
        logger.warning(
            "Couldn't find the directory of crate '%s'; using %s as its root",
            pkg.name,
            root,
        )

    logger.info("Binding crate: %s %s (%s)", pkg.name, version, root)
    return LocatedPackage(
        identity=PackageIdentity(name=pkg.name, version=version, root_directory=root),
        metadata=metadata,
        metadata_json=raw,
        lockfile=_resolve_lockfile(lockfile, metadata),
        root_fallback=fallback,
    )
