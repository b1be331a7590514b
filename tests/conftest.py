"""
Shared test fixtures and configuration.
"""

import json
import textwrap
from pathlib import Path

import pytest

from gbindgen.adapters.mock import MockGenerator


def make_metadata(workspace: Path, packages: list[dict]) -> dict:
    """Build a ``cargo metadata`` document for the given packages.

    Each package dict needs ``name``, ``version`` and ``dir`` (relative
    to *workspace*).
    """
    entries = []
    for pkg in packages:
        manifest = workspace / pkg["dir"] / "Cargo.toml"
        entries.append(
            {
                "name": pkg["name"],
                "version": pkg["version"],
                "id": f"path+file://{manifest.parent}#{pkg['name']}@{pkg['version']}",
                "manifest_path": str(manifest),
                "dependencies": [],
                "targets": [],
            }
        )
    return {
        "packages": entries,
        "workspace_members": [e["id"] for e in entries],
        "workspace_default_members": [e["id"] for e in entries],
        "resolve": None,
        "target_directory": str(workspace / "target"),
        "version": 1,
        "workspace_root": str(workspace),
        "metadata": None,
    }


def write_crate(
    workspace: Path,
    name: str = "mylib",
    version: str = "2.0.5",
    subdir: str = ".",
    config: str | None = 'namespace = "MYLIB"\n',
) -> Path:
    """Create a crate directory with Cargo.toml and optional gbindgen.toml."""
    crate_dir = workspace / subdir
    (crate_dir / "src").mkdir(parents=True, exist_ok=True)
    (crate_dir / "Cargo.toml").write_text(
        textwrap.dedent(f"""\
            [package]
            name = "{name}"
            version = "{version}"
            edition = "2021"
        """)
    )
    (crate_dir / "src" / "lib.rs").write_text("pub fn init() {}\n")
    if config is not None:
        (crate_dir / "gbindgen.toml").write_text(config)
    return crate_dir.resolve()


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    """A single crate ``mylib 2.0.5`` with namespace MYLIB."""
    return write_crate(tmp_path)


@pytest.fixture
def metadata_file(tmp_path: Path, crate: Path) -> Path:
    """Precomputed metadata for the ``crate`` fixture."""
    path = tmp_path / "metadata.json"
    data = make_metadata(crate, [{"name": "mylib", "version": "2.0.5", "dir": "."}])
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def mock_generator() -> MockGenerator:
    return MockGenerator()
