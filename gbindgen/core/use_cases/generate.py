"""
Generate use case — the full pipeline from crate path to header.

    locate → configure → compose version macros → generate → write

Every stage either advances or raises a GbindgenError; the result
records how far the run got and which exit code it maps to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from gbindgen.adapters.base import BindingGenerator
from gbindgen.adapters.cargo import CargoAdapter
from gbindgen.core.config.loader import load_config_from_root
from gbindgen.core.errors import GbindgenError
from gbindgen.core.models.package import LocatedPackage
from gbindgen.core.services.generation import build_settings, generate_bindings
from gbindgen.core.services.locator import locate_package
from gbindgen.core.services.output import WriteOutcome, write_bindings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_DRIFT = 2


@dataclass
class GenerateResult:
    """Outcome of one generation run."""

    input_path: Path
    stage: str = "start"
    package: LocatedPackage | None = None
    outcome: WriteOutcome | None = None
    error: GbindgenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def drift(self) -> bool:
        return self.outcome is not None and self.outcome.drift

    @property
    def exit_code(self) -> int:
        if self.error is not None:
            return EXIT_FAILED
        if self.drift:
            return EXIT_DRIFT
        return EXIT_OK

    def to_dict(self) -> dict:
        return {
            "input": str(self.input_path),
            "stage": self.stage,
            "crate": self.package.name if self.package else None,
            "error": str(self.error) if self.error else None,
            "output": self.outcome.to_dict() if self.outcome else None,
            "exit_code": self.exit_code,
        }


def run_generate(
    input_path: Path,
    *,
    output: Path | None = None,
    verify: bool = False,
    lockfile: Path | None = None,
    crate: str | None = None,
    clean: bool = False,
    metadata_file: Path | None = None,
    generator: BindingGenerator | None = None,
    cargo: CargoAdapter | None = None,
    stream: TextIO | None = None,
) -> GenerateResult:
    """Run the whole pipeline for one crate.

    Errors do not escape: they are stored on the result together with
    the stage that failed.
    """
    result = GenerateResult(input_path=input_path)

    try:
        result.stage = "locating"
        package = locate_package(
            input_path,
            lockfile=lockfile,
            crate=crate,
            clean=clean,
            metadata_file=metadata_file,
            cargo=cargo,
        )
        result.package = package

        result.stage = "configuring"
        config = load_config_from_root(package.identity.root_directory)

        result.stage = "composing"
        settings = build_settings(package.identity, config)

        result.stage = "generating"
        artifact = generate_bindings(package, settings, generator)

        result.stage = "writing"
        result.outcome = write_bindings(artifact, output, verify=verify, stream=stream)
    except GbindgenError as e:
        logger.debug("Pipeline failed while %s: %s", result.stage, e)
        result.error = e
        return result

    result.stage = "written"
    return result
