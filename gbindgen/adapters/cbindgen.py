"""
cbindgen adapter — drive a cbindgen-compatible executable.

The generator settings are rendered into a temporary TOML config and the
already-resolved Cargo metadata is written beside it, so the generator
does not resolve the workspace a second time. The header is read from
the generator's stdout.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
import tempfile
import time
from pathlib import Path

from gbindgen.adapters.base import BindingGenerator
from gbindgen.core.models.artifact import GeneratorSettings
from gbindgen.core.models.package import LocatedPackage
from gbindgen.core.models.receipt import Receipt

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 300


def _toml_str(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes
    return json.dumps(value, ensure_ascii=False)


def render_generator_config(settings: GeneratorSettings) -> str:
    """Render *settings* as a cbindgen.toml document."""
    lines = [
        f"language = {_toml_str(settings.language)}",
        f"tab_width = {settings.tab_width}",
    ]
    if settings.header is not None:
        lines.append(f"header = {_toml_str(settings.header)}")
    includes = ", ".join(_toml_str(inc) for inc in settings.sys_includes)
    lines.append(f"sys_includes = [{includes}]")
    if settings.after_includes is not None:
        lines.append(f"after_includes = {_toml_str(settings.after_includes)}")
    lines.append(f"gobject = {'true' if settings.gobject else 'false'}")
    return "\n".join(lines) + "\n"


def _timeout_from_env() -> int:
    raw = os.environ.get("GBINDGEN_GENERATOR_TIMEOUT", "")
    try:
        return int(raw) if raw else _DEFAULT_TIMEOUT
    except ValueError:
        logger.warning("Ignoring invalid GBINDGEN_GENERATOR_TIMEOUT=%r", raw)
        return _DEFAULT_TIMEOUT


class CbindgenAdapter(BindingGenerator):
    """Generate the header with an external cbindgen-style tool.

    The executable defaults to ``cbindgen`` and can be overridden with
    ``GBINDGEN_GENERATOR``; the timeout with ``GBINDGEN_GENERATOR_TIMEOUT``.
    """

    def __init__(self, executable: str | None = None, timeout: int | None = None):
        self._executable = executable or os.environ.get("GBINDGEN_GENERATOR", "cbindgen")
        self._timeout = timeout if timeout is not None else _timeout_from_env()

    @property
    def name(self) -> str:
        return "cbindgen"

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def build_command(self, package: LocatedPackage, config_file: Path, metadata_file: Path) -> list[str]:
        cmd = [
            self._executable,
            "--config",
            str(config_file),
            "--lang",
            "c",
            "--crate",
            package.name,
            "--metadata",
            str(metadata_file),
        ]
        if package.lockfile is not None:
            cmd.extend(["--lockfile", str(package.lockfile)])
        cmd.append(str(package.identity.root_directory))
        return cmd

    def generate(self, package: LocatedPackage, settings: GeneratorSettings) -> Receipt:
        if not self.is_available():
            return Receipt.failure(
                adapter=self.name,
                operation="generate",
                error=f"Binding generator not found: {self._executable}",
            )

        start = time.monotonic()
        with tempfile.TemporaryDirectory(prefix="gbindgen-") as tmp:
            config_file = Path(tmp) / "cbindgen.toml"
            metadata_file = Path(tmp) / "metadata.json"
            try:
                config_file.write_text(render_generator_config(settings), encoding="utf-8")
                metadata_file.write_text(package.metadata_json, encoding="utf-8")
            except OSError as e:
                return Receipt.failure(
                    adapter=self.name,
                    operation="generate",
                    error=f"Cannot prepare generator input: {e}",
                )

            cmd = self.build_command(package, config_file, metadata_file)
            logger.debug("Executing: %s", " ".join(cmd))

            try:
                result = subprocess.run(
                    cmd,
                    cwd=package.identity.root_directory,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    timeout=self._timeout,
                )
            except subprocess.TimeoutExpired:
                return Receipt.failure(
                    adapter=self.name,
                    operation="generate",
                    error=f"Binding generator timed out after {self._timeout}s",
                    metadata={"command": " ".join(cmd)},
                )
            except OSError as e:
                return Receipt.failure(
                    adapter=self.name,
                    operation="generate",
                    error=f"Cannot run {self._executable}: {e}",
                    metadata={"command": " ".join(cmd)},
                )
            except UnicodeDecodeError as e:
                return Receipt.failure(
                    adapter=self.name,
                    operation="generate",
                    error=f"Binding generator produced non UTF-8 output: {e}",
                    metadata={"command": " ".join(cmd)},
                )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            return Receipt.failure(
                adapter=self.name,
                operation="generate",
                error=result.stderr.strip() or f"Generator exited with code {result.returncode}",
                duration_ms=elapsed_ms,
                metadata={"command": " ".join(cmd), "return_code": result.returncode},
            )

        if result.stderr.strip():
            # warnings from the generator
            for line in result.stderr.strip().splitlines():
                logger.warning("%s: %s", self.name, line)

        return Receipt.success(
            adapter=self.name,
            operation="generate",
            output=result.stdout,
            duration_ms=elapsed_ms,
            metadata={"command": " ".join(cmd), "return_code": 0},
        )
