"""
Cargo adapter — workspace metadata through ``cargo metadata``.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from gbindgen.adapters.base import Adapter
from gbindgen.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class CargoAdapter(Adapter):
    """Run Cargo to resolve package/workspace metadata.

    The executable defaults to ``cargo`` and can be overridden with the
    ``GBINDGEN_CARGO`` environment variable.
    """

    def __init__(self, executable: str | None = None, timeout: int = 300):
        self._executable = executable or os.environ.get("GBINDGEN_CARGO", "cargo")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "cargo"

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def metadata(self, manifest_path: Path) -> Receipt:
        """Run ``cargo metadata`` for the given manifest.

        On success ``output`` holds the metadata JSON document.
        """
        cmd = [
            self._executable,
            "metadata",
            "--format-version",
            "1",
            "--manifest-path",
            str(manifest_path),
        ]
        logger.debug("Executing: %s", " ".join(cmd))
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                cwd=manifest_path.parent,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                operation="metadata",
                error=f"cargo metadata timed out after {self._timeout}s",
                metadata={"command": " ".join(cmd)},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                operation="metadata",
                error=f"Cannot run {self._executable}: {e}",
                metadata={"command": " ".join(cmd)},
            )
        except UnicodeDecodeError as e:
            return Receipt.failure(
                adapter=self.name,
                operation="metadata",
                error=f"cargo metadata produced non UTF-8 output: {e}",
                metadata={"command": " ".join(cmd)},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            return Receipt.failure(
                adapter=self.name,
                operation="metadata",
                error=result.stderr.strip() or f"cargo metadata exited with code {result.returncode}",
                duration_ms=elapsed_ms,
                metadata={"command": " ".join(cmd), "return_code": result.returncode},
            )

        return Receipt.success(
            adapter=self.name,
            operation="metadata",
            output=result.stdout,
            duration_ms=elapsed_ms,
            metadata={"command": " ".join(cmd), "return_code": 0},
        )
