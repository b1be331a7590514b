"""
Output — write the generated header to a file or a stream.

In file mode the previous content is compared first; unchanged files
are not rewritten. With verify on, a changed file is reported as drift
after it has been written.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from gbindgen.core.errors import WriteError
from gbindgen.core.models.artifact import GeneratedArtifact

logger = logging.getLogger(__name__)


@dataclass
class WriteOutcome:
    """What happened to the generated header."""

    path: Path | None = None
    changed: bool = False
    verify: bool = False

    @property
    def drift(self) -> bool:
        """Verify mode found content different from the previous file."""
        return self.verify and self.changed

    def to_dict(self) -> dict:
        return {
            "path": str(self.path) if self.path else None,
            "changed": self.changed,
            "verify": self.verify,
            "drift": self.drift,
        }


def write_bindings(
    artifact: GeneratedArtifact,
    output: Path | None = None,
    *,
    verify: bool = False,
    stream: TextIO | None = None,
) -> WriteOutcome:
    """Persist *artifact*.

    Args:
        artifact: The generated header.
        output: Destination file. None writes to *stream* (default stdout).
        verify: Report drift when the destination content changed.
        stream: Stream used when *output* is None.

    Raises:
        WriteError: If the destination cannot be written.
    """
    if output is None:
        target = stream if stream is not None else sys.stdout
        logger.debug("Writing bindings for %s to stdout", artifact.source or "crate")
        try:
            artifact.write(target)
        except OSError as e:
            raise WriteError(f"Cannot write bindings to stdout: {e}") from e
        return WriteOutcome()

    try:
        changed = artifact.write_to_file(output)
    except OSError as e:
        raise WriteError(f"Cannot write bindings to {output}: {e}") from e

    if changed:
        logger.info("Bindings for %s written to %s", artifact.source or "crate", output)
    else:
        logger.info("Bindings for %s in %s are up to date", artifact.source or "crate", output)

    return WriteOutcome(path=output, changed=changed, verify=verify)
