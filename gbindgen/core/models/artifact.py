"""
Generator settings and the generated header.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class GeneratorSettings(BaseModel):
    """Settings handed to the binding generator.

    Attributes:
        language:       Output language of the generator.
        tab_width:      Indentation width of the generated code.
        sys_includes:   ``#include <...>`` lines emitted first.
        after_includes: Text emitted right after the includes (version macros).
        header:         Disclaimer comment at the very top of the file.
        gobject:        Request GObject-style binding conventions.
    """

    model_config = ConfigDict(frozen=True)

    language: str = "C"
    tab_width: int = 4
    sys_includes: list[str] = Field(default_factory=list)
    after_includes: str | None = None
    header: str | None = None
    gobject: bool = True


class GeneratedArtifact(BaseModel):
    """A generated header, ready to be written or compared."""

    model_config = ConfigDict(frozen=True)

    content: str
    source: str = ""

    def differs_from(self, path: Path) -> bool:
        """Whether *path* holds different content (absent counts as different)."""
        if not path.is_file():
            return True
        try:
            previous = path.read_bytes()
        except OSError as e:
            logger.debug("Cannot read previous %s: %s", path, e)
            return True
        # byte comparison: line endings count
        return previous != self.content.encode("utf-8")

    def write(self, stream: TextIO) -> None:
        stream.write(self.content)
        stream.flush()

    def write_to_file(self, path: Path) -> bool:
        """Write the content to *path* if it changed.

        Returns:
            True when the file was created or its content changed.

        Raises:
            OSError: If the file or its parent directories cannot be written.
        """
        if not self.differs_from(path):
            logger.debug("%s is up to date", path)
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(self.content)
        logger.info("Wrote %d bytes to %s", len(self.content.encode("utf-8")), path)
        return True
