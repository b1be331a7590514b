"""
Mock generator — test double for the binding generator.

Produces a small but well-formed header from the settings so the whole
pipeline can run without an external tool. Can be configured to fail.
"""

from __future__ import annotations

from gbindgen.adapters.base import BindingGenerator
from gbindgen.core.models.artifact import GeneratorSettings
from gbindgen.core.models.package import LocatedPackage
from gbindgen.core.models.receipt import Receipt


class MockGenerator(BindingGenerator):
    """Generator double that renders settings into a header."""

    def __init__(
        self,
        available: bool = True,
        body: str = "void mock_init(void);\n",
    ):
        self._available = available
        self._body = body
        self._error: str | None = None
        self._call_log: list[tuple[LocatedPackage, GeneratorSettings]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[tuple[LocatedPackage, GeneratorSettings]]:
        """All (package, settings) pairs this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, error: str = "Mock failure") -> None:
        """Make every following call fail with *error*."""
        self._error = error

    def render(self, settings: GeneratorSettings) -> str:
        parts: list[str] = []
        if settings.header:
            parts.append(settings.header + "\n\n")
        for include in settings.sys_includes:
            parts.append(f"#include <{include}>\n")
        if settings.after_includes:
            parts.append(settings.after_includes + "\n")
        parts.append(self._body)
        return "".join(parts)

    def generate(self, package: LocatedPackage, settings: GeneratorSettings) -> Receipt:
        self._call_log.append((package, settings))
        if self._error is not None:
            return Receipt.failure(adapter=self.name, operation="generate", error=self._error)
        return Receipt.success(
            adapter=self.name,
            operation="generate",
            output=self.render(settings),
        )

    def reset(self) -> None:
        self._call_log.clear()
        self._error = None
