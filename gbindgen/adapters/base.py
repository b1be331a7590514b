"""
Adapter base — the protocol contract between core services and tools.

Core services only talk to external programs through adapters. An
adapter performs the side effect and returns a Receipt; it never raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from gbindgen.core.models.artifact import GeneratorSettings
from gbindgen.core.models.package import LocatedPackage
from gbindgen.core.models.receipt import Receipt


class Adapter(ABC):
    """Abstract base class for all adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'cargo', 'cbindgen')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool is installed.

        Should be fast and never raise.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class BindingGenerator(Adapter):
    """A binding generator: located crate + settings → header text.

    On success the receipt's ``output`` is the full generated header.
    On failure ``error`` carries the generator's own message.
    """

    @abstractmethod
    def generate(self, package: LocatedPackage, settings: GeneratorSettings) -> Receipt:
        """Generate bindings for *package*. MUST never raise."""
