"""
Generation — compose generator settings and run the binding generator.

One attempt per run: the inputs are fixed for the lifetime of the
process, so a failure is reported, not retried.
"""

from __future__ import annotations

import logging

from gbindgen.adapters.base import BindingGenerator
from gbindgen.core.errors import GenerationError
from gbindgen.core.models.artifact import GeneratedArtifact, GeneratorSettings
from gbindgen.core.models.config import BindingConfig
from gbindgen.core.models.package import LocatedPackage, PackageIdentity
from gbindgen.core.services.version_macros import compose_version_macros

logger = logging.getLogger(__name__)

TAB_WIDTH = 4


def generated_header(package_name: str) -> str:
    """The DO-NOT-EDIT comment at the top of every generated header."""
    return (
        f"/* GObject C binding from Rust {package_name} project, "
        "generated with gbindgen: DO NOT EDIT. */"
    )


def build_settings(identity: PackageIdentity, config: BindingConfig) -> GeneratorSettings:
    """Merge the crate identity and its config into generator settings.

    Raises:
        NamespaceMissingError: If the config has no namespace.
    """
    return GeneratorSettings(
        tab_width=TAB_WIDTH,
        sys_includes=list(config.sys_includes),
        after_includes=compose_version_macros(config.namespace, identity.version),
        header=generated_header(identity.name),
        gobject=True,
    )


def generate_bindings(
    package: LocatedPackage,
    settings: GeneratorSettings,
    generator: BindingGenerator | None = None,
) -> GeneratedArtifact:
    """Invoke the generator once and wrap its output.

    Raises:
        GenerationError: With the generator's own message when it fails.
    """
    if generator is None:
        from gbindgen.adapters.cbindgen import CbindgenAdapter

        generator = CbindgenAdapter()

    logger.info("Generating bindings for %s with %s", package.name, generator.name)
    receipt = generator.generate(package, settings)

    if receipt.failed:
        raise GenerationError(receipt.error or f"{generator.name} failed without a message")

    logger.debug("%s finished in %dms", generator.name, receipt.duration_ms)
    return GeneratedArtifact(content=receipt.output, source=package.name)
