"""
Domain models — Pydantic types for the generation pipeline.

    from gbindgen.core.models import BindingConfig, PackageIdentity, GeneratedArtifact
"""

from gbindgen.core.models.artifact import GeneratedArtifact, GeneratorSettings
from gbindgen.core.models.config import BindingConfig
from gbindgen.core.models.package import (
    CargoMetadata,
    CargoPackage,
    LocatedPackage,
    PackageIdentity,
    SemanticVersion,
)
from gbindgen.core.models.receipt import Receipt

__all__ = [
    # config.py
    "BindingConfig",
    # package.py
    "CargoMetadata",
    "CargoPackage",
    # artifact.py
    "GeneratedArtifact",
    "GeneratorSettings",
    "LocatedPackage",
    "PackageIdentity",
    # receipt.py
    "Receipt",
    "SemanticVersion",
]
