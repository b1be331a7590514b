"""
Binding configuration — the schema of gbindgen.toml.

The file is optional; every field has a default. Unknown keys are
rejected so that typos surface as errors instead of being ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BindingConfig(BaseModel):
    """Crate-local generator configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Additional system includes placed at the top of the generated header
    sys_includes: list[str] = Field(default_factory=list)
    # Package namespace / prefix used for the version macros
    namespace: str | None = None
