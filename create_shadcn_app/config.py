"""create-shadcn-app configuration.

Typed configuration for a scaffolding session. All settings use Pydantic v2
models so they are validated at construction time: a ``SessionConfig`` holds
what the user chose, a ``ToolConfig`` holds the identifiers of the external
tools the pipeline drives.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)

NAME_REQUIRED_MESSAGE = "Project name is required"
NAME_INVALID_MESSAGE = (
    "Project name can only contain letters, numbers, hyphens, and underscores"
)


class PackageManager(str, Enum):
    """Package managers the generated project can be set up with."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


def validate_project_name(value: str | None) -> str | None:
    """Return an error message for an unusable project name, else ``None``.

    Shared by the prompt validators and ``SessionConfig`` so both reject the
    same inputs.
    """
    if not value or not value.strip():
        return NAME_REQUIRED_MESSAGE
    if not PROJECT_NAME_PATTERN.match(value.strip()):
        return NAME_INVALID_MESSAGE
    return None


class SessionConfig(BaseModel):
    """What the user asked for. Frozen once the pipeline starts."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    theme: str | None = Field(
        default=None,
        description="shadcn/ui style written to components.json, if any",
    )

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        error = validate_project_name(value)
        if error:
            raise ValueError(error)
        return value.strip()


class ToolConfig(BaseModel):
    """Identifiers of the external tools invoked by the pipeline."""

    vite_package: str = Field(default="vite@latest")
    vite_template: str = Field(default="react-swc-ts")
    tailwind_packages: list[str] = Field(
        default_factory=lambda: ["tailwindcss", "@tailwindcss/vite"]
    )
    dev_packages: list[str] = Field(default_factory=lambda: ["@types/node"])
    shadcn_package: str = Field(default="shadcn@latest")
    package_runner: str = Field(
        default="npx", description="Command used to run the shadcn CLI"
    )

    @classmethod
    def from_env(cls) -> "ToolConfig":
        """Build a ``ToolConfig`` from environment variables.

        Recognised variables (all optional):
            CSA_VITE_PACKAGE, CSA_VITE_TEMPLATE, CSA_SHADCN_PACKAGE,
            CSA_PACKAGE_RUNNER.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CSA_VITE_PACKAGE"):
            kwargs["vite_package"] = os.environ["CSA_VITE_PACKAGE"]
        if os.environ.get("CSA_VITE_TEMPLATE"):
            kwargs["vite_template"] = os.environ["CSA_VITE_TEMPLATE"]
        if os.environ.get("CSA_SHADCN_PACKAGE"):
            kwargs["shadcn_package"] = os.environ["CSA_SHADCN_PACKAGE"]
        if os.environ.get("CSA_PACKAGE_RUNNER"):
            kwargs["package_runner"] = os.environ["CSA_PACKAGE_RUNNER"]
        return cls(**kwargs)
