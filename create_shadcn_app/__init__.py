"""create-shadcn-app -- scaffold a React + Tailwind v4 + shadcn/ui project.

Quick usage::

    from create_shadcn_app import Pipeline, SessionConfig

    session = SessionConfig(project_name="my-app", package_manager="pnpm")
    await Pipeline(session, base_dir="/tmp").run()
"""

from create_shadcn_app.config import PackageManager, SessionConfig, ToolConfig
from create_shadcn_app.pipeline import Pipeline, main
from create_shadcn_app.resolver import DirectoryConflictResolver

__version__ = "0.1.0"

__all__ = [
    "DirectoryConflictResolver",
    "PackageManager",
    "Pipeline",
    "SessionConfig",
    "ToolConfig",
    "main",
]
