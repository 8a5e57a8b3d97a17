"""Jinja2 template rendering for the files the scaffolder writes wholesale.

Templates live in ``create_shadcn_app/templates/`` and mirror the layout of
the generated project: ``src/App.tsx.j2`` is rendered to ``src/App.tsx``
inside the project root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .utils import write_text

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_CONTEXT: dict[str, Any] = {
    "heading": "Hello, world! 👋",
    "css_framework": "tailwindcss",
    "alias": "@",
    "source_dir": "src",
}


class TemplateRenderer:
    """Renders the bundled ``.j2`` templates into a project directory."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any] | None = None) -> str:
        """Render a single template.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"src/App.tsx.j2"``).
            context: Variables layered over ``DEFAULT_CONTEXT``.
        """
        template = self.env.get_template(template_path)
        return template.render(**{**DEFAULT_CONTEXT, **(context or {})})

    async def render_into(
        self,
        template_path: str,
        project_root: str | Path,
        context: dict[str, Any] | None = None,
    ) -> Path:
        """Render *template_path* to the matching file under *project_root*.

        The ``.j2`` suffix is dropped and parent directories are created.
        Returns the written path.
        """
        relative = template_path[: -len(".j2")] if template_path.endswith(".j2") else template_path
        content = self.render(template_path, context)
        return await write_text(Path(project_root) / relative, content)
