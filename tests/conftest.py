"""Shared pytest fixtures for the create-shadcn-app test suite.

Provides reusable fixtures for:
- A scripted prompter that replays canned answers
- Emulated external tools (create-vite, package managers, shadcn) that leave
  behind the same files the real tools do
- Mock subprocess helpers
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from create_shadcn_app.config import PackageManager
from create_shadcn_app.prompts import ConflictAction


# ---------------------------------------------------------------------------
# Files produced by create-vite's react-swc-ts template
# ---------------------------------------------------------------------------

VITE_MAIN_TSX = textwrap.dedent("""\
    import { StrictMode } from 'react'
    import { createRoot } from 'react-dom/client'
    import './index.css'
    import App from './App.tsx'

    createRoot(document.getElementById('root')!).render(
      <StrictMode>
        <App />
      </StrictMode>,
    )
    """)

VITE_TSCONFIG_APP = textwrap.dedent("""\
    {
      "compilerOptions": {
        "tsBuildInfoFile": "./node_modules/.tmp/tsconfig.app.tsbuildinfo",
        "target": "ES2020",
        "useDefineForClassFields": true,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": true,

        /* Bundler mode */
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": false,
        "noEmit": true,
        "jsx": "preserve",

        /* Linting */
        "strict": true,
        "noUnusedLocals": true // keep the build clean
      },
      "include": ["src"]
    }
    """)

COMPONENTS_JSON = textwrap.dedent("""\
    {
      "$schema": "https://ui.shadcn.com/schema.json",
      "style": "new-york",
      "rsc": false,
      "tsx": true
    }
    """)


def write_vite_project(project_root: Path) -> None:
    """Create the files create-vite leaves in a fresh react-swc-ts project."""
    src = project_root / "src"
    src.mkdir(parents=True)
    (src / "App.tsx").write_text("function App() { return null }\n", encoding="utf-8")
    (src / "App.css").write_text("#root { margin: 0 auto; }\n", encoding="utf-8")
    (src / "index.css").write_text(":root { color-scheme: light dark; }\n", encoding="utf-8")
    (src / "main.tsx").write_text(VITE_MAIN_TSX, encoding="utf-8")
    (project_root / "tsconfig.json").write_text('{ "files": [] }\n', encoding="utf-8")
    (project_root / "tsconfig.app.json").write_text(VITE_TSCONFIG_APP, encoding="utf-8")
    (project_root / "tsconfig.node.json").write_text("{}\n", encoding="utf-8")
    (project_root / "vite.config.ts").write_text("export default {}\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Replays canned answers and records every question asked.

    Each keyword argument is the list of answers for the prompt method of the
    same name.  Asking a question with no answer left fails the test.
    """

    def __init__(self, **answers: list[Any]) -> None:
        self.answers = {key: list(values) for key, values in answers.items()}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _next(self, method: str, *args: Any) -> Any:
        self.calls.append((method, args))
        queue = self.answers.get(method)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {method}{args}")
        return queue.pop(0)

    def asked(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    async def project_name(self, default: str = "my-app") -> str | None:
        return self._next("project_name", default)

    async def package_manager(self) -> PackageManager | None:
        return self._next("package_manager")

    async def conflict_action(self, name: str, non_empty: bool) -> ConflictAction | None:
        return self._next("conflict_action", name, non_empty)

    async def new_name(self, current: str) -> str | None:
        return self._next("new_name", current)

    async def confirm_overwrite(self, name: str) -> bool | None:
        return self._next("confirm_overwrite", name)


@pytest.fixture
def prompter_factory():
    """Factory fixture building a ``ScriptedPrompter`` from canned answers."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Emulated external tools
# ---------------------------------------------------------------------------


class FakeTools:
    """Stands in for ``run_command`` and emulates the external tools.

    Attributes:
        calls: ``(cmd, cwd)`` for every invocation, in order.
        fail_on: Substring of a command line that should exit with 1.
        write_components: Whether ``shadcn init`` creates components.json.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path | None]] = []
        self.fail_on: str | None = None
        self.write_components = True

    async def __call__(
        self,
        cmd: list[str],
        cwd: str | Path | None = None,
        detach_stdin: bool = False,
    ) -> int:
        cwd_path = Path(cwd) if cwd is not None else None
        self.calls.append((list(cmd), cwd_path))

        if self.fail_on and self.fail_on in " ".join(cmd):
            return 1

        if len(cmd) > 3 and cmd[1] == "create":
            write_vite_project(cwd_path / cmd[3])
        elif "init" in cmd and self.write_components:
            (cwd_path / "components.json").write_text(COMPONENTS_JSON, encoding="utf-8")
        return 0

    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]


@pytest.fixture
def fake_tools():
    """Patch the pipeline's ``run_command`` with ``FakeTools``."""
    tools = FakeTools()
    with patch("create_shadcn_app.pipeline.run_command", new=tools):
        yield tools


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(returncode: int = 0) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.returncode = returncode
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
