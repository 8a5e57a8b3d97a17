"""create-shadcn-app pipeline orchestrator.

Implements the five-stage scaffolding pipeline:

Stage 1: SCAFFOLD   -- Generate a React + TypeScript + SWC project with create-vite.
Stage 2: TAILWIND   -- Install Tailwind CSS v4, replace the default stylesheets.
Stage 3: TYPESCRIPT -- Write the root tsconfig and merge the ``@/`` path alias.
Stage 4: VITE       -- Install ``@types/node`` and write ``vite.config.ts``.
Stage 5: SHADCN     -- Run ``shadcn init`` and apply the requested style.

Stages run strictly in order and each one relies on the files left by the
previous one.  The first failure aborts the run; nothing is rolled back.

Usage::

    create-shadcn-app
    create-shadcn-app my-app --pm pnpm
    python -m create_shadcn_app my-app --pm bun --theme new-york
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from rich.panel import Panel

from .config import PackageManager, SessionConfig, ToolConfig, validate_project_name
from .errors import CommandError, OperationCancelled, PipelineError, ScaffoldError
from .patches import (
    apply_component_style,
    merge_app_tsconfig,
    patch_stylesheet_import,
    root_tsconfig,
)
from .prompts import QuestionaryPrompter
from .resolver import DirectoryConflictResolver
from .templates import TemplateRenderer
from .utils import (
    STAGE_NAMES,
    console,
    ensure_dir,
    format_duration,
    print_error,
    print_stage_header,
    print_step,
    print_success,
    print_warning,
    read_text,
    remove_file,
    run_command,
    save_json,
    write_text,
)

DEFAULT_STYLESHEETS = ("src/App.css", "src/index.css")


def vite_create_command(
    package_manager: PackageManager, project_name: str, tools: ToolConfig
) -> list[str]:
    """Build the create-vite invocation for *package_manager*.

    npm forwards arguments to the initializer only after a ``--`` separator;
    pnpm, yarn and bun pass them through directly.
    """
    cmd = [package_manager.value, "create", tools.vite_package, project_name]
    if package_manager is PackageManager.NPM:
        cmd.append("--")
    cmd.extend(["--template", tools.vite_template, "--no-install", "--no-run"])
    return cmd


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives the five scaffolding stages for one session.

    The project root is derived once from ``base_dir`` and the project name
    and passed to every tool invocation as its working directory; the
    process-wide current directory is never changed.

    Attributes:
        session: What the user asked for.
        tools: External tool identifiers.
        base_dir: Directory the project folder is created in.
        state: Results accumulated from each completed stage.
    """

    _STAGES: dict[int, tuple[str, str]] = {
        1: ("stage1_scaffold", "Create Vite project (React + TS + SWC)"),
        2: ("stage2_tailwind", "Install Tailwind CSS v4"),
        3: ("stage3_typescript", "Configure TypeScript"),
        4: ("stage4_vite", "Configure Vite"),
        5: ("stage5_shadcn", "Initialize shadcn/ui"),
    }

    def __init__(
        self,
        session: SessionConfig,
        tools: ToolConfig | None = None,
        base_dir: str | Path | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.session = session
        self.tools = tools or ToolConfig()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.renderer = renderer or TemplateRenderer()
        self.state: dict[str, Any] = {"stages_completed": []}

    @property
    def project_root(self) -> Path:
        return self.base_dir / self.session.project_name

    @property
    def package_manager(self) -> str:
        return self.session.package_manager.value

    async def _run(
        self, cmd: list[str], cwd: Path | None = None, detach_stdin: bool = False
    ) -> None:
        """Run an external tool, raising ``CommandError`` on a non-zero exit."""
        returncode = await run_command(
            cmd, cwd=cwd or self.project_root, detach_stdin=detach_stdin
        )
        if returncode != 0:
            raise CommandError(cmd, returncode)

    # ------------------------------------------------------------------
    # Stage dispatch
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute all stages in order.

        Returns:
            The accumulated state dictionary, one ``stage<N>`` entry per stage.

        Raises:
            PipelineError: A stage failed; the cause is chained.
        """
        for stage, (method_name, title) in self._STAGES.items():
            print_stage_header(stage, title)
            stage_start = time.monotonic()
            try:
                result = await getattr(self, method_name)()
            except Exception as exc:
                raise PipelineError(stage, str(exc)) from exc

            self.state[f"stage{stage}"] = result
            self.state["stages_completed"].append(stage)
            print_step(
                f"{STAGE_NAMES[stage]} done in "
                f"{format_duration(time.monotonic() - stage_start)}"
            )

        return self.state

    # ------------------------------------------------------------------
    # Stage 1: SCAFFOLD
    # ------------------------------------------------------------------

    async def stage1_scaffold(self) -> dict[str, Any]:
        """Generate the Vite project next to ``base_dir``."""
        console.print(
            f"[yellow]Creating project [bold]{self.session.project_name}[/bold] "
            f"with {self.package_manager} (React + TS + SWC)...[/yellow]"
        )
        cmd = vite_create_command(
            self.session.package_manager, self.session.project_name, self.tools
        )
        await self._run(cmd, cwd=self.base_dir, detach_stdin=True)

        if not self.project_root.is_dir():
            raise ScaffoldError(
                f"create-vite finished but {self.project_root} was not created"
            )
        print_success("   ✓ Vite project created")
        return {"project_root": str(self.project_root), "command": cmd}

    # ------------------------------------------------------------------
    # Stage 2: TAILWIND
    # ------------------------------------------------------------------

    async def stage2_tailwind(self) -> dict[str, Any]:
        """Install Tailwind and swap the default stylesheets for a single import."""
        root = self.project_root
        await self._run([self.package_manager, "install", *self.tools.tailwind_packages])
        print_success("   ✓ Tailwind CSS installed")

        ensure_dir(root / "src" / "styles")

        removed: list[str] = []
        for relative in DEFAULT_STYLESHEETS:
            if remove_file(root / relative):
                removed.append(relative)
                print_step(f"✓ Removed: {relative}")

        await self.renderer.render_into("src/styles/index.css.j2", root)
        print_success("   ✓ Created: src/styles/index.css")

        app_component = root / "src" / "App.tsx"
        if app_component.exists():
            await self.renderer.render_into("src/App.tsx.j2", root)
            print_success("   ✓ Updated: src/App.tsx")

        entry_patched = False
        entry = root / "src" / "main.tsx"
        if entry.exists():
            source = await read_text(entry)
            patched = patch_stylesheet_import(source)
            if patched != source:
                await write_text(entry, patched)
                entry_patched = True
                print_success("   ✓ Updated: src/main.tsx")
            else:
                print_warning(
                    "   No './index.css' import found in src/main.tsx -- left unchanged."
                )

        return {"removed": removed, "entry_patched": entry_patched}

    # ------------------------------------------------------------------
    # Stage 3: TYPESCRIPT
    # ------------------------------------------------------------------

    async def stage3_typescript(self) -> dict[str, Any]:
        """Write the root tsconfig and merge the alias into tsconfig.app.json."""
        root = self.project_root
        await save_json(root_tsconfig(), root / "tsconfig.json")
        print_success("   ✓ Updated: tsconfig.json")

        app_config = root / "tsconfig.app.json"
        merged = False
        if app_config.exists():
            config = merge_app_tsconfig(await read_text(app_config))
            await save_json(config, app_config)
            merged = True
            print_success("   ✓ Updated: tsconfig.app.json")

        return {"app_config_merged": merged}

    # ------------------------------------------------------------------
    # Stage 4: VITE
    # ------------------------------------------------------------------

    async def stage4_vite(self) -> dict[str, Any]:
        """Install the Node type declarations and write vite.config.ts."""
        await self._run([self.package_manager, "install", "-D", *self.tools.dev_packages])
        print_success(f"   ✓ {', '.join(self.tools.dev_packages)} installed")

        await self.renderer.render_into("vite.config.ts.j2", self.project_root)
        print_success("   ✓ Updated: vite.config.ts")
        return {"dev_packages": list(self.tools.dev_packages)}

    # ------------------------------------------------------------------
    # Stage 5: SHADCN
    # ------------------------------------------------------------------

    async def stage5_shadcn(self) -> dict[str, Any]:
        """Run the shadcn initializer, then apply the session's style if any."""
        await self._run(
            [self.tools.package_runner, self.tools.shadcn_package, "init", "-y"]
        )
        print_success("   ✓ shadcn/ui initialized")

        theme_applied = False
        if self.session.theme:
            theme_applied = await self._apply_theme(self.session.theme)
        return {"theme_applied": theme_applied}

    async def _apply_theme(self, theme: str) -> bool:
        """Best effort: keep the initializer's default style on any failure."""
        components = self.project_root / "components.json"
        try:
            config = apply_component_style(await read_text(components), theme)
            await save_json(config, components)
        except (OSError, ValueError, TypeError):
            print_warning("   Could not apply custom theme. Using default.")
            return False

        print_success(f"   ✓ Applied shadcn theme: {theme}")
        return True


# ---------------------------------------------------------------------------
# Session setup
# ---------------------------------------------------------------------------


async def collect_session(
    args: argparse.Namespace,
    prompter: QuestionaryPrompter,
    base_dir: Path,
) -> SessionConfig:
    """Ask for whatever the command line left out and settle the target folder.

    Raises:
        OperationCancelled: The user gave no answer or chose *Cancel*.
        ScaffoldError: The project name passed on the command line is invalid.
    """
    name = args.project
    if name is None:
        name = await prompter.project_name()
        if not name:
            raise OperationCancelled()
    error = validate_project_name(name)
    if error:
        raise ScaffoldError(error)

    package_manager = PackageManager(args.pm) if args.pm else await prompter.package_manager()
    if package_manager is None:
        raise OperationCancelled()

    resolver = DirectoryConflictResolver(prompter, base_dir=base_dir)
    final_name = await resolver.resolve(name.strip())

    return SessionConfig(
        project_name=final_name,
        package_manager=package_manager,
        theme=args.theme,
    )


async def create_app(
    args: argparse.Namespace,
    prompter: QuestionaryPrompter | None = None,
) -> SessionConfig:
    """Collect the session, run the pipeline and print the next steps."""
    base_dir = Path(args.cwd).resolve() if args.cwd else Path.cwd()
    session = await collect_session(args, prompter or QuestionaryPrompter(), base_dir)

    pipeline = Pipeline(session, tools=ToolConfig.from_env(), base_dir=base_dir)
    await pipeline.run()

    print_success(f'\n✅ Project "{session.project_name}" created successfully!\n')
    console.print("[bright_yellow]📦 Next steps:[/bright_yellow]\n")
    console.print(f"   cd {session.project_name}")
    console.print(f"   {session.package_manager.value} run dev\n")
    return session


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-shadcn-app",
        description="Create a React + Tailwind v4 + shadcn/ui app with Vite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-shadcn-app\n"
            "  create-shadcn-app my-app --pm pnpm\n"
            "  create-shadcn-app my-app --pm npm --theme new-york\n"
        ),
    )
    parser.add_argument(
        "project",
        nargs="?",
        help="Project name (prompted for if omitted)",
    )
    parser.add_argument(
        "--pm",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Package manager (prompted for if omitted)",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help="shadcn/ui style to write into components.json",
    )
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory to create the project in (default: current directory)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-shadcn-app``."""
    args = build_arg_parser().parse_args(argv)

    console.print(
        Panel(
            "[bold bright_cyan]🚀 React + Tailwind v4 + ShadCN App Creator[/bold bright_cyan]",
            border_style="bright_cyan",
        )
    )

    try:
        asyncio.run(create_app(args))
    except OperationCancelled:
        print_warning("\n⚠️  Operation canceled.")
        sys.exit(0)
    except KeyboardInterrupt:
        print_warning("\n⚠️  Interrupted.")
        sys.exit(130)
    except Exception as exc:
        print_error(f"\n❌ An error occurred: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
