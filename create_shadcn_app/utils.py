"""Shared utility functions for create-shadcn-app.

Provides async command execution, JSON I/O, file-system helpers and
Rich-based progress reporting.  All console output of the tool goes through
the helpers defined here; the ``print_*`` helpers treat their message as
plain text, never as Rich markup.
"""

from __future__ import annotations

import asyncio
import json
import os
import shutil
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    detach_stdin: bool = False,
) -> int:
    """Run an external command asynchronously and wait for it to finish.

    The child inherits stdout and stderr so the scaffolding tools can print
    their own progress.

    Args:
        cmd: Program and arguments.  The program is looked up on ``PATH`` so
            that ``npm.cmd``-style shims resolve on Windows.
        cwd: Working directory for the child process.
        detach_stdin: Connect stdin to ``/dev/null`` so the tool cannot
            start its own interactive prompts.

    Returns:
        The process exit code.

    Raises:
        FileNotFoundError: If the program is not installed.
    """
    program = shutil.which(cmd[0]) or cmd[0]

    process = await asyncio.create_subprocess_exec(
        program,
        *cmd[1:],
        stdin=asyncio.subprocess.DEVNULL if detach_stdin else None,
        cwd=str(cwd) if cwd else None,
    )
    return await process.wait()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def dump_json(data: Any) -> str:
    """Serialise *data* with two-space indentation and no trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False)


async def save_json(data: Any, path: str | Path) -> None:
    """Save data as pretty-printed JSON, creating parent directories."""
    await write_text(path, dump_json(data))


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


async def read_text(path: str | Path) -> str:
    """Read a UTF-8 file off the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


async def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path* off the event loop.  Returns the path."""
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out


def remove_file(path: str | Path) -> bool:
    """Delete a file.  Returns ``False`` when it was already missing."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True


def is_empty_dir(path: str | Path) -> bool:
    """Return ``True`` when *path* is a directory with no entries.

    Raises:
        NotADirectoryError: If *path* exists but is a file.
    """
    with os.scandir(path) as entries:
        return next(entries, None) is None


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a stage duration as ``"3.7s"`` or ``"1m 5s"``."""
    minutes, secs = divmod(max(seconds, 0.0), 60)
    if minutes:
        return f"{int(minutes)}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_NAMES: dict[int, str] = {
    1: "SCAFFOLD",
    2: "TAILWIND",
    3: "TYPESCRIPT",
    4: "VITE",
    5: "SHADCN",
}

STAGE_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_yellow",
    4: "bright_magenta",
    5: "bright_blue",
}


def print_stage_header(stage: int, title: str) -> None:
    """Print a full-width rule announcing a pipeline stage.

    Args:
        stage: Stage number (1-5).
        title: Human readable description of what the stage does.
    """
    color = STAGE_COLORS.get(stage, "white")
    console.print()
    console.print(
        Rule(f"[bold {color}] Stage {stage}: {title} [/bold {color}]", style=color)
    )
    console.print()


def print_step(message: str) -> None:
    """Print a dim detail line."""
    console.print(f"   [dim]{escape(message)}[/dim]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
