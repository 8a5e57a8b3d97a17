"""Directory conflict resolution.

Before anything is generated the target folder must not exist.  The
``DirectoryConflictResolver`` keeps asking the user what to do about an
existing folder (overwrite, pick another name, or cancel) until the
candidate name points at free space on disk.
"""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import OperationCancelled
from .prompts import ConflictAction
from .utils import is_empty_dir, print_step


class ConflictPrompter(Protocol):
    async def conflict_action(self, name: str, non_empty: bool) -> ConflictAction | None: ...

    async def new_name(self, current: str) -> str | None: ...

    async def confirm_overwrite(self, name: str) -> bool | None: ...


@dataclass(frozen=True)
class TargetState:
    """Snapshot of the candidate directory taken on one loop iteration."""

    path: Path
    exists: bool
    empty: bool = True

    @classmethod
    def inspect(cls, path: Path) -> "TargetState":
        if not path.exists():
            return cls(path=path, exists=False)
        return cls(path=path, exists=True, empty=is_empty_dir(path))


class DirectoryConflictResolver:
    """Settles the project name so that its directory does not exist yet.

    Attributes:
        base_dir: Directory the project folder is created in.
        prompter: Source of the user's answers.
        history: ``TargetState`` observed on every iteration, oldest first.
    """

    def __init__(self, prompter: ConflictPrompter, base_dir: str | Path | None = None) -> None:
        self.prompter = prompter
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.history: list[TargetState] = []

    async def resolve(self, name: str) -> str:
        """Return a project name whose directory does not exist.

        Raises:
            OperationCancelled: The user chose *Cancel* or stopped answering.
        """
        candidate = name
        while True:
            state = TargetState.inspect((self.base_dir / candidate).resolve())
            self.history.append(state)
            if not state.exists:
                return candidate

            action = await self.prompter.conflict_action(candidate, not state.empty)
            if action is None or action is ConflictAction.CANCEL:
                raise OperationCancelled()

            if action is ConflictAction.RENAME:
                new_name = await self.prompter.new_name(candidate)
                if new_name is None:
                    raise OperationCancelled()
                candidate = new_name.strip()
                continue

            confirmed = await self.prompter.confirm_overwrite(candidate)
            if confirmed is None:
                raise OperationCancelled()
            if not confirmed:
                continue

            await asyncio.to_thread(shutil.rmtree, state.path)
            print_step(f'Folder "{candidate}" deleted.')
