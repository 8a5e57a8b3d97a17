"""Interactive questions asked by the scaffolder.

Every question returns ``None`` when the user gives no answer (Ctrl-C or a
closed input stream); callers treat that as a cancellation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import questionary
from questionary import Choice, Question, Style

from .config import PackageManager, validate_project_name

PROMPT_STYLE = Style.from_dict({
    "question": "bold",
    "answer": "#FF910A bold",
    "pointer": "#FF4500 bold",
    "highlighted": "#63CD91 bold",
    "instruction": "#8A8A8A",
})


class ConflictAction(str, Enum):
    """What to do when the target directory already exists."""

    OVERWRITE = "overwrite"
    RENAME = "rename"
    CANCEL = "cancel"


def _name_validator(value: str) -> bool | str:
    return validate_project_name(value) or True


async def _ask(question: Question) -> Any:
    # prompt_toolkit raises EOFError once stdin is closed
    try:
        return await question.unsafe_ask_async()
    except (KeyboardInterrupt, EOFError):
        return None


class QuestionaryPrompter:
    """Asks the scaffolder's questions on the terminal with questionary."""

    def __init__(self, style: Style | None = None) -> None:
        self.style = style or PROMPT_STYLE

    async def project_name(self, default: str = "my-app") -> str | None:
        answer = await _ask(questionary.text(
            "Project name:",
            default=default,
            validate=_name_validator,
            style=self.style,
        ))
        return answer.strip() if answer is not None else None

    async def package_manager(self) -> PackageManager | None:
        answer = await _ask(questionary.select(
            "Choose a package manager:",
            choices=[Choice(pm.value, value=pm.value) for pm in PackageManager],
            style=self.style,
        ))
        return PackageManager(answer) if answer is not None else None

    async def conflict_action(self, name: str, non_empty: bool) -> ConflictAction | None:
        suffix = " and is not empty" if non_empty else ""
        answer = await _ask(questionary.select(
            f'The folder "{name}" already exists{suffix}. What would you like to do?',
            choices=[
                Choice("Overwrite (delete then recreate)", value=ConflictAction.OVERWRITE.value),
                Choice("Choose another name", value=ConflictAction.RENAME.value),
                Choice("Cancel", value=ConflictAction.CANCEL.value),
            ],
            style=self.style,
        ))
        return ConflictAction(answer) if answer is not None else None

    async def new_name(self, current: str) -> str | None:
        answer = await _ask(questionary.text(
            "New project name:",
            default=f"{current}-app",
            validate=_name_validator,
            style=self.style,
        ))
        return answer.strip() if answer is not None else None

    async def confirm_overwrite(self, name: str) -> bool | None:
        return await _ask(questionary.confirm(
            f'Confirm deletion of "{name}"? This action is irreversible.',
            default=False,
            style=self.style,
        ))
