"""Text and JSON transforms applied to files produced by the external tools.

Everything here is pure: functions take the current file content (or parsed
data) and return the new one, leaving I/O to the pipeline.
"""

from __future__ import annotations

import copy
import json
import re
from typing import Any

# Only the two quoting forms create-vite emits are recognised.
_STYLESHEET_IMPORT_RE = re.compile(r"""['"]\./index\.css['"]""")
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT_RE = re.compile(r"//.*")

STYLESHEET_IMPORT = "'./styles/index.css'"

PATH_ALIASES: dict[str, list[str]] = {"@/*": ["./src/*"]}

APP_COMPILER_OPTIONS: dict[str, Any] = {
    "baseUrl": ".",
    "paths": PATH_ALIASES,
    "jsx": "react-jsx",
    "allowImportingTsExtensions": True,
}


def patch_stylesheet_import(source: str) -> str:
    """Point the entry module's ``./index.css`` import at ``./styles/index.css``.

    Only the first single- or double-quoted ``./index.css`` literal is
    replaced.  Any other form is returned unchanged.
    """
    return _STYLESHEET_IMPORT_RE.sub(STYLESHEET_IMPORT, source, count=1)


def strip_json_comments(raw: str) -> str:
    """Remove ``/* */`` and ``//`` comments from JSON-with-comments text.

    This is a textual pass, not a tokenizer: comment-like sequences inside
    string values (``"https://..."``) are stripped as well.
    """
    raw = _BLOCK_COMMENT_RE.sub("", raw)
    return _LINE_COMMENT_RE.sub("", raw)


def root_tsconfig() -> dict[str, Any]:
    """The solution-style ``tsconfig.json`` written at the project root."""
    return {
        "files": [],
        "references": [
            {"path": "./tsconfig.app.json"},
            {"path": "./tsconfig.node.json"},
        ],
        "compilerOptions": {
            "baseUrl": ".",
            "paths": {key: list(value) for key, value in PATH_ALIASES.items()},
        },
    }


def merge_app_tsconfig(raw: str) -> dict[str, Any]:
    """Merge the path alias and JSX options into ``tsconfig.app.json``.

    Existing compiler options are preserved; the four managed keys are
    overwritten in place.

    Raises:
        json.JSONDecodeError: If the comment-stripped text is not valid JSON.
        TypeError: If the document is not a JSON object.
    """
    config = json.loads(strip_json_comments(raw))
    if not isinstance(config, dict):
        raise TypeError("tsconfig.app.json must contain a JSON object")

    config["compilerOptions"] = {
        **(config.get("compilerOptions") or {}),
        **copy.deepcopy(APP_COMPILER_OPTIONS),
    }
    return config


def apply_component_style(raw: str, style: str) -> dict[str, Any]:
    """Set the shadcn/ui ``style`` field of a ``components.json`` document.

    Raises:
        json.JSONDecodeError: If *raw* is not valid JSON.
        TypeError: If the document is not a JSON object.
    """
    config = json.loads(raw)
    if not isinstance(config, dict):
        raise TypeError("components.json must contain a JSON object")
    config["style"] = style
    return config
