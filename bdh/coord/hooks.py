from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from ..core import constants as C
from ..infra import io as io_mod

MANUAL_HOOK_INSTRUCTIONS = f"""
To enable chat notifications, add to .claude/settings.json:
  {{
    "hooks": {{
      "PostToolUse": [{{
        "matcher": ".*",
        "hooks": [{{"type": "command", "command": "{C.NOTIFY_HOOK_COMMAND}"}}]
      }}]
    }}
  }}
"""


@dataclass
class HooksResult:
    path: Path
    created: bool = False
    updated: bool = False
    already_exists: bool = False
    skipped: bool = False
    error: str = ""


def _settings_path(repo_root: Path) -> Path:
    return repo_root / ".claude" / "settings.json"


def _hook_exists(settings: dict[str, Any]) -> bool:
    hooks = settings.get("hooks")
    if not isinstance(hooks, dict):
        return False
    post_tool_use = hooks.get("PostToolUse")
    if not isinstance(post_tool_use, list):
        return False

    for entry in post_tool_use:
        if not isinstance(entry, dict):
            continue
        inner = entry.get("hooks")
        if isinstance(inner, list):
            for h in inner:
                if isinstance(h, dict) and h.get("command") == C.NOTIFY_HOOK_COMMAND:
                    return True
        # flat form: {"command": "..."}
        if entry.get("command") == C.NOTIFY_HOOK_COMMAND:
            return True
    return False


def _add_notify_hook(settings: dict[str, Any]) -> None:
    hooks = settings.get("hooks")
    if not isinstance(hooks, dict):
        hooks = {}
        settings["hooks"] = hooks
    post_tool_use = hooks.get("PostToolUse")
    if not isinstance(post_tool_use, list):
        post_tool_use = []
    post_tool_use.append(
        {
            "matcher": ".*",
            "hooks": [{"type": "command", "command": C.NOTIFY_HOOK_COMMAND}],
        }
    )
    hooks["PostToolUse"] = post_tool_use


def _ask_yes_no(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip() in {"y", "Y", "yes"}


def _setup_claude_hooks(
    repo_root: Path,
    *,
    ask: bool,
    confirm: Callable[[str], bool] = _ask_yes_no,
) -> HooksResult:
    path = _settings_path(repo_root)
    result = HooksResult(path=path)

    existed = path.is_file() and path.stat().st_size > 0
    try:
        settings = io_mod._read_json(path)
    except io_mod.JSONFileError as e:
        result.error = str(e)
        result.skipped = True
        return result

    if _hook_exists(settings):
        result.already_exists = True
        return result

    if ask and sys.stdin.isatty():
        if not confirm("\nSet up Claude Code hook for chat notifications? (y/n): "):
            result.skipped = True
            return result

    _add_notify_hook(settings)
    try:
        io_mod._write_json_atomic(path, settings)
    except OSError as e:
        result.error = f"writing {path}: {e}"
        result.skipped = True
        return result

    if existed:
        result.updated = True
    else:
        result.created = True
    return result


def _format_hooks_result(result: HooksResult) -> tuple[str, str]:
    """Return (stdout_text, stderr_text)."""
    if result.error:
        return MANUAL_HOOK_INSTRUCTIONS, f"Warning: could not set up Claude Code hooks: {result.error}\n"
    if result.already_exists:
        return "Claude Code hook: already configured\n", ""
    if result.skipped:
        return "Claude Code hook: skipped\n" + MANUAL_HOOK_INSTRUCTIONS, ""
    if result.created:
        head = f"Created {result.path} with notification hook\n"
    else:
        head = f"Added notification hook to {result.path}\n"
    return head + "  Agents will be notified of pending chats after each tool call\n", ""
