"""
PostToolUse hook output for pending chats.

The hook runner surfaces `additionalContext` to the agent, so the message is
a loud box that names who is waiting and the command to run.
"""
from __future__ import annotations

import json

from ..core import constants as C
from ..core import util
from ..core.models import PendingChats, PendingConversation
from ..infra import http as http_mod
from .context import _client_best_effort, _optional_config


def _pending_sender(conv: PendingConversation, self_alias: str) -> str:
    if conv.last_from:
        return conv.last_from
    for participant in conv.participants:
        if participant != self_alias:
            return participant
    return ""


def _box_rule(left: str, right: str) -> str:
    return left + "═" * C.NOTIFY_BOX_WIDTH + right


def _box_line(text: str) -> str:
    # Emoji render wider than one cell; the padding is an approximation.
    return "║" + text.ljust(C.NOTIFY_BOX_WIDTH)[: C.NOTIFY_BOX_WIDTH] + "║"


def _format_notify_box(chats: PendingChats, self_alias: str) -> str:
    urgent: list[str] = []
    regular: list[str] = []
    for conv in chats.pending:
        sender = _pending_sender(conv, self_alias)
        if not sender:
            continue
        (urgent if conv.sender_waiting else regular).append(sender)

    if not urgent and not regular:
        return ""

    lines = [
        "",
        _box_rule("╔", "╗"),
        _box_line("📬 AGENT: YOU HAVE PENDING CHAT MESSAGES".center(C.NOTIFY_BOX_WIDTH)),
        _box_rule("╠", "╣"),
    ]
    lines.extend(_box_line(f" ⚠️  URGENT: {sender} is WAITING for your reply") for sender in urgent)
    lines.extend(_box_line(f" 💬 Unread message from {sender}") for sender in regular)
    lines.append(_box_rule("╠", "╣"))
    lines.append(_box_line(" YOU MUST RUN: bdh pending"))
    lines.append(_box_rule("╚", "╝"))
    lines.append("")
    return "\n".join(lines) + "\n"


def _format_hook_output(content: str) -> str:
    return json.dumps(
        {
            "hookSpecificOutput": {
                "hookEventName": "PostToolUse",
                "additionalContext": content,
            }
        },
        ensure_ascii=False,
    )


def _run_notify() -> str:
    """Return hook output, or "" whenever anything is missing or fails."""
    cfg = _optional_config()
    if cfg is None:
        return ""
    client = _client_best_effort(cfg)
    if client is None:
        return ""
    try:
        chats = client.pending_chats(cfg.workspace_id)
    except http_mod.ClientError as e:
        util._debug(f"notify: pending chats unavailable: {e}")
        return ""
    box = _format_notify_box(chats, cfg.alias)
    if not box:
        return ""
    return _format_hook_output(box)
