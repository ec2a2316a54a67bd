from __future__ import annotations

from typing import TextIO

from ..core import util
from ..core.models import PendingChats
from ..infra import http as http_mod
from .context import _client_best_effort, _optional_config


def _coordination_header(alias: str) -> str:
    return f"\n# Coordination Info for {alias} (you, the agent)\n"


def _format_notifications(chats: PendingChats) -> str:
    lines: list[str] = []

    seen: set[str] = set()
    for conv in chats.pending:
        if not conv.sender_waiting:
            continue
        sender = conv.last_from.strip()
        if not sender or sender in seen:
            continue
        seen.add(sender)
        lines.append(f"- **URGENT**: {sender} is waiting for your response\n  → Check: `bdh pending`")

    unread = sum(1 for c in chats.pending if not c.sender_waiting)
    if unread == 1:
        lines.append("- **CHAT**: You have 1 unread conversation\n  → Check: `bdh pending`")
    elif unread > 1:
        lines.append(f"- **CHAT**: You have {unread} unread conversations\n  → Check: `bdh pending`")

    if chats.messages_waiting == 1:
        lines.append("- **MAIL**: You have 1 unread message")
    elif chats.messages_waiting > 1:
        lines.append(f"- **MAIL**: You have {chats.messages_waiting} unread messages")

    if not lines:
        return ""
    return "\n## Your Notifications\n" + "".join(line + "\n" for line in lines)


def _print_notifications(stream: TextIO) -> None:
    cfg = _optional_config()
    if cfg is None:
        return
    client = _client_best_effort(cfg)
    if client is None:
        return
    try:
        chats = client.pending_chats(cfg.workspace_id)
    except http_mod.ClientError as e:
        util._debug(f"notifications: pending chats unavailable: {e}")
        return
    out = _format_notifications(chats)
    if out:
        stream.write(_coordination_header(cfg.alias))
        stream.write(out)
