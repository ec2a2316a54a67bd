from __future__ import annotations

from ..core import util
from ..core.config import BeadhubConfig
from ..core.models import PendingChats
from ..infra import http as http_mod
from .context import _client_failure
from .notify import _pending_sender


def _fetch_pending(cfg: BeadhubConfig, client: http_mod.BeadHubClient) -> PendingChats:
    try:
        return client.pending_chats(cfg.workspace_id)
    except http_mod.ClientError as e:
        raise _client_failure(e, action="check pending chats") from e


def _one_line(raw: str) -> str:
    return " ".join((raw or "").split())


def _format_pending_output(chats: PendingChats, *, self_alias: str, as_json: bool) -> str:
    if as_json:
        return util._json_dumps(
            {
                "pending": [
                    {
                        "session_id": c.session_id,
                        "participants": list(c.participants),
                        "last_message": c.last_message,
                        "last_from": c.last_from,
                        "unread_count": c.unread_count,
                        "last_activity": c.last_activity,
                        "sender_waiting": c.sender_waiting,
                    }
                    for c in chats.pending
                ],
                "messages_waiting": chats.messages_waiting,
            }
        )

    if not chats.pending:
        return "No pending chats.\n"

    out = []
    for conv in chats.pending:
        sender = _pending_sender(conv, self_alias) or "(unknown)"
        waiting = " WAITING" if conv.sender_waiting else ""
        out.append(f"{sender} ({conv.unread_count} unread){waiting}: {_one_line(conv.last_message)}")
    return "\n".join(out) + "\n"
