from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _s(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""


def _i(raw: Any) -> int:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Claim:
    bead_id: str
    title: str = ""
    claimed_at: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Claim":
        return cls(bead_id=_s(data.get("bead_id")), title=_s(data.get("title")), claimed_at=_s(data.get("claimed_at")))


@dataclass(frozen=True)
class Workspace:
    workspace_id: str
    alias: str
    human_name: str = ""
    project_slug: str = ""
    role: str = ""
    hostname: str = ""
    workspace_path: str = ""
    apex_id: str = ""
    apex_title: str = ""
    apex_type: str = ""
    focus_apex_id: str = ""
    focus_apex_title: str = ""
    status: str = ""
    last_seen: str = ""
    claims: tuple[Claim, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Workspace":
        raw_claims = data.get("claims")
        claims = tuple(Claim.from_api(c) for c in raw_claims if isinstance(c, dict)) if isinstance(raw_claims, list) else ()
        return cls(
            workspace_id=_s(data.get("workspace_id")),
            alias=_s(data.get("alias")),
            human_name=_s(data.get("human_name")),
            project_slug=_s(data.get("project_slug")),
            role=_s(data.get("role")),
            hostname=_s(data.get("hostname")),
            workspace_path=_s(data.get("workspace_path")),
            apex_id=_s(data.get("apex_id")),
            apex_title=_s(data.get("apex_title")),
            apex_type=_s(data.get("apex_type")),
            focus_apex_id=_s(data.get("focus_apex_id")),
            focus_apex_title=_s(data.get("focus_apex_title")),
            status=_s(data.get("status")),
            last_seen=_s(data.get("last_seen")),
            claims=claims,
        )


@dataclass(frozen=True)
class PendingConversation:
    session_id: str
    participants: tuple[str, ...] = ()
    last_message: str = ""
    last_from: str = ""
    unread_count: int = 0
    last_activity: str = ""
    sender_waiting: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PendingConversation":
        raw_participants = data.get("participants")
        participants = (
            tuple(p for p in raw_participants if isinstance(p, str)) if isinstance(raw_participants, list) else ()
        )
        return cls(
            session_id=_s(data.get("session_id")),
            participants=participants,
            last_message=data.get("last_message") if isinstance(data.get("last_message"), str) else "",
            last_from=_s(data.get("last_from")),
            unread_count=_i(data.get("unread_count")),
            last_activity=_s(data.get("last_activity")),
            sender_waiting=bool(data.get("sender_waiting")),
        )


@dataclass(frozen=True)
class PendingChats:
    pending: tuple[PendingConversation, ...] = field(default_factory=tuple)
    messages_waiting: int = 0


@dataclass(frozen=True)
class Escalation:
    escalation_id: str
    status: str = ""
    created_at: str = ""
    expires_at: str = ""
