from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timezone
from typing import Any

from . import constants as C


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _debug_enabled() -> bool:
    return os.environ.get(C.ENV_DEBUG, "").strip().lower() in {"1", "true", "yes", "on"}


def _debug(msg: str) -> None:
    if _debug_enabled():
        _eprint(f"[bdh] {msg}")


def _parse_iso_dt(raw: str) -> datetime | None:
    s = (raw or "").strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _format_time_ago(raw: str, *, now: datetime | None = None) -> str:
    """
    Render a server timestamp as "<n>s|m|h|d ago".

    Unparseable input is returned unchanged.
    """
    ts = _parse_iso_dt(raw)
    if ts is None:
        return raw
    now = now or datetime.now(timezone.utc)
    secs = max(0, int((now - ts).total_seconds()))
    if secs < 60:
        return f"{secs}s ago"
    mins = secs // 60
    if mins < 60:
        return f"{mins}m ago"
    hours = mins // 60
    if hours < 48:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def _is_claim_stale(raw: str, *, now: datetime | None = None) -> bool:
    ts = _parse_iso_dt(raw)
    if ts is None:
        return False
    now = now or datetime.now(timezone.utc)
    return (now - ts).total_seconds() > C.STALE_CLAIM_HOURS * 3600


def _json_dumps(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    except (TypeError, ValueError):
        return json.dumps({"error": "failed to marshal JSON output"}) + "\n"
