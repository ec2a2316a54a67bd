from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core import constants as C
from ..core import util
from ..core.models import Workspace
from ..infra import http as http_mod
from .context import _client_failure


@dataclass(frozen=True)
class WhoResult:
    workspaces: tuple[Workspace, ...]
    limit: int
    maybe_more: bool
    only_claims: bool


def _who_limit(limit: int, *, show_all: bool) -> int:
    if show_all:
        return C.WHO_MAX_LIMIT
    if limit <= 0:
        raise SystemExit("❌ limit must be greater than 0")
    if limit > C.WHO_MAX_LIMIT:
        raise SystemExit(f"❌ limit must be <= {C.WHO_MAX_LIMIT}")
    return limit


def _fetch_who(
    client: http_mod.BeadHubClient,
    *,
    limit: int = C.WHO_DEFAULT_LIMIT,
    show_all: bool = False,
    only_with_claims: bool = False,
) -> WhoResult:
    n = _who_limit(limit, show_all=show_all)
    try:
        workspaces = client.team_workspaces(
            include_claims=True,
            include_presence=True,
            only_with_claims=only_with_claims,
            limit=n,
        )
    except http_mod.ClientError as e:
        raise _client_failure(e, action="fetch workspaces") from e
    return WhoResult(
        workspaces=tuple(workspaces),
        limit=n,
        maybe_more=len(workspaces) >= n and not show_all,
        only_claims=only_with_claims,
    )


def _workspace_json(ws: Workspace) -> dict:
    out = {
        "workspace_id": ws.workspace_id,
        "alias": ws.alias,
        "human_name": ws.human_name,
        "status": ws.status,
        "last_seen": ws.last_seen,
        "claims": [{"bead_id": c.bead_id, "title": c.title, "claimed_at": c.claimed_at} for c in ws.claims],
    }
    for key in ("role", "apex_id", "apex_title", "apex_type", "focus_apex_id", "focus_apex_title"):
        value = getattr(ws, key)
        if value:
            out[key] = value
    return out


def _format_who_output(result: WhoResult, *, as_json: bool, now: datetime | None = None) -> str:
    if as_json:
        return util._json_dumps(
            {
                "workspaces": [_workspace_json(ws) for ws in result.workspaces],
                "count": len(result.workspaces),
            }
        )

    if not result.workspaces:
        return "No active workspaces.\n"

    header = "Active workspaces with claims" if result.only_claims else "Active workspaces"
    lines = [f"{header} (showing up to {result.limit}):" if result.limit > 0 else f"{header}:", ""]

    for ws in result.workspaces:
        lines.append(f"  {ws.alias} ({ws.human_name})")
        if ws.apex_id:
            prefix = "    Working on epic: " if ws.apex_type == "epic" else "    Working on: "
            lines.append(f"{prefix}{ws.apex_id} {ws.apex_title}".rstrip())
        elif not ws.claims and ws.focus_apex_id:
            lines.append(f"    Recent focus: {ws.focus_apex_id} {ws.focus_apex_title}".rstrip())
        if ws.claims:
            lines.append("    Claims:")
            for claim in ws.claims:
                age = util._format_time_ago(claim.claimed_at, now=now)
                stale = " ⚠️" if util._is_claim_stale(claim.claimed_at, now=now) else ""
                title = f' "{claim.title}"' if claim.title else ""
                lines.append(f"      {claim.bead_id}{title} — {age}{stale}")
        lines.append(f"    Status: {ws.status} — {util._format_time_ago(ws.last_seen, now=now)}")
        lines.append("")

    if result.maybe_more:
        lines.append(f'  …more workspaces not shown (use "bdh who --limit {C.WHO_MAX_LIMIT}")')
    return "\n".join(lines) + "\n"
