from __future__ import annotations

from ..core import util
from ..core.config import BeadhubConfig
from ..core.models import Escalation
from ..infra import http as http_mod
from .context import _client_failure


def _create_escalation(
    cfg: BeadhubConfig,
    client: http_mod.BeadHubClient,
    *,
    subject: str,
    situation: str,
) -> Escalation:
    if not subject:
        raise SystemExit("❌ subject cannot be empty")
    if not situation:
        raise SystemExit("❌ situation cannot be empty")
    try:
        return client.escalate(
            workspace_id=cfg.workspace_id,
            alias=cfg.alias,
            subject=subject,
            situation=situation,
        )
    except http_mod.ClientError as e:
        raise _client_failure(e, action="create escalation") from e


def _format_escalate_output(esc: Escalation, *, as_json: bool) -> str:
    if as_json:
        out = {
            "escalation_id": esc.escalation_id,
            "status": esc.status,
            "created_at": esc.created_at,
        }
        if esc.expires_at:
            out["expires_at"] = esc.expires_at
        return util._json_dumps(out)
    return f"Escalation created: {esc.escalation_id}\nA human will review and respond.\n"
