"""
BeadHub HTTP client.

Thin JSON-over-HTTP wrapper around requests. Every call returns parsed
dataclasses from bdh.core.models; failures raise BeadHubError (the server
answered with a non-2xx status) or TransportError (anything else).
"""
from __future__ import annotations

import json
from typing import Any

import requests

from ..core import constants as C
from ..core import util
from ..core.models import Escalation, PendingChats, PendingConversation, Workspace


class ClientError(Exception):
    pass


class TransportError(ClientError):
    pass


class BeadHubError(ClientError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"BeadHub error (status {status_code}): {body}")
        self.status_code = status_code
        self.body = body


_READ_CHUNK_SIZE = 64 * 1024


def _bool_param(v: bool) -> str:
    return "true" if v else "false"


def _read_capped(resp: Any) -> bytes:
    """Read the body, giving up as soon as it grows past MAX_RESPONSE_SIZE."""
    buf = bytearray()
    try:
        for chunk in resp.iter_content(chunk_size=_READ_CHUNK_SIZE):
            buf.extend(chunk)
            if len(buf) > C.MAX_RESPONSE_SIZE:
                raise TransportError(f"response exceeds maximum size of {C.MAX_RESPONSE_SIZE} bytes")
    except requests.RequestException as e:
        raise TransportError(f"reading response: {e}") from e
    return bytes(buf)


def _new_session() -> requests.Session:
    session = requests.Session()
    session.trust_env = False
    return session


class BeadHubClient:
    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        *,
        session: Any = None,
        timeout: float = C.API_TIMEOUT_S,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session if session is not None else _new_session()

    def _headers(self, *, has_body: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = self.base_url + path
        util._debug(f"{method} {url} params={params or {}}")
        try:
            resp = self._session.request(
                method,
                url,
                params=params or None,
                json=body,
                headers=self._headers(has_body=body is not None),
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"sending request: {e}") from e

        try:
            content = _read_capped(resp)
        finally:
            resp.close()

        text = content.decode("utf-8", errors="replace")
        if resp.status_code < 200 or resp.status_code >= 300:
            raise BeadHubError(resp.status_code, text)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(f"decoding response: {e}") from e
        if not isinstance(data, dict):
            raise TransportError("decoding response: expected a JSON object")
        return data

    def workspaces(
        self,
        *,
        include_presence: bool | None = None,
        limit: int = 0,
        hostname: str = "",
        alias: str = "",
        human_name: str = "",
        repo: str = "",
        include_claims: bool = False,
        include_deleted: bool = False,
    ) -> list[Workspace]:
        params: dict[str, str] = {}
        if human_name:
            params["human_name"] = human_name
        if repo:
            params["repo"] = repo
        if alias:
            params["alias"] = alias
        if hostname:
            params["hostname"] = hostname
        if include_claims:
            params["include_claims"] = "true"
        if include_presence is not None:
            params["include_presence"] = _bool_param(include_presence)
        if include_deleted:
            params["include_deleted"] = "true"
        if limit > 0:
            params["limit"] = str(limit)
        data = self._request("GET", "/v1/workspaces", params=params)
        return _workspaces_from(data)

    def team_workspaces(
        self,
        *,
        include_claims: bool | None = None,
        include_presence: bool | None = None,
        only_with_claims: bool | None = None,
        limit: int = 0,
    ) -> list[Workspace]:
        params: dict[str, str] = {}
        if include_claims is not None:
            params["include_claims"] = _bool_param(include_claims)
        if include_presence is not None:
            params["include_presence"] = _bool_param(include_presence)
        if only_with_claims is not None:
            params["only_with_claims"] = _bool_param(only_with_claims)
        if limit > 0:
            params["limit"] = str(limit)
        data = self._request("GET", "/v1/workspaces/team", params=params)
        return _workspaces_from(data)

    def pending_chats(self, workspace_id: str = "") -> PendingChats:
        params = {"workspace_id": workspace_id} if workspace_id else {}
        data = self._request("GET", "/v1/chat/pending", params=params)
        raw = data.get("pending")
        pending = tuple(PendingConversation.from_api(p) for p in raw if isinstance(p, dict)) if isinstance(raw, list) else ()
        waiting = data.get("messages_waiting")
        return PendingChats(pending=pending, messages_waiting=waiting if isinstance(waiting, int) else 0)

    def escalate(self, *, workspace_id: str, alias: str, subject: str, situation: str) -> Escalation:
        data = self._request(
            "POST",
            "/v1/escalations",
            body={
                "workspace_id": workspace_id,
                "alias": alias,
                "subject": subject,
                "situation": situation,
            },
        )
        return Escalation(
            escalation_id=str(data.get("escalation_id") or ""),
            status=str(data.get("status") or ""),
            created_at=str(data.get("created_at") or ""),
            expires_at=str(data.get("expires_at") or ""),
        )


def _workspaces_from(data: dict[str, Any]) -> list[Workspace]:
    raw = data.get("workspaces")
    if not isinstance(raw, list):
        return []
    return [Workspace.from_api(w) for w in raw if isinstance(w, dict)]
