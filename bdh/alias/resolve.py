"""
Alias resolution: turn a user-typed target into exactly one workspace.

Tiers are tried in order (exact, prefix, substring), case-insensitively;
the first tier with any hit decides the outcome. One hit resolves, several
hits are ambiguous, and lower tiers are never consulted once a tier hit.
When every tier is empty the error carries "did you mean" suggestions.
"""
from __future__ import annotations

from typing import Callable, Sequence

from ..core import constants as C
from ..core.models import Workspace
from . import errors
from .suggest import suggest
from .types import AliasMatch, AliasResolution, MatchType

FetchWorkspaces = Callable[[], Sequence[Workspace]]

_TIERS: tuple[tuple[MatchType, Callable[[str, str], bool]], ...] = (
    (MatchType.EXACT, lambda alias, target: alias == target),
    (MatchType.PREFIX, lambda alias, target: alias.startswith(target)),
    (MatchType.SUBSTRING, lambda alias, target: target in alias),
)


def is_workspace_id(target: str) -> bool:
    return bool(C.WORKSPACE_ID_RE.match(target or ""))


def _literal(target: str) -> AliasResolution:
    return AliasResolution(workspace_id=target, alias="", match_type=MatchType.EXACT)


def _tier_matches(
    workspaces: Sequence[Workspace],
    target_lower: str,
    tier: MatchType,
    matches: Callable[[str, str], bool],
) -> list[AliasMatch]:
    return [
        AliasMatch(workspace_id=ws.workspace_id, alias=ws.alias, human_name=ws.human_name, match_type=tier)
        for ws in workspaces
        if matches(ws.alias.lower(), target_lower)
    ]


def resolve(target: str, workspaces: Sequence[Workspace], *, project: str = "") -> AliasResolution:
    if not target:
        raise errors.EmptyTarget()
    if is_workspace_id(target):
        return _literal(target)
    if not workspaces:
        raise errors.NoWorkspaces(project)

    target_lower = target.lower()
    for tier, matches in _TIERS:
        found = _tier_matches(workspaces, target_lower, tier, matches)
        if len(found) == 1:
            m = found[0]
            return AliasResolution(workspace_id=m.workspace_id, alias=m.alias, match_type=tier)
        if found:
            raise errors.AmbiguousMatch(target, tier, found)

    raise errors.NotFound(target, suggest(target, workspaces))


def _fetch(fetch: FetchWorkspaces) -> list[Workspace]:
    try:
        return list(fetch())
    except errors.ResolutionError:
        raise
    except Exception as e:
        raise errors.WorkspaceFetchError(e) from e


def resolve_alias(target: str, fetch: FetchWorkspaces, *, project: str = "") -> AliasResolution:
    """Like resolve(), but only fetches the workspace directory when it is needed."""
    if not target:
        raise errors.EmptyTarget()
    if is_workspace_id(target):
        return _literal(target)
    return resolve(target, _fetch(fetch), project=project)


def resolve_targets(
    raw: str,
    fetch: FetchWorkspaces,
    *,
    project: str = "",
    self_alias: str = "",
) -> list[tuple[str, AliasResolution]]:
    """
    Resolve a comma-separated target list.

    Returns (part, resolution) pairs in input order. The directory is fetched
    at most once for the whole list.
    """
    snapshot: list[Workspace] | None = None

    def cached() -> list[Workspace]:
        nonlocal snapshot
        if snapshot is None:
            snapshot = _fetch(fetch)
        return snapshot

    out: list[tuple[str, AliasResolution]] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        resolution = resolve_alias(part, cached, project=project)
        if self_alias and resolution.display_name(part) == self_alias:
            raise errors.SelfTarget(part)
        out.append((part, resolution))

    if not out:
        raise errors.NoTargets()
    return out
