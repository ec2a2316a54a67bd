from __future__ import annotations

from typing import Sequence

from ..core.models import Workspace
from . import render
from .types import AliasMatch, MatchType


class ResolutionError(Exception):
    pass


class EmptyTarget(ResolutionError):
    def __init__(self) -> None:
        super().__init__("target alias cannot be empty")


class NoWorkspaces(ResolutionError):
    def __init__(self, project: str = "") -> None:
        msg = f'no workspaces found in project "{project}"' if project else "no workspaces found"
        super().__init__(msg)
        self.project = project


class AmbiguousMatch(ResolutionError):
    def __init__(self, target: str, tier: MatchType, matches: Sequence[AliasMatch]) -> None:
        self.target = target
        self.tier = tier
        self.matches = tuple(matches)
        super().__init__(render.format_ambiguous(target, self.matches))


class NotFound(ResolutionError):
    def __init__(self, target: str, suggestions: Sequence[Workspace]) -> None:
        self.target = target
        self.suggestions = tuple(suggestions)
        super().__init__(render.format_not_found(target, self.suggestions))


class WorkspaceFetchError(ResolutionError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"fetching workspaces: {cause}")
        self.cause = cause


class SelfTarget(ResolutionError):
    def __init__(self, target: str) -> None:
        super().__init__("cannot target yourself")
        self.target = target


class NoTargets(ResolutionError):
    def __init__(self) -> None:
        super().__init__("no valid target agents specified")
