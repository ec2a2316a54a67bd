from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class MatchType(IntEnum):
    # Lower value wins: tiers are tried in this order.
    EXACT = 0
    PREFIX = 1
    SUBSTRING = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class AliasMatch:
    workspace_id: str
    alias: str
    human_name: str
    match_type: MatchType


@dataclass(frozen=True)
class AliasResolution:
    workspace_id: str
    alias: str
    match_type: MatchType

    def display_name(self, target: str) -> str:
        return self.alias or target
