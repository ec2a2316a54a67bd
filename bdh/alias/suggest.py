from __future__ import annotations

from typing import Sequence

from ..core import constants as C
from ..core.models import Workspace


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    matrix = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        matrix[i][0] = i
    for j in range(len(b) + 1):
        matrix[0][j] = j

    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
    return matrix[len(a)][len(b)]


def _suggestion_threshold(target: str, alias: str) -> int:
    return max(len(target), len(alias)) // 2 + 3


def suggest(target: str, workspaces: Sequence[Workspace], *, limit: int = C.MAX_SUGGESTIONS) -> list[Workspace]:
    """
    Rank workspaces whose alias is close to `target`.

    Candidates farther than the length-scaled threshold are dropped; ties keep
    input order.
    """
    target_lower = target.lower()
    scored: list[tuple[int, Workspace]] = []
    for ws in workspaces:
        dist = levenshtein_distance(target_lower, ws.alias.lower())
        if dist <= _suggestion_threshold(target, ws.alias):
            scored.append((dist, ws))
    scored.sort(key=lambda item: item[0])
    return [ws for _, ws in scored[: max(0, limit)]]
