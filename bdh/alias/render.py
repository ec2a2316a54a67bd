"""
Human-readable renderings of alias resolution failures.

Pure functions: same input, same text. Matches are listed as
"  <alias> (<human name>)" lines.
"""
from __future__ import annotations

from typing import Protocol, Sequence


class _Named(Protocol):
    alias: str
    human_name: str


def _entry(item: _Named) -> str:
    return f"  {item.alias} ({item.human_name})"


def format_ambiguous(target: str, matches: Sequence[_Named]) -> str:
    lines = [f'ambiguous alias "{target}" matches {len(matches)} workspaces:']
    lines.extend(_entry(m) for m in sorted(matches, key=lambda m: m.alias))
    lines.append("")
    lines.append("Use a more specific alias or the full workspace ID.")
    return "\n".join(lines)


def format_not_found(target: str, suggestions: Sequence[_Named]) -> str:
    header = f'no workspace found with alias "{target}"'
    if not suggestions:
        return header
    lines = [header, "", "Did you mean:"]
    lines.extend(_entry(s) for s in suggestions)
    return "\n".join(lines) + "\n"
