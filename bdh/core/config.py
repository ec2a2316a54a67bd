from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from . import constants as C


class ConfigError(Exception):
    pass


class ConfigNotFound(ConfigError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"config file not found: {path}")
        self.path = path


class ConfigParseError(ConfigError):
    pass


class ConfigInvalid(ConfigError):
    pass


@dataclass(frozen=True)
class BeadhubConfig:
    workspace_id: str = ""
    beadhub_url: str = ""
    project_slug: str = ""
    repo_id: str = ""
    repo_origin: str = ""
    canonical_origin: str = ""
    alias: str = ""
    human_name: str = ""
    role: str = ""
    path: Path | None = None


_FIELDS = (
    "workspace_id",
    "beadhub_url",
    "project_slug",
    "repo_id",
    "repo_origin",
    "canonical_origin",
    "alias",
    "human_name",
    "role",
)


def _parse_yaml_or_json(raw: str, *, source: Path) -> dict[str, Any]:
    raw_s = raw.strip()
    if not raw_s:
        return {}

    # Prefer JSON when it clearly looks like JSON; YAML is a superset but the
    # error messages are less helpful for JSON-shaped input.
    if raw_s.startswith("{"):
        try:
            parsed = json.loads(raw_s)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"parsing {source}: {e}") from e
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigParseError(f"parsing {source}: expected a mapping at top level")
    return parsed


def _cfg_get(cfg: dict[str, Any], path: tuple[str, ...]) -> Any:
    cur: Any = cfg
    for key in path:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(key)
    return cur


def _cfg_get_str(cfg: dict[str, Any], *paths: tuple[str, ...], default: str = "") -> str:
    for p in paths:
        v = _cfg_get(cfg, p)
        if isinstance(v, str):
            return v.strip()
    return default


def _config_from_mapping(data: dict[str, Any], *, path: Path | None = None) -> BeadhubConfig:
    values = {name: _cfg_get_str(data, (name,)) for name in _FIELDS}
    return BeadhubConfig(path=path, **values)


def _load_config_from(path: Path) -> BeadhubConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigNotFound(path) from None
    except OSError as e:
        raise ConfigParseError(f"reading {path}: {e}") from e
    return _config_from_mapping(_parse_yaml_or_json(raw, source=path), path=path)


def _normalize_role(raw: str) -> str:
    return " ".join((raw or "").split()).lower()


def _is_valid_role(raw: str) -> bool:
    role = _normalize_role(raw)
    if not role or len(role) > C.CFG_ROLE_MAX_LEN:
        return False
    words = role.split(" ")
    if len(words) > C.CFG_ROLE_MAX_WORDS:
        return False
    return all(C.CFG_ROLE_WORD_RE.match(w) for w in words)


def _is_valid_alias(raw: str) -> bool:
    alias = (raw or "").strip()
    return bool(alias) and bool(C.CFG_ALIAS_RE.match(alias))


def _validate(cfg: BeadhubConfig) -> None:
    """Raise ConfigInvalid on the first rule that fails."""
    if not cfg.workspace_id:
        raise ConfigInvalid("workspace_id is required")
    if not C.CFG_UUID_RE.match(cfg.workspace_id):
        raise ConfigInvalid("workspace_id must be a valid UUID")
    if not cfg.beadhub_url:
        raise ConfigInvalid("beadhub_url is required")
    if not C.CFG_URL_RE.match(cfg.beadhub_url):
        raise ConfigInvalid("beadhub_url must be a valid HTTP(S) URL")
    if not cfg.project_slug:
        raise ConfigInvalid("project_slug is required")
    if not C.CFG_PROJECT_SLUG_RE.match(cfg.project_slug):
        raise ConfigInvalid("project_slug must be lowercase alphanumeric with hyphens")
    if cfg.repo_id and not C.CFG_UUID_RE.match(cfg.repo_id):
        raise ConfigInvalid("repo_id must be a valid UUID")
    if not cfg.repo_origin:
        raise ConfigInvalid("repo_origin is required")
    if not C.CFG_REPO_ORIGIN_RE.match(cfg.repo_origin):
        raise ConfigInvalid("repo_origin must be a git SSH URL (git@host:path) or HTTPS URL")
    if not cfg.canonical_origin:
        raise ConfigInvalid("canonical_origin is required")
    if not C.CFG_CANONICAL_ORIGIN_RE.match(cfg.canonical_origin):
        raise ConfigInvalid("canonical_origin must be in format host/org/repo (e.g., github.com/org/repo)")
    if not cfg.alias:
        raise ConfigInvalid("alias is required")
    if not _is_valid_alias(cfg.alias):
        raise ConfigInvalid(
            "alias must start with an alphanumeric and contain only alphanumerics, dashes, or underscores (max 64 chars)"
        )
    if not cfg.human_name:
        raise ConfigInvalid("human_name is required")
    if not C.CFG_HUMAN_NAME_RE.match(cfg.human_name):
        raise ConfigInvalid(
            "human_name must start with a letter and contain only letters, digits, spaces, hyphens, or apostrophes (max 64 chars)"
        )
    if cfg.role and not _is_valid_role(cfg.role):
        raise ConfigInvalid("role must be 1-2 words (letters/numbers) with hyphens/underscores allowed; max 50 chars")
