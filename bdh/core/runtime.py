from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from . import config as config_mod
from . import constants as C
from . import util

_custom_config_path: Path | None = None


def _expand_path(path: str) -> Path:
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = (Path.cwd() / p).resolve()
    return p


def _set_config_path(path: str | None) -> None:
    global _custom_config_path
    raw = (path or "").strip()
    _custom_config_path = _expand_path(raw) if raw else None


def _find_git_root(start: Path) -> Path | None:
    for p in (start, *start.parents):
        if (p / ".git").exists():
            return p
    return None


def _find_config_path(start: Path | None = None) -> Path:
    """
    Locate the workspace config file.

    Walks from `start` (default: cwd) up to the enclosing git root. Outside a
    git worktree only `start` itself is consulted, so an unrelated .beadhub
    higher up is never picked up. Raises ConfigNotFound with the path where
    the file was expected.
    """
    if _custom_config_path is not None:
        if not _custom_config_path.is_file():
            raise config_mod.ConfigNotFound(_custom_config_path)
        return _custom_config_path

    cwd = (start or Path.cwd()).resolve()
    git_root = _find_git_root(cwd)
    if git_root is None:
        candidate = cwd / C.CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        raise config_mod.ConfigNotFound(candidate)

    for p in (cwd, *cwd.parents):
        candidate = p / C.CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if p == git_root:
            break
    raise config_mod.ConfigNotFound(git_root / C.CONFIG_FILE_NAME)


def _workspace_root(start: Path | None = None) -> Path:
    return _find_config_path(start).resolve().parent


def _load_config(start: Path | None = None) -> config_mod.BeadhubConfig:
    return config_mod._load_config_from(_find_config_path(start))


def _load_dotenv_best_effort() -> None:
    try:
        root = _workspace_root()
    except config_mod.ConfigNotFound:
        root = Path.cwd()
    env_file = root / ".env"
    if env_file.is_file():
        load_dotenv(dotenv_path=env_file, override=False)
        util._debug(f"loaded {env_file}")


def _beadhub_url(hint: str = "") -> str:
    override = os.environ.get(C.ENV_URL, "").strip()
    if override:
        return override
    return (hint or "").strip() or C.DEFAULT_BEADHUB_URL


def _api_key() -> str:
    return os.environ.get(C.ENV_API_KEY, "").strip()
