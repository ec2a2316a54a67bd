from __future__ import annotations

from ..core import config as config_mod
from ..core import runtime
from ..infra import http as http_mod


def _require_config() -> config_mod.BeadhubConfig:
    try:
        cfg = runtime._load_config()
    except config_mod.ConfigNotFound:
        raise SystemExit("❌ no .beadhub file found - run 'bdh :init' first")
    except config_mod.ConfigError as e:
        raise SystemExit(f"❌ loading config: {e}")
    try:
        config_mod._validate(cfg)
    except config_mod.ConfigInvalid as e:
        raise SystemExit(f"❌ invalid .beadhub config: {e}")
    return cfg


def _optional_config() -> config_mod.BeadhubConfig | None:
    try:
        cfg = runtime._load_config()
        config_mod._validate(cfg)
    except config_mod.ConfigError:
        return None
    return cfg


def _client(cfg: config_mod.BeadhubConfig) -> http_mod.BeadHubClient:
    api_key = runtime._api_key()
    if not api_key:
        raise SystemExit("❌ missing beadhub API key (set BEADHUB_API_KEY)")
    return http_mod.BeadHubClient(runtime._beadhub_url(cfg.beadhub_url), api_key)


def _client_best_effort(cfg: config_mod.BeadhubConfig) -> http_mod.BeadHubClient | None:
    api_key = runtime._api_key()
    if not api_key:
        return None
    return http_mod.BeadHubClient(runtime._beadhub_url(cfg.beadhub_url), api_key)


def _client_failure(e: http_mod.ClientError, *, action: str) -> SystemExit:
    if isinstance(e, http_mod.BeadHubError):
        return SystemExit(f"❌ BeadHub error ({e.status_code}): {e.body}")
    return SystemExit(f"❌ failed to {action}: {e}")
