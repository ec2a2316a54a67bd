from __future__ import annotations

import re

VERSION = "0.4.0"

CONFIG_FILE_NAME = ".beadhub"
DEFAULT_BEADHUB_URL = "http://localhost:8000"

ENV_URL = "BEADHUB_URL"
ENV_API_KEY = "BEADHUB_API_KEY"
ENV_DEBUG = "BDH_DEBUG"

API_TIMEOUT_S = 10.0
MAX_RESPONSE_SIZE = 10 * 1024 * 1024

WHO_DEFAULT_LIMIT = 50
WHO_MAX_LIMIT = 200
RESOLVE_WORKSPACE_LIMIT = WHO_MAX_LIMIT

MAX_SUGGESTIONS = 3

NOTIFY_HOOK_COMMAND = "bdh notify"
NOTIFY_BOX_WIDTH = 62

STALE_CLAIM_HOURS = 24

WORKSPACE_ID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")

# .beadhub validation (lowercase UUIDs only; literal targets above accept either case)
CFG_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
CFG_URL_RE = re.compile(r"^https?://\S+$")
CFG_ALIAS_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]{0,63}$")
CFG_HUMAN_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9 '\-]{0,63}$")
CFG_PROJECT_SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")
CFG_REPO_ORIGIN_RE = re.compile(r"^(git@[^\s:]+:\S+|https?://\S+)$")
CFG_CANONICAL_ORIGIN_RE = re.compile(r"^[a-z0-9.-]+/[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$")
CFG_ROLE_WORD_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$")
CFG_ROLE_MAX_LEN = 50
CFG_ROLE_MAX_WORDS = 2
