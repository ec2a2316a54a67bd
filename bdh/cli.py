from __future__ import annotations

import argparse
import sys

from .alias import errors as alias_errors
from .alias.resolve import resolve_targets
from .coord import escalate as escalate_mod
from .coord import hooks as hooks_mod
from .coord import notifications as notifications_mod
from .coord import notify as notify_mod
from .coord import pending as pending_mod
from .coord import who as who_mod
from .coord.context import _client, _require_config
from .core import config as config_mod
from .core import constants as C
from .core import runtime
from .core import util

# Commands whose output is consumed by tooling; no coordination footer.
_QUIET_COMMANDS = {"notify", "hooks"}


def cmd_resolve(args: argparse.Namespace) -> int:
    cfg = _require_config()
    client = _client(cfg)

    def fetch():
        return client.workspaces(include_presence=False, limit=C.RESOLVE_WORKSPACE_LIMIT)

    try:
        pairs = resolve_targets(
            args.targets,
            fetch,
            project=cfg.project_slug,
            self_alias=cfg.alias if args.exclude_self else "",
        )
    except alias_errors.ResolutionError as e:
        raise SystemExit(f"❌ {e}")

    if args.json:
        print(
            util._json_dumps(
                {
                    "resolutions": [
                        {
                            "target": part,
                            "workspace_id": r.workspace_id,
                            "alias": r.alias,
                            "match_type": r.match_type.label,
                        }
                        for part, r in pairs
                    ]
                }
            ),
            end="",
        )
        return 0

    for part, r in pairs:
        print(f"{r.display_name(part)}  {r.workspace_id}  ({r.match_type.label})")
    return 0


def cmd_who(args: argparse.Namespace) -> int:
    cfg = _require_config()
    result = who_mod._fetch_who(
        _client(cfg),
        limit=args.limit,
        show_all=args.all,
        only_with_claims=args.only_with_claims,
    )
    print(who_mod._format_who_output(result, as_json=args.json), end="")
    return 0


def cmd_escalate(args: argparse.Namespace) -> int:
    cfg = _require_config()
    esc = escalate_mod._create_escalation(cfg, _client(cfg), subject=args.subject, situation=args.situation)
    print(escalate_mod._format_escalate_output(esc, as_json=args.json), end="")
    return 0


def cmd_pending(args: argparse.Namespace) -> int:
    cfg = _require_config()
    chats = pending_mod._fetch_pending(cfg, _client(cfg))
    print(pending_mod._format_pending_output(chats, self_alias=cfg.alias, as_json=args.json), end="")
    return 0


def cmd_notify(_: argparse.Namespace) -> int:
    out = notify_mod._run_notify()
    if out:
        print(out, end="")
    return 0


def cmd_hooks(args: argparse.Namespace) -> int:
    try:
        root = runtime._workspace_root()
    except config_mod.ConfigNotFound:
        raise SystemExit("❌ no .beadhub file found - run 'bdh :init' first")
    result = hooks_mod._setup_claude_hooks(root, ask=not args.yes)
    out, err = hooks_mod._format_hooks_result(result)
    if err:
        util._eprint(err.rstrip("\n"))
    print(out, end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bdh", description="BeadHub coordination client")
    p.add_argument("--version", action="version", version=f"bdh {C.VERSION}")
    p.add_argument("--local-config", default="", metavar="PATH", help="use an alternate .beadhub config file")
    sub = p.add_subparsers(dest="cmd", required=True)

    res = sub.add_parser("resolve", help="resolve workspace aliases (comma-separated) to workspace IDs")
    res.add_argument("targets", help="alias, alias prefix/substring, or workspace ID; comma-separated")
    res.add_argument("--exclude-self", action="store_true", help="fail if a target resolves to this workspace")
    res.add_argument("--json", action="store_true", help="output as JSON")

    who = sub.add_parser("who", help="show who's working on what")
    who.add_argument("--limit", type=int, default=C.WHO_DEFAULT_LIMIT, help=f"maximum workspaces to show (max {C.WHO_MAX_LIMIT})")
    who.add_argument("--all", action="store_true", help=f"show up to {C.WHO_MAX_LIMIT} workspaces")
    who.add_argument("--only-with-claims", action="store_true", help="only show workspaces with active claims")
    who.add_argument("--json", action="store_true", help="output as JSON")

    esc = sub.add_parser("escalate", help="escalate to a human when stuck")
    esc.add_argument("subject")
    esc.add_argument("situation")
    esc.add_argument("--json", action="store_true", help="output as JSON")

    pend = sub.add_parser("pending", help="list chat conversations with unread messages")
    pend.add_argument("--json", action="store_true", help="output as JSON")

    sub.add_parser("notify", help="check for pending chats (PostToolUse hook output)")

    hooks = sub.add_parser("hooks", help="install the notify hook into .claude/settings.json")
    hooks.add_argument("--yes", action="store_true", help="do not prompt for confirmation")

    return p


def _dispatch(args: argparse.Namespace) -> int:
    if args.cmd == "resolve":
        return cmd_resolve(args)
    if args.cmd == "who":
        return cmd_who(args)
    if args.cmd == "escalate":
        return cmd_escalate(args)
    if args.cmd == "pending":
        return cmd_pending(args)
    if args.cmd == "notify":
        return cmd_notify(args)
    if args.cmd == "hooks":
        return cmd_hooks(args)

    raise SystemExit("❌ unreachable")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    runtime._set_config_path(args.local_config)
    runtime._load_dotenv_best_effort()

    try:
        rc = _dispatch(args)
    except SystemExit as e:
        if isinstance(e.code, str):
            util._eprint(e.code)
            rc = 1
        else:
            rc = int(e.code or 0)

    if args.cmd not in _QUIET_COMMANDS:
        notifications_mod._print_notifications(sys.stderr)
    runtime._set_config_path(None)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
