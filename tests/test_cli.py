import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bdh import cli  # noqa: E402
from bdh.core import runtime  # noqa: E402
from bdh.core.models import PendingChats, PendingConversation, Workspace  # noqa: E402

CONFIG = """
workspace_id: "123e4567-e89b-12d3-a456-426614174000"
beadhub_url: "http://hub.test"
project_slug: "beadhub"
repo_origin: "git@github.com:org/repo.git"
canonical_origin: "github.com/org/repo"
alias: "claude-code"
human_name: "Juan"
"""


class FakeClient:
    def __init__(self, workspaces=(), chats=None) -> None:
        self._workspaces = list(workspaces)
        self._chats = chats or PendingChats()
        self.workspace_calls: list[dict] = []

    def workspaces(self, **kwargs):
        self.workspace_calls.append(kwargs)
        return self._workspaces

    def pending_chats(self, workspace_id: str = ""):
        return self._chats


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.config_path = Path(self._td.name) / ".beadhub"
        self.config_path.write_text(CONFIG, encoding="utf-8")
        env = {k: v for k, v in os.environ.items() if k not in {"BEADHUB_API_KEY", "BEADHUB_URL"}}
        self._env = mock.patch.dict(os.environ, env, clear=True)
        self._env.start()
        self.client = FakeClient(
            [
                Workspace(workspace_id="ws-alice", alias="alice", human_name="Alice"),
                Workspace(workspace_id="ws-bob", alias="bob-agent", human_name="Bob"),
                Workspace(workspace_id="ws-me", alias="claude-code", human_name="Juan"),
            ]
        )

    def tearDown(self) -> None:
        self._env.stop()
        self._td.cleanup()
        runtime._set_config_path(None)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with mock.patch("bdh.cli._client", return_value=self.client), redirect_stdout(out), redirect_stderr(err):
            rc = cli.main(["--local-config", str(self.config_path), *argv])
        return rc, out.getvalue(), err.getvalue()

    def test_resolve_text(self) -> None:
        rc, out, err = self._run("resolve", "alice, bob")
        self.assertEqual(rc, 0, err)
        self.assertEqual(out, "alice  ws-alice  (exact)\nbob-agent  ws-bob  (prefix)\n")
        self.assertEqual(len(self.client.workspace_calls), 1)
        self.assertEqual(self.client.workspace_calls[0], {"include_presence": False, "limit": 200})

    def test_resolve_json(self) -> None:
        rc, out, _ = self._run("resolve", "ali", "--json")
        self.assertEqual(rc, 0)
        self.assertEqual(
            json.loads(out),
            {"resolutions": [{"target": "ali", "workspace_id": "ws-alice", "alias": "alice", "match_type": "prefix"}]},
        )

    def test_resolve_literal_id_skips_fetch(self) -> None:
        wid = "123E4567-E89B-12D3-A456-426614174999"
        rc, out, _ = self._run("resolve", wid)
        self.assertEqual(rc, 0)
        self.assertEqual(out, f"{wid}  {wid}  (exact)\n")
        self.assertEqual(self.client.workspace_calls, [])

    def test_resolve_not_found(self) -> None:
        rc, out, err = self._run("resolve", "alicee")
        self.assertEqual(rc, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith('❌ no workspace found with alias "alicee"\n\nDid you mean:\n  alice (Alice)\n'))

    def test_resolve_exclude_self(self) -> None:
        rc, _, err = self._run("resolve", "claude", "--exclude-self")
        self.assertEqual(rc, 1)
        self.assertIn("cannot target yourself", err)

    def test_missing_api_key(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = cli.main(["--local-config", str(self.config_path), "who"])
        self.assertEqual(rc, 1)
        self.assertIn("❌ missing beadhub API key (set BEADHUB_API_KEY)", err.getvalue())

    def test_missing_config(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = cli.main(["--local-config", str(Path(self._td.name) / "nope"), "pending"])
        self.assertEqual(rc, 1)
        self.assertIn("no .beadhub file found", err.getvalue())

    def test_hooks_with_missing_local_config_writes_nothing(self) -> None:
        missing = Path(self._td.name) / "nope" / ".beadhub"
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = cli.main(["--local-config", str(missing), "hooks", "--yes"])
        self.assertEqual(rc, 1)
        self.assertIn("no .beadhub file found", err.getvalue())
        self.assertFalse((missing.parent / ".claude").exists())

    def test_footer_printed_to_stderr(self) -> None:
        chats = PendingChats(pending=(PendingConversation(session_id="s", last_from="alice", sender_waiting=True),))
        footer_client = FakeClient(chats=chats)
        with mock.patch("bdh.coord.notifications._client_best_effort", return_value=footer_client):
            rc, out, err = self._run("resolve", "alice")
        self.assertEqual(rc, 0)
        self.assertEqual(out, "alice  ws-alice  (exact)\n")
        self.assertIn("# Coordination Info for claude-code (you, the agent)", err)
        self.assertIn("**URGENT**: alice is waiting for your response", err)

    def test_parser_requires_subcommand(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.build_parser().parse_args([])
        self.assertEqual(ctx.exception.code, 2)
