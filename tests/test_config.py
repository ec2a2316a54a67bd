import sys
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bdh.core import config  # noqa: E402
from bdh.core import runtime  # noqa: E402

VALID_YAML = """
# Generated by: bdh init
workspace_id: "123e4567-e89b-12d3-a456-426614174000"
beadhub_url: "http://localhost:8000"
project_slug: "beadhub"
repo_origin: "git@github.com:org/repo.git"
canonical_origin: "github.com/org/repo"
alias: "claude-code"
human_name: "Juan"
role: "reviewer"
unknown_key: 42
"""


class ConfigParseTests(unittest.TestCase):
    def test_load_yaml_fields(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".beadhub"
            p.write_text(VALID_YAML, encoding="utf-8")
            cfg = config._load_config_from(p)
        self.assertEqual(cfg.alias, "claude-code")
        self.assertEqual(cfg.project_slug, "beadhub")
        self.assertEqual(cfg.repo_id, "")
        self.assertEqual(cfg.path, p)
        config._validate(cfg)

    def test_json_shaped_config(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".beadhub"
            p.write_text('{"alias": "bob", "human_name": 7}', encoding="utf-8")
            cfg = config._load_config_from(p)
        self.assertEqual(cfg.alias, "bob")
        self.assertEqual(cfg.human_name, "")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".beadhub"
            with self.assertRaises(config.ConfigNotFound) as ctx:
                config._load_config_from(p)
        self.assertEqual(ctx.exception.path, p)

    def test_invalid_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".beadhub"
            p.write_text("alias: [unterminated\n", encoding="utf-8")
            with self.assertRaises(config.ConfigParseError):
                config._load_config_from(p)

    def test_non_mapping_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / ".beadhub"
            p.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(config.ConfigParseError):
                config._load_config_from(p)


class ConfigValidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = config._config_from_mapping(
            {
                "workspace_id": "123e4567-e89b-12d3-a456-426614174000",
                "beadhub_url": "https://hub.example.com",
                "project_slug": "beadhub",
                "repo_origin": "https://github.com/org/repo",
                "canonical_origin": "github.com/org/repo",
                "alias": "claude-code",
                "human_name": "Mary O'Neil",
            }
        )

    def _message(self, **changes) -> str:
        with self.assertRaises(config.ConfigInvalid) as ctx:
            config._validate(replace(self.cfg, **changes))
        return str(ctx.exception)

    def test_valid(self) -> None:
        config._validate(self.cfg)

    def test_rules(self) -> None:
        self.assertEqual(self._message(workspace_id=""), "workspace_id is required")
        self.assertEqual(self._message(workspace_id="123E4567-E89B-12D3-A456-426614174000"), "workspace_id must be a valid UUID")
        self.assertEqual(self._message(beadhub_url="ftp://x"), "beadhub_url must be a valid HTTP(S) URL")
        self.assertEqual(self._message(project_slug="Bead_Hub"), "project_slug must be lowercase alphanumeric with hyphens")
        self.assertEqual(self._message(repo_id="nope"), "repo_id must be a valid UUID")
        self.assertIn("canonical_origin must be in format", self._message(canonical_origin="github.com/repo"))
        self.assertIn("alias must start with an alphanumeric", self._message(alias="-bad"))
        self.assertIn("human_name must start with a letter", self._message(human_name="1up"))

    def test_first_failing_rule_wins(self) -> None:
        self.assertEqual(self._message(workspace_id="", alias=""), "workspace_id is required")

    def test_role_words(self) -> None:
        self.assertTrue(config._is_valid_role("  Code   Reviewer "))
        self.assertFalse(config._is_valid_role("one two three"))
        self.assertFalse(config._is_valid_role("x" * 51))
        self.assertIn("role must be 1-2 words", self._message(role="a b c"))


class ConfigDiscoveryTests(unittest.TestCase):
    def setUp(self) -> None:
        runtime._set_config_path(None)

    def tearDown(self) -> None:
        runtime._set_config_path(None)

    def test_walks_up_to_git_root(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td).resolve()
            (root / ".git").mkdir()
            (root / ".beadhub").write_text(VALID_YAML, encoding="utf-8")
            deep = root / "a" / "b"
            deep.mkdir(parents=True)
            self.assertEqual(runtime._find_config_path(deep), root / ".beadhub")
            self.assertEqual(runtime._workspace_root(deep), root)
            self.assertEqual(runtime._load_config(deep).alias, "claude-code")

    def test_missing_inside_git_reports_root_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td).resolve()
            (root / ".git").mkdir()
            deep = root / "a"
            deep.mkdir()
            with self.assertRaises(config.ConfigNotFound) as ctx:
                runtime._find_config_path(deep)
            self.assertEqual(ctx.exception.path, root / ".beadhub")

    def test_outside_git_does_not_walk_parents(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            parent = Path(td).resolve()
            (parent / ".beadhub").write_text(VALID_YAML, encoding="utf-8")
            child = parent / "child"
            child.mkdir()
            with self.assertRaises(config.ConfigNotFound) as ctx:
                runtime._find_config_path(child)
            self.assertEqual(ctx.exception.path, child / ".beadhub")

    def test_custom_path_overrides_discovery(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "alt.yaml"
            p.write_text(VALID_YAML, encoding="utf-8")
            runtime._set_config_path(str(p))
            self.assertEqual(runtime._find_config_path(Path("/")), p)

    def test_missing_custom_path_is_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "missing" / ".beadhub"
            runtime._set_config_path(str(p))
            with self.assertRaises(config.ConfigNotFound) as ctx:
                runtime._find_config_path()
            self.assertEqual(ctx.exception.path, p)
            with self.assertRaises(config.ConfigNotFound):
                runtime._workspace_root()
