import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

import yaml

from gossip.__main__ import run


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def _run(self, *argv: str):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = run(list(argv))
        return status, out.getvalue(), err.getvalue()

    def test_gen_key_prints_hex_key(self) -> None:
        status, out, _ = self._run("gen-key")
        self.assertEqual(status, 0)
        self.assertRegex(out.strip(), r"^[0-9a-f]{64}$")

    def test_init_to_stdout(self) -> None:
        status, out, _ = self._run("init")
        self.assertEqual(status, 0)
        data = yaml.safe_load(out)
        self.assertEqual(data["store"]["type"], "postgresql")
        self.assertEqual(len(data["jwt"]["secret"]), 64)

    def test_init_refuses_to_overwrite_without_force(self) -> None:
        target = self.dir / "gossip.yaml"
        self.assertEqual(self._run("init", "--output", str(target))[0], 0)
        first = target.read_text(encoding="utf-8")

        status, _, err = self._run("init", "--output", str(target))
        self.assertEqual(status, 1)
        self.assertIn("init.output_exists", err)
        self.assertEqual(target.read_text(encoding="utf-8"), first)

        self.assertEqual(self._run("init", "--output", str(target), "--force")[0], 0)
        self.assertNotEqual(target.read_text(encoding="utf-8"), first)

    def test_check_file_masks_secrets(self) -> None:
        target = self.dir / "gossip.yaml"
        self._run("init", "--output", str(target))
        secret = yaml.safe_load(target.read_text(encoding="utf-8"))["jwt"]["secret"]

        status, out, _ = self._run("--config", str(target), "check")
        self.assertEqual(status, 0)
        self.assertNotIn(secret, out)
        self.assertEqual(yaml.safe_load(out)["jwt"]["secret"], "***")

    def test_check_missing_file_fails(self) -> None:
        status, _, err = self._run("--config", str(self.dir / "nope.yaml"), "check")
        self.assertEqual(status, 1)
        self.assertIn("nope.yaml", err)

    @mock.patch.dict(os.environ, {"GOSSIP_STORE_TYPE": "mysql", "GOSSIP_FILE_STORAGE_TYPE": "local"}, clear=True)
    def test_check_env_mode(self) -> None:
        status, out, _ = self._run("-e", "--dotenv", str(self.dir / ".env"), "check")
        self.assertEqual(status, 0)
        self.assertEqual(yaml.safe_load(out)["store"]["type"], "mysql")

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_check_reports_unknown_backends(self) -> None:
        status, _, err = self._run("-e", "--dotenv", str(self.dir / ".env"), "check")
        self.assertEqual(status, 1)
        self.assertIn("check.unknown_backend", err)

    def test_help_lists_environment_variables(self) -> None:
        status, _, err = self._run("--env-prefix", "BOARD", "help")
        self.assertEqual(status, 0)
        self.assertIn("BOARD_JWT_SECRET", err)


if __name__ == "__main__":
    unittest.main()
