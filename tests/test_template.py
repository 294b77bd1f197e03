import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gossip.config import ConfigLoadRequest, GossipConfig, YamlConfigLoader, render_initial_template
from gossip.config.errors import TemplateRenderError
from gossip.keygen import RandomnessFailure


class RenderInitialTemplateTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def _load(self, text: str) -> GossipConfig:
        path = self.dir / "gossip.yaml"
        path.write_text(text, encoding="utf-8")
        return YamlConfigLoader().load(ConfigLoadRequest(yaml_path=str(path)))

    def test_rendered_template_loads_with_defaults(self) -> None:
        config = self._load(render_initial_template())

        self.assertEqual(config.address, "127.0.0.1:8080")
        self.assertEqual(config.base_url, "https://example.com/forum")
        self.assertEqual(config.title, "gossip")
        self.assertRegex(config.jwt.secret, r"^[0-9a-f]{64}$")

        self.assertEqual(config.file_storage.type, "local")
        self.assertEqual(config.file_storage.local.dir, "./gossip_data/public/")
        self.assertEqual(config.file_storage.amazon_s3.bucket, "")

        self.assertEqual(config.store.type, "postgresql")
        self.assertEqual(config.store.postgresql.address, "127.0.0.1:5432")
        self.assertEqual(config.store.postgresql.sslmode, "disable")
        self.assertEqual(config.store.postgresql.username, "")
        self.assertEqual(config.store.mysql.address, "127.0.0.1:3306")

        self.assertEqual(config.oauth.enabled_providers(), [])

    def test_round_trip_differs_only_in_secret(self) -> None:
        first = self._load(render_initial_template())
        second = self._load(render_initial_template())

        self.assertNotEqual(first.jwt.secret, second.jwt.secret)
        self.assertEqual(first.model_dump(exclude={"jwt"}), second.model_dump(exclude={"jwt"}))

    def test_secret_is_only_substitution(self) -> None:
        with mock.patch("gossip.config.template.gen_key_hex", return_value="ab" * 32):
            rendered = render_initial_template()
        self.assertEqual(len(re.findall("ab" * 32, rendered)), 1)
        self.assertNotIn("$", rendered)

    def test_randomness_failure_propagates(self) -> None:
        with mock.patch("gossip.config.template.gen_key_hex", side_effect=RandomnessFailure("boom")):
            with self.assertRaises(RandomnessFailure):
                render_initial_template()

    def test_keygen_error_is_not_reported_as_render_error(self) -> None:
        with mock.patch("gossip.config.template.gen_key_hex", side_effect=ValueError("bad length")):
            with self.assertRaises(ValueError) as ctx:
                render_initial_template()
        self.assertNotIsInstance(ctx.exception, TemplateRenderError)

    def test_broken_template_raises_render_error(self) -> None:
        from string import Template

        with mock.patch("gossip.config.template._INITIAL_CONFIG", Template("secret: ${missing}")):
            with self.assertRaises(TemplateRenderError):
                render_initial_template()


if __name__ == "__main__":
    unittest.main()
