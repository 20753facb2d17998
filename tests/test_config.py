import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sfnews.config import (
    BackupConfig,
    Config,
    SourceKind,
    default_sources,
    load_config,
    load_sources,
    save_sources,
)
from sfnews.models import Category


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_files_fall_back_to_defaults(self):
        config = Config(self.dir / "config.yaml")
        self.assertEqual(config.config.defaults.min_articles_per_category, 3)
        self.assertEqual(len(config.sources), len(default_sources()))

    def test_invalid_source_is_skipped(self):
        path = self.dir / "sources.yaml"
        path.write_text(
            "sources:\n"
            "  - name: Good\n"
            "    url: https://example.com/feed\n"
            "    category: politics\n"
            "  - name: Bad\n"
            "    url: https://example.com/other\n"
            "    kind: carrier-pigeon\n"
        )
        sources = load_sources(path)
        self.assertEqual([s.name for s in sources], ["Good"])
        self.assertEqual(sources[0].category, Category.POLITICS)
        self.assertEqual(sources[0].kind, SourceKind.FEED)

    def test_saved_sources_load_back(self):
        path = self.dir / "sources.yaml"
        save_sources(default_sources(), path)
        self.assertEqual(load_sources(path), default_sources())

    def test_invalid_yaml_raises_value_error(self):
        path = self.dir / "config.yaml"
        path.write_text("fetch: [unclosed\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_backup_key_read_from_env(self):
        config = Config(self.dir / "config.yaml")
        with mock.patch.dict(os.environ, {"THENEWSAPI_KEY": "from-env"}):
            backup = BackupConfig(**config.get_backup_config())
        self.assertEqual(backup.api_key, "from-env")

    def test_safety_margin_below_limit(self):
        with self.assertRaises(ValueError):
            BackupConfig(daily_limit=5, safety_margin=5)


if __name__ == "__main__":
    unittest.main()
