import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from sfnews.cli.app import app
from sfnews.config import Config
from sfnews.models import AggregationResult, Category

from .helpers import make_article


class TestFetchCommand(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.runner = CliRunner()

    def tearDown(self):
        self.tmp.cleanup()

    def invoke(self, result, *args):
        config = Config(self.dir / "config.yaml")
        with mock.patch("sfnews.cli.fetch.Config", return_value=config), \
                mock.patch("sfnews.cli.fetch.AggregationOrchestrator") as orchestrator_cls:
            orchestrator = orchestrator_cls.from_config.return_value
            orchestrator.fetch_all_categories = mock.AsyncMock(return_value=result)
            orchestrator.fetch_category = mock.AsyncMock(return_value=result)
            return self.runner.invoke(app, ["fetch", *args])

    def test_empty_result_is_not_an_error(self):
        output = self.dir / "out" / "news.json"

        run = self.invoke(AggregationResult(), "--skip-backup", "--output", str(output))

        self.assertEqual(run.exit_code, 0, run.output)
        self.assertIn("No articles found", run.output)
        self.assertEqual(json.loads(output.read_text())["categories"], {})

    def test_articles_are_written(self):
        result = AggregationResult(categories={
            Category.LOCAL: [make_article("https://sfstandard.com/story", title="Muni expands service")],
        })
        output = self.dir / "news.json"

        run = self.invoke(result, "--category", "local", "--output", str(output))

        self.assertEqual(run.exit_code, 0, run.output)
        self.assertNotIn("No articles found", run.output)
        saved = json.loads(output.read_text())
        self.assertEqual(saved["categories"]["local"][0]["title"], "Muni expands service")


if __name__ == "__main__":
    unittest.main()
