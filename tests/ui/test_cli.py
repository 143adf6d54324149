"""
Tests for ui/cli.py - CLI commands wired to a mocked client.
"""

import unittest
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from watchmanlite.core.configs import ClientConfig
from watchmanlite.errors import CommandError, ConnectError
from watchmanlite.query.fields import Field
from watchmanlite.query.results import FileStat, QueryResult, WatchList
from watchmanlite.ui.cli import app, build_expression


class TestBuildExpression(unittest.TestCase):

    def test_no_filters_matches_everything(self):
        self.assertEqual(build_expression([], [], None, None).to_json(), ["true"])

    def test_single_filter_is_not_wrapped(self):
        self.assertEqual(build_expression(["py"], [], None, None).to_json(), ["suffix", "py"])

    def test_filters_combine_with_allof(self):
        expr = build_expression(["py", "pyi"], ["setup.py"], "c:1:2", "f")
        self.assertEqual(
            expr.to_json(),
            [
                "allof",
                ["type", "f"],
                ["since", "c:1:2"],
                ["name", "setup.py"],
                ["anyof", ["suffix", "py"], ["suffix", "pyi"]],
            ],
        )


class TestCommands(unittest.TestCase):
    """Each command connects, runs one request and reports the outcome."""

    def setUp(self):
        self.runner = CliRunner()
        self.client = MagicMock()
        self.client.__enter__.return_value = self.client
        self.client.__exit__.return_value = False

        config_patch = patch(
            "watchmanlite.ui.cli.get_client_config",
            return_value=ClientConfig(sockname="/tmp/wm.sock"),
        )
        connect_patch = patch(
            "watchmanlite.ui.cli.WatchmanClient.connect", return_value=self.client
        )
        self.get_config = config_patch.start()
        self.connect = connect_patch.start()
        self.addCleanup(config_patch.stop)
        self.addCleanup(connect_patch.stop)

    def test_watch(self):
        result = self.runner.invoke(app, ["watch", "/src"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.client.watch.assert_called_once_with("/src")
        self.connect.assert_called_once_with(sockname="/tmp/wm.sock", timeout=None, binary="watchman")
        self.client.__exit__.assert_called_once()

    def test_sockname_option_overrides_config(self):
        result = self.runner.invoke(app, ["--sockname", "/other.sock", "--timeout", "3", "watch", "/src"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.connect.assert_called_once_with(sockname="/other.sock", timeout=3.0, binary="watchman")

    def test_watch_error_exits_1(self):
        self.client.watch.side_effect = CommandError("Got error result from watchman watch: failed")
        result = self.runner.invoke(app, ["watch", "/src"])
        self.assertEqual(result.exit_code, 1)

    def test_connect_error_exits_1(self):
        self.connect.side_effect = ConnectError("connect error 2: /tmp/wm.sock")
        result = self.runner.invoke(app, ["watch-list"])
        self.assertEqual(result.exit_code, 1)

    def test_watch_del(self):
        result = self.runner.invoke(app, ["watch-del", "/src"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.client.watch_del.assert_called_once_with("/src")

    def test_watch_list(self):
        self.client.watch_list.return_value = WatchList(roots=["/a", "/b"])
        result = self.runner.invoke(app, ["watch-list"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("/a", result.stdout)
        self.assertIn("/b", result.stdout)

    def test_query_passes_expression_and_fields(self):
        self.client.query.return_value = QueryResult(
            files=[FileStat("a.py", exists=True, size=12)],
            version="4.9.0",
            clock="c:9:9",
            is_fresh_instance=False,
        )
        result = self.runner.invoke(
            app, ["query", "/src", "-s", "py", "-f", "name", "-f", "size", "--json"]
        )
        self.assertEqual(result.exit_code, 0, result.output)

        path, expression, fields = self.client.query.call_args[0]
        self.assertEqual(path, "/src")
        self.assertEqual(expression.to_json(), ["suffix", "py"])
        self.assertEqual(fields, Field.NAME | Field.SIZE)
        self.assertIn("a.py", result.stdout)
        self.assertIn("c:9:9", result.stdout)

    def test_query_logs_expression_terms(self):
        self.client.query.return_value = QueryResult(version="4.9.0", clock="c:1:1")
        with self.assertLogs("watchmanlite.ui.cli", level="DEBUG") as logs:
            result = self.runner.invoke(app, ["--verbose", "query", "/src", "-s", "py", "-t", "f"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("3 terms: type, suffix, allof", logs.output[0])

    def test_query_unknown_field_exits_2(self):
        result = self.runner.invoke(app, ["query", "/src", "-f", "colour"])
        self.assertEqual(result.exit_code, 2)
        self.connect.assert_not_called()

    def test_sockname_from_config(self):
        result = self.runner.invoke(app, ["sockname"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout.strip(), "/tmp/wm.sock")


if __name__ == "__main__":
    unittest.main()
