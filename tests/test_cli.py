"""Integration tests for the astnamer CLI."""

import json

import pytest
from click.testing import CliRunner

from astnamer import __version__
from astnamer.cli import cli
from astnamer.utils.exit_codes import ExitCodes


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestCliHelp:
    def test_root_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("calls", "functions", "name"):
            assert command in result.output

    def test_help_is_ascii(self, runner):
        for args in (["--help"], ["calls", "--help"], ["functions", "--help"], ["name", "--help"]):
            result = runner.invoke(cli, args)
            assert result.exit_code == 0
            try:
                result.output.encode("ascii")
            except UnicodeEncodeError as e:
                pytest.fail(f"Non-ASCII character in {' '.join(args)}: {e}")

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCallsCommand:
    def test_json_output(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["calls", str(server_ast_path), "--format", "json"])
        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        by_name = {r["full_name"]: r for r in records}
        assert by_name["obj.method"]["arguments"][0]["name"] == "cb"
        assert by_name["obj.method"]["arguments"][0]["operand"] is True
        assert by_name["res.send"]["in_function"] == "handler"

    def test_limit(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["calls", str(server_ast_path), "--format", "json", "--limit", "2"])
        assert result.exit_code == 0
        assert [r["full_name"] for r in json.loads(result.output)] == ["require", "express"]

    def test_table_output(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["calls", str(server_ast_path)])
        assert result.exit_code == 0
        assert "require" in result.output
        assert "handler" in result.output

    def test_missing_file(self, runner, isolated_config):
        result = runner.invoke(cli, ["calls", "does-not-exist.json"])
        assert result.exit_code == 2

    def test_malformed_tree_is_reported(self, runner, isolated_config):
        path = isolated_config / "broken.json"
        path.write_text(json.dumps({"type": "CallExpression", "arguments": []}), encoding="utf-8")
        result = runner.invoke(cli, ["calls", str(path)])
        assert result.exit_code == ExitCodes.FAILURE
        assert "MalformedNodeError" in result.output
        assert (isolated_config / ".astnamer" / "error.log").exists()


class TestFunctionsCommand:
    def test_json_output(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["functions", str(server_ast_path), "--format", "json"])
        assert result.exit_code == 0, result.output
        names = [r["name"] for r in json.loads(result.output)]
        assert names == ["handler", "exports.render", "<anonymous>", "pick"]


class TestNameCommand:
    def test_position_json(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(
            cli, ["name", str(server_ast_path), "--line", "10", "--column", "2", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        assert [r["type"] for r in records] == [
            "ExpressionStatement",
            "CallExpression",
            "MemberExpression",
            "Identifier",
        ]
        call = records[1]
        assert call["full_name"] == "obj.method"
        assert call["partial_name"] == ".method"
        assert call["identifier"] == "method"

    def test_no_match_exit_code(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["name", str(server_ast_path), "--line", "500"])
        assert result.exit_code == ExitCodes.NO_MATCH

    def test_no_match_message(self, runner, isolated_config, server_ast_path):
        result = runner.invoke(cli, ["name", str(server_ast_path), "--line", "500", "--column", "2"])
        assert result.exit_code == ExitCodes.NO_MATCH
        assert "No node starts at 500:2" in result.output
        assert ExitCodes.get_description(ExitCodes.NO_MATCH) in result.output


class TestLogDirOption:
    def test_log_dir_writes_debug_log(self, runner, isolated_config, server_ast_path):
        log_dir = isolated_config / "logs"
        result = runner.invoke(cli, ["--log-dir", str(log_dir), "calls", str(server_ast_path), "--format", "json"])
        assert result.exit_code == 0, result.output

        text = (log_dir / "astnamer.log").read_text(encoding="utf-8")
        assert "Loaded AST file" in text
        assert "DEBUG" in text

    def test_handler_removed_after_command(self, runner, isolated_config, server_ast_path):
        log_dir = isolated_config / "logs"
        runner.invoke(cli, ["--log-dir", str(log_dir), "calls", str(server_ast_path)])
        size = (log_dir / "astnamer.log").stat().st_size

        runner.invoke(cli, ["calls", str(server_ast_path)])
        assert (log_dir / "astnamer.log").stat().st_size == size
