"""Tests for the hello-host CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hello_host import __version__
from hello_host.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every command with an empty home and no name override."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("HELLO_HOST_CONFIG", raising=False)
    monkeypatch.delenv("HELLO_HOST_NAME", raising=False)
    return tmp_path


class TestRun:
    """Tests for hello-host run."""

    def test_bundled_example(self):
        """Running without a script should run the bundled example."""
        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Hello World!"
        assert "'loadFile'" in lines[1]
        assert "'setTimeout'" in lines[2]
        assert 'name = os.environ.get("HELLO_HOST_NAME")' in result.output

    def test_bundled_example_with_name(self, monkeypatch):
        monkeypatch.setenv("HELLO_HOST_NAME", "Ada")

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "Hello Ada!"

    def test_script_with_args(self, tmp_path):
        """Trailing arguments should reach the script as scriptArgs."""
        script = tmp_path / "main.py"
        script.write_text("console.log(scriptArgs[1:])\n")

        result = runner.invoke(app, ["run", str(script), "a", "b"])

        assert result.exit_code == 0
        assert result.output == "[ 'a', 'b' ]\n"

    def test_relative_paths_resolve_next_to_script(self, tmp_path, monkeypatch):
        """The script directory should be the base for relative paths."""
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "data.txt").write_text("payload")
        (sub / "main.py").write_text("std.loadFile('data.txt', console.log)\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["run", str(sub / "main.py")])

        assert result.exit_code == 0
        assert result.output == "payload\n"

    def test_exit_code_passthrough(self, tmp_path):
        script = tmp_path / "main.py"
        script.write_text("std.exit(7)\n")

        result = runner.invoke(app, ["run", str(script)])

        assert result.exit_code == 7

    def test_failing_script(self, tmp_path):
        script = tmp_path / "main.py"
        script.write_text("raise KeyError('gone')\n")

        result = runner.invoke(app, ["run", str(script)])

        assert result.exit_code == 1

    def test_missing_script(self, tmp_path):
        result = runner.invoke(app, ["run", str(tmp_path / "nope.py")])

        assert result.exit_code == 1
        assert "script not found" in result.output

    def test_include_option(self, tmp_path):
        prelude = tmp_path / "prelude.py"
        prelude.write_text("console.log('prelude')\n")
        script = tmp_path / "main.py"
        script.write_text("console.log('main')\n")

        result = runner.invoke(app, ["run", str(script), "-I", str(prelude)])

        assert result.exit_code == 0
        assert result.output == "prelude\nmain\n"

    def test_include_definitions_reach_script(self, tmp_path):
        """Names defined in an -I prelude should be usable by the script."""
        prelude = tmp_path / "prelude.py"
        prelude.write_text("GREETING = 'hi from prelude'\n")
        script = tmp_path / "main.py"
        script.write_text("console.log(GREETING)\n")

        result = runner.invoke(app, ["run", str(script), "-I", str(prelude)])

        assert result.exit_code == 0
        assert result.output == "hi from prelude\n"

    def test_dump_memory_option(self, tmp_path):
        script = tmp_path / "main.py"
        script.write_text("pass\n")

        result = runner.invoke(app, ["run", str(script), "--dump-memory"])

        assert result.exit_code == 0
        assert "MEMORY USAGE" in result.output

    def test_config_events_log(self, tmp_path):
        """A configured events log should receive the run events."""
        events = tmp_path / "events.jsonl"
        config = tmp_path / "config.yaml"
        config.write_text(f"events_log: {events}\n")
        script = tmp_path / "main.py"
        script.write_text("pass\n")

        result = runner.invoke(app, ["run", str(script), "--config", str(config)])

        assert result.exit_code == 0
        types = [json.loads(line)["event_type"] for line in events.read_text().splitlines()]
        assert types == ["script.started", "script.completed"]

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["run", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_bad_log_level(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("log_level: LOUD\n")

        result = runner.invoke(app, ["run", "--config", str(config)])

        assert result.exit_code == 1
        assert "Config error" in result.output


class TestGreet:
    def test_default(self):
        result = runner.invoke(app, ["greet"])

        assert result.exit_code == 0
        assert result.output == "Hello World!\n"

    def test_name(self):
        result = runner.invoke(app, ["greet", "Ada"])

        assert result.output == "Hello Ada!\n"


class TestNamespaces:
    """Tests for hello-host namespaces."""

    def test_single_namespace(self):
        result = runner.invoke(app, ["namespaces", "os"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "getcwd"
        assert result.output.splitlines()[-1] == "platform"

    def test_all_namespaces(self):
        result = runner.invoke(app, ["namespaces"])

        assert result.exit_code == 0
        assert "std:" in result.output
        assert "os:" in result.output
        assert "  loadFile" in result.output

    def test_unknown_namespace(self):
        result = runner.invoke(app, ["namespaces", "sys"])

        assert result.exit_code == 1
        assert "unknown namespace" in result.output


class TestMisc:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_validate(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("log_level: INFO\ninclude:\n  - prelude.py\n")

        result = runner.invoke(app, ["config", "validate", "--config", str(config)])

        assert result.exit_code == 0
        assert "Log level: INFO" in result.output
        assert "Include: prelude.py" in result.output

    def test_config_validate_missing(self, tmp_path):
        result = runner.invoke(app, ["config", "validate", "--config", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
