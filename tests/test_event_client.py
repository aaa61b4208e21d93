"""Tests for the JSONL run event log."""

from hello_host.event_client import EventClient, ScriptRun


class TestEventClient:
    def test_creates_parent_dir(self, tmp_path):
        """The log directory should be created on construction."""
        log_path = tmp_path / "nested" / "events.jsonl"
        EventClient(log_path)

        assert log_path.parent.is_dir()

    def test_completed_run(self, tmp_path):
        """A zero exit code should log started then completed."""
        client = EventClient(tmp_path / "events.jsonl")

        run = client.run_started(tmp_path / "main.py", [tmp_path / "prelude.py"])
        client.run_finished(run, 0)

        started, completed = client.read_events()
        assert started["event_type"] == "script.started"
        assert started["status"] == "running"
        assert started["payload"] == {
            "script": str(tmp_path / "main.py"),
            "includes": [str(tmp_path / "prelude.py")],
        }
        assert completed["event_type"] == "script.completed"
        assert completed["status"] == "succeeded"
        assert completed["payload"]["exit_code"] == 0
        assert completed["payload"]["duration_ms"] >= 0
        assert "error_message" not in completed
        assert started["correlation_id"] == completed["correlation_id"] == run.correlation_id

    def test_failed_run_derives_message(self, tmp_path):
        """A non-zero exit without a message should describe the code."""
        client = EventClient(tmp_path / "events.jsonl")

        run = client.run_started(tmp_path / "main.py")
        client.run_finished(run, 3)

        failed = client.read_events()[-1]
        assert failed["event_type"] == "script.failed"
        assert failed["status"] == "failed"
        assert failed["error_message"] == "Script exited with code 3"

    def test_failed_run_keeps_message(self, tmp_path):
        client = EventClient(tmp_path / "events.jsonl")

        run = client.run_started(tmp_path / "main.py")
        client.run_finished(run, 1, "ValueError: broken")

        assert client.read_events()[-1]["error_message"] == "ValueError: broken"

    def test_read_events_filters_by_run(self, tmp_path):
        """Events of separate runs should be separable by correlation id."""
        client = EventClient(tmp_path / "events.jsonl")
        first = client.run_started(tmp_path / "a.py")
        second = client.run_started(tmp_path / "b.py")
        client.run_finished(first, 0)

        assert len(client.read_events(first.correlation_id)) == 2
        assert len(client.read_events(second.correlation_id)) == 1

    def test_read_events_without_log(self, tmp_path):
        client = EventClient(tmp_path / "events.jsonl")

        assert client.read_events() == []


class TestScriptRun:
    def test_unique_correlation_ids(self):
        assert ScriptRun("a.py").correlation_id != ScriptRun("a.py").correlation_id
