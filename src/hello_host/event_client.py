# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
JSONL log of script runs.

Each run writes a ``script.started`` line and then exactly one of
``script.completed`` or ``script.failed``, tied together by a correlation id.
"""

import json
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

SCRIPT_STARTED = "script.started"
SCRIPT_COMPLETED = "script.completed"
SCRIPT_FAILED = "script.failed"


@dataclass
class ScriptRun:
    """An in-flight run, returned by :meth:`EventClient.run_started`."""

    script: str
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started: float = field(default_factory=time.monotonic)

    def duration_ms(self) -> int:
        return int((time.monotonic() - self.started) * 1000)


class EventClient:
    """Appends run events to a JSONL file."""

    def __init__(self, log_path: Path):
        self.log_path = Path(log_path).expanduser()
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def run_started(self, script: Path, includes: Iterable[Path] = ()) -> ScriptRun:
        run = ScriptRun(script=str(script))
        self._append(
            SCRIPT_STARTED,
            run,
            "running",
            {"script": run.script, "includes": [str(p) for p in includes]},
        )
        return run

    def run_finished(
        self,
        run: ScriptRun,
        exit_code: int,
        error_message: Optional[str] = None,
    ) -> None:
        """Record the end of ``run``.

        A non-zero exit code is logged as ``script.failed``; when no error
        message is given one is derived from the code.
        """
        payload = {
            "script": run.script,
            "duration_ms": run.duration_ms(),
            "exit_code": exit_code,
        }
        if exit_code == 0:
            self._append(SCRIPT_COMPLETED, run, "succeeded", payload)
        else:
            self._append(
                SCRIPT_FAILED,
                run,
                "failed",
                payload,
                error_message or f"Script exited with code {exit_code}",
            )

    def read_events(self, correlation_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load logged events, optionally only those of one run."""
        if not self.log_path.exists():
            return []
        events = []
        with open(self.log_path) as f:
            for line in f:
                if not line.strip():
                    continue
                event = json.loads(line)
                if correlation_id is None or event["correlation_id"] == correlation_id:
                    events.append(event)
        return events

    def _append(
        self,
        event_type: str,
        run: ScriptRun,
        status: str,
        payload: Dict[str, Any],
        error_message: Optional[str] = None,
    ) -> None:
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "correlation_id": run.correlation_id,
            "status": status,
            "payload": payload,
        }
        if error_message:
            event["error_message"] = error_message

        with open(self.log_path, "a") as f:
            f.write(json.dumps(event) + "\n")
