# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Script runtime.

Builds the console, the ``std`` and ``os`` namespaces and the job queue,
evaluates scripts with those injected as globals, then drives the loop
until every deferred callback has run.
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Union

from hello_host.event_client import EventClient
from hello_host.host.console import Console
from hello_host.host.errors import HostExit
from hello_host.host.loop import JobQueue
from hello_host.host.memory import MemoryTracker
from hello_host.host.std import build_std
from hello_host.host.system import build_system

PathLike = Union[str, Path]


class Runtime:
    """One script host: namespaces, console, loop and streams."""

    def __init__(
        self,
        base_dir: Optional[PathLike] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        event_client: Optional[EventClient] = None,
        loop: Optional[JobQueue] = None,
    ):
        self.base_dir = Path(base_dir).resolve() if base_dir else Path.cwd()
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.stdin = stdin or sys.stdin
        self.event_client = event_client
        self.loop = loop or JobQueue()
        self.console = Console(self.stdout, self.stderr)
        self.std = build_std(self)
        self.os = build_system(self)
        self.script_args: List[str] = []
        self._globals: Dict[str, Any] = {}
        self.logger = logging.getLogger(__name__)

    def resolve(self, path: PathLike) -> Path:
        """Resolve ``path`` against the base directory."""
        p = Path(path).expanduser()
        if p.is_absolute():
            return p
        return self.base_dir / p

    def script_globals(self) -> Dict[str, Any]:
        """Globals shared by every script evaluated in this runtime."""
        if not self._globals:
            self._globals.update(
                {
                    "console": self.console,
                    "print": self.console.log,
                    "std": self.std,
                    "os": self.os,
                }
            )
        self._globals["scriptArgs"] = list(self.script_args)
        return self._globals

    def eval_file(self, path: PathLike, args: Sequence[str] = ()) -> Dict[str, Any]:
        """Run a Python file as ``__main__`` in the shared script globals.

        Includes, the main script, ``std.loadScript`` and ``std.evalScript``
        all see each other's definitions. The file's directory is importable
        while it runs; sibling modules it imports are unloaded afterwards.

        Returns:
            The shared globals after execution.
        """
        script = self.resolve(path)
        self.script_args = [str(script), *args]
        script_dir = str(script.parent)
        before = set(sys.modules)
        sys.path.insert(0, script_dir)
        self.logger.debug(f"Evaluating {script}")
        try:
            code = compile(script.read_bytes(), str(script), "exec")
            scope = self.script_globals()
            scope["__name__"] = "__main__"
            scope["__file__"] = str(script)
            exec(code, scope)
            return scope
        finally:
            try:
                sys.path.remove(script_dir)
            except ValueError:
                pass
            for name in set(sys.modules) - before:
                origin = getattr(sys.modules[name], "__file__", None)
                if origin and Path(origin).parent == script.parent:
                    del sys.modules[name]

    def execute(
        self,
        path: PathLike,
        includes: Iterable[PathLike] = (),
        args: Sequence[str] = (),
        dump_memory: bool = False,
        trace_memory: bool = False,
    ) -> int:
        """Evaluate includes, then the script, then run the loop.

        Returns:
            0 on success, the ``std.exit`` code, or 1 if an error escaped.
        """
        script = self.resolve(path)
        include_paths = [self.resolve(i) for i in includes]
        tracker = MemoryTracker(trace=trace_memory) if (dump_memory or trace_memory) else None

        run = None
        if self.event_client is not None:
            run = self.event_client.run_started(script, include_paths)
        if tracker:
            tracker.start()

        error_message = None
        try:
            for include in include_paths:
                self.eval_file(include)
            self.eval_file(script, args)
            self.loop.run()
            exit_code = 0
        except HostExit as e:
            self.logger.info(f"Script requested exit with code {e.code}")
            exit_code = e.code
        except Exception as e:
            self.logger.error(f"Script {script} failed: {e}")
            traceback.print_exc(file=self.stderr)
            error_message = f"{type(e).__name__}: {e}"
            exit_code = 1
        finally:
            if tracker:
                tracker.stop()

        if tracker:
            tracker.dump(self.stdout)

        if run is not None:
            self.event_client.run_finished(run, exit_code, error_message)
        return exit_code
