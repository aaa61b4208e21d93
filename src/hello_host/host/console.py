# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Script-facing console."""

import sys
from typing import Any, Optional, TextIO


def _quote(text: str) -> str:
    # Always single quotes; backslashes and quotes are escaped
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def format_value(value: Any) -> str:
    """Render a value the way ``console.log`` prints it."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = ", ".join(_quote(v) if isinstance(v, str) else format_value(v) for v in value)
        return f"[ {items} ]"
    return str(value)


class Console:
    """Writes formatted lines to the runtime's streams."""

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def _write(self, stream: TextIO, args) -> None:
        stream.write(" ".join(format_value(a) for a in args) + "\n")
        stream.flush()

    def log(self, *args: Any) -> None:
        self._write(self.stdout, args)

    info = log
    debug = log

    def error(self, *args: Any) -> None:
        self._write(self.stderr, args)

    warn = error
