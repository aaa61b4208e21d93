# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
The ``std`` namespace: process, file and formatting helpers.

Relative paths resolve against the runtime base directory, not the
process working directory.
"""

import ast
import gc
import json
import logging
import os
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from hello_host.host.errors import HostError, HostExit
from hello_host.host.namespace import Namespace

if TYPE_CHECKING:
    from hello_host.host.runtime import Runtime

logger = logging.getLogger(__name__)


def eval_source(source: str, scope: Dict[str, Any], filename: str = "<evalScript>") -> Any:
    """Execute ``source`` in ``scope``; return the trailing expression's value."""
    tree = ast.parse(source, filename=filename, mode="exec")
    tail = None
    if tree.body and isinstance(tree.body[-1], ast.Expr):
        tail = ast.Expression(tree.body.pop().value)
    exec(compile(tree, filename, "exec"), scope)
    if tail is None:
        return None
    return eval(compile(tail, filename, "eval"), scope)


def build_std(runtime: "Runtime") -> Namespace:
    """Create the ``std`` namespace bound to ``runtime``."""
    std = Namespace("std")

    @std.member("exit")
    def exit_(code: int = 0) -> None:
        raise HostExit(int(code))

    @std.member("gc")
    def gc_() -> None:
        gc.collect()

    @std.member("evalScript")
    def eval_script(source: str) -> Any:
        return eval_source(source, runtime.script_globals())

    @std.member("loadScript")
    def load_script(path: str) -> None:
        full = runtime.resolve(path)
        try:
            source = full.read_text()
        except OSError as e:
            raise HostError(f"could not load script '{path}': {e}")
        eval_source(source, runtime.script_globals(), filename=str(full))

    @std.member("loadFile")
    def load_file(path: str, callback: Optional[Callable[[str], Any]] = None) -> Optional[str]:
        full = runtime.resolve(path)
        if callback is None:
            try:
                return full.read_text()
            except OSError:
                return None

        def deliver() -> None:
            try:
                text = full.read_text()
            except OSError as e:
                raise HostError(f"could not load '{path}': {e}")
            callback(text)

        logger.debug(f"Deferred read of {full}")
        runtime.loop.enqueue(deliver)
        return None

    @std.member("writeFile")
    def write_file(path: str, text: str) -> None:
        full = runtime.resolve(path)
        try:
            full.write_text(text)
        except OSError as e:
            raise HostError(f"could not write '{path}': {e}")

    @std.member("getenv")
    def getenv(name: str) -> Optional[str]:
        return os.environ.get(name)

    @std.member("setenv")
    def setenv(name: str, value: str) -> None:
        os.environ[name] = str(value)

    @std.member("unsetenv")
    def unsetenv(name: str) -> None:
        os.environ.pop(name, None)

    @std.member("getenviron")
    def getenviron() -> Dict[str, str]:
        return dict(os.environ)

    @std.member("strerror")
    def strerror(errno: int) -> str:
        return os.strerror(errno)

    @std.member("parseExtJSON")
    def parse_ext_json(text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise HostError(f"invalid JSON: {e}")

    @std.member("puts")
    def puts(text: str) -> None:
        runtime.stdout.write(str(text))

    def sprintf(fmt: str, *args: Any) -> str:
        return fmt % args if args else fmt

    @std.member("printf")
    def printf(fmt: str, *args: Any) -> None:
        runtime.stdout.write(sprintf(fmt, *args))

    std.export("sprintf", sprintf)

    std.export("in", runtime.stdin)
    std.export("out", runtime.stdout)
    std.export("err", runtime.stderr)

    return std
