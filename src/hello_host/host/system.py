# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""The ``os`` namespace: filesystem, timers and platform queries."""

import os
import sys
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from hello_host.host.errors import HostError
from hello_host.host.namespace import Namespace

if TYPE_CHECKING:
    from hello_host.host.runtime import Runtime


def _platform() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def build_system(runtime: "Runtime") -> Namespace:
    """Create the ``os`` namespace bound to ``runtime``."""
    ns = Namespace("os")

    def _os_call(fn: Callable, *args: Any) -> Any:
        try:
            return fn(*args)
        except OSError as e:
            raise HostError(str(e)) from e

    @ns.member("getcwd")
    def getcwd() -> str:
        return str(runtime.base_dir)

    @ns.member("realpath")
    def realpath(path: str) -> str:
        return str(_os_call(os.path.realpath, runtime.resolve(path)))

    @ns.member("readdir")
    def readdir(path: str = ".") -> List[str]:
        return sorted(_os_call(os.listdir, runtime.resolve(path)))

    @ns.member("stat")
    def stat(path: str) -> Dict[str, Any]:
        st = _os_call(os.stat, runtime.resolve(path))
        return {
            "size": st.st_size,
            "mode": st.st_mode,
            "mtime": int(st.st_mtime * 1000),
            "is_dir": os.path.isdir(runtime.resolve(path)),
        }

    @ns.member("mkdir")
    def mkdir(path: str, mode: int = 0o777) -> None:
        _os_call(os.mkdir, runtime.resolve(path), mode)

    @ns.member("remove")
    def remove(path: str) -> None:
        full = runtime.resolve(path)
        if full.is_dir():
            _os_call(os.rmdir, full)
        else:
            _os_call(os.remove, full)

    @ns.member("rename")
    def rename(old: str, new: str) -> None:
        _os_call(os.rename, runtime.resolve(old), runtime.resolve(new))

    @ns.member("isatty")
    def isatty(fd: int) -> bool:
        return os.isatty(fd)

    @ns.member("sleep")
    def sleep(ms: float) -> None:
        time.sleep(ms / 1000.0)

    @ns.member("setTimeout")
    def set_timeout(fn: Callable, ms: float = 0) -> int:
        return runtime.loop.call_later(ms, fn)

    @ns.member("clearTimeout")
    def clear_timeout(handle: int) -> None:
        runtime.loop.cancel(handle)

    @ns.member("now")
    def now() -> float:
        return time.monotonic() * 1000.0

    ns.export("platform", _platform())

    return ns
