# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Script host: namespaces, console, job queue and runtime."""

from hello_host.host.console import Console, format_value
from hello_host.host.errors import HostError, HostExit
from hello_host.host.loop import JobQueue
from hello_host.host.memory import MemoryTracker
from hello_host.host.namespace import Namespace
from hello_host.host.runtime import Runtime

__all__ = [
    "Console",
    "format_value",
    "HostError",
    "HostExit",
    "JobQueue",
    "MemoryTracker",
    "Namespace",
    "Runtime",
]
