# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the host surface."""


class HostError(Exception):
    """Raised when a host namespace call fails."""

    pass


class HostExit(Exception):
    """Raised by ``std.exit`` to stop the running script."""

    def __init__(self, code: int = 0):
        super().__init__(f"script exited with code {code}")
        self.code = code
