# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Named collections of host members exposed to scripts."""

from typing import Any, Callable, Dict, List

from hello_host.host.errors import HostError


class Namespace:
    """Ordered set of exported members.

    Members are reachable as attributes (``std.loadFile``) or by key
    (``std["in"]``) for names that collide with Python keywords.
    """

    def __init__(self, name: str):
        self._name = name
        self._members: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._name

    def export(self, key: str, value: Any) -> None:
        """Register a member under ``key``.

        Raises:
            HostError: If ``key`` is already registered.
        """
        if key in self._members:
            raise HostError(f"{self._name}.{key} is already defined")
        self._members[key] = value

    def member(self, key: str) -> Callable:
        """Decorator form of :meth:`export`."""

        def decorator(fn: Callable) -> Callable:
            self.export(key, fn)
            return fn

        return decorator

    def keys(self) -> List[str]:
        return list(self._members)

    def __getitem__(self, key: str) -> Any:
        try:
            return self._members[key]
        except KeyError:
            raise KeyError(f"{self._name} has no member '{key}'") from None

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._members[key]
        except KeyError:
            raise AttributeError(f"{self._name} has no member '{key}'") from None

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def __iter__(self):
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"<namespace {self._name}: {', '.join(self._members)}>"
