# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Greeting formatting."""

from typing import Optional

DEFAULT_NAME = "World"


def format_greeting(name: Optional[str], default: str = DEFAULT_NAME) -> str:
    """Return ``Hello <name>!``.

    Only ``None`` counts as absent; an empty string is greeted as-is.

    Example:
        >>> format_greeting(None)
        'Hello World!'
        >>> format_greeting("Ada")
        'Hello Ada!'
    """
    if name is None:
        name = default
    return f"Hello {name}!"
