# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""hello-host: run small Python scripts against a std/os host surface."""

__version__ = "0.1.0"
