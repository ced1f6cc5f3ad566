# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Command discovery.

Commands come from three places, in this order:

1. built-ins handed in by the CLI
2. installed distributions, via the ``toolctl.commands`` entry-point group
3. project plugin modules listed under ``plugins`` in the config

An entry point or a plugin's ``commands`` attribute may be a :class:`Command`,
a list/tuple of them, or a zero-argument callable returning either.
"""

import dataclasses
import importlib
import sys
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path
from typing import Any

from .config import get_disabled_commands, get_plugins
from .types import Command, PackageInfo

ENTRY_POINT_GROUP = "toolctl.commands"


def _as_commands(obj: Any, origin: str) -> list[Command]:
    if callable(obj) and not isinstance(obj, Command):
        obj = obj()
    if isinstance(obj, Command):
        return [obj]
    if isinstance(obj, (list, tuple)) and all(isinstance(c, Command) for c in obj):
        return list(obj)
    raise TypeError(f"{origin} does not provide toolctl commands (got {type(obj).__name__})")


def entry_point_commands() -> list[Command]:
    """Commands published by installed distributions, tagged with their package."""
    result: list[Command] = []
    for ep in metadata.entry_points(group=ENTRY_POINT_GROUP):
        commands = _as_commands(ep.load(), f"Entry point '{ep.name}'")
        pkg = PackageInfo(ep.dist.name, ep.dist.version) if ep.dist is not None else None
        for cmd in commands:
            if cmd.pkg is None and pkg is not None:
                cmd = dataclasses.replace(cmd, pkg=pkg)
            result.append(cmd)
    return result


def plugin_commands(root: Path, modules: Sequence[str]) -> list[Command]:
    """Commands from project plugin modules, importable relative to *root*."""
    if not modules:
        return []
    root_str = str(root)
    added = root_str not in sys.path
    if added:
        sys.path.insert(0, root_str)
    try:
        result: list[Command] = []
        for name in modules:
            module = importlib.import_module(name)
            if not hasattr(module, "commands"):
                raise AttributeError(f"Plugin module '{name}' has no 'commands' attribute")
            result.extend(_as_commands(module.commands, f"Plugin module '{name}'"))
        return result
    finally:
        if added:
            sys.path.remove(root_str)


def get_commands(
    root: Path, config: dict[str, Any] | None = None, builtins: Sequence[Command] = ()
) -> list[Command]:
    """Return every command available for the project at *root*."""
    config = config or {}
    commands = [*builtins, *entry_point_commands(), *plugin_commands(root, get_plugins(config))]
    disabled = get_disabled_commands(config)
    return [c for c in commands if c.command_name not in disabled]
