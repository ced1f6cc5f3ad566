#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""toolctl entry point: setup, command registration and dispatch."""

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

# Optional: shell completion via argcomplete
try:
    import argcomplete  # type: ignore
except ImportError:  # pragma: no cover - optional dep
    argcomplete = None  # type: ignore

from ..lib._util.ansi import cyan, red, supports_color
from ..lib.core.config import load_config_stack
from ..lib.core.discovery import get_commands
from ..lib.core.setup_env import run_setup_env
from ..lib.core.types import Context
from ..lib.core.version import format_version_string, get_version_info
from ..lib.util.logging_utils import _log_debug
from .commands import builtin_commands
from .errors import handle_error
from .help import PROG
from .registry import CommandRegistry


def _find_config_flag(argv: Sequence[str]) -> str | None:
    """Return the ``--config`` value wherever it appears in *argv*."""
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre.add_argument("--config", nargs="?")
    known, _ = pre.parse_known_args(list(argv))
    return known.config


def _first_positional(argv: Sequence[str]) -> str | None:
    """Return the candidate command token, skipping a leading global ``--config``."""
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == "--config":
            i += 2
        elif token.startswith("--config="):
            i += 1
        else:
            return token
    return None


def print_unknown_command(cmd_name: str | None) -> None:
    color_enabled = supports_color()
    if cmd_name:
        headline = red(f"  Unrecognized command '{cmd_name}'", color_enabled)
    else:
        headline = red("  You didn't pass any command", color_enabled)
    print(
        "\n".join(
            [
                "",
                headline,
                f"  Run {cyan(f'{PROG} --help', color_enabled)} "
                "to see list of all available commands",
                "",
            ]
        )
    )


def _default_registry() -> CommandRegistry:
    version, branch = get_version_info()
    return CommandRegistry(version=format_version_string(version, branch))


def run(
    argv: Sequence[str] | None = None,
    registry: CommandRegistry | None = None,
    cwd: Path | None = None,
) -> int:
    """Set up the environment, register all commands and dispatch *argv*.

    Returns the exit status for the no-command and unknown-command paths;
    command failures leave through ``handle_error`` (``SystemExit(1)``).
    """
    argv = sys.argv[1:] if argv is None else list(argv)

    run_setup_env()

    root = Path.cwd() if cwd is None else Path(cwd)
    registry = _default_registry() if registry is None else registry
    try:
        config_file = _find_config_flag(argv)
        stack = load_config_stack(root, config_file)
        ctx = Context(root=root, config=stack.resolve(), config_file=config_file)
        for command in get_commands(root, ctx.config, builtins=builtin_commands()):
            registry.add_command(command, ctx)
    except Exception as err:
        handle_error(err)

    if argcomplete is not None:  # pragma: no cover - shell integration
        argcomplete.autocomplete(registry.parser)

    candidate = _first_positional(argv)
    if candidate is None:
        print_unknown_command(None)
        registry.print_help()
        return 0
    if not candidate.startswith("-") and registry.find(candidate) is None:
        _log_debug(f"run: unrecognized command '{candidate}'")
        print_unknown_command(candidate)
        return 0

    ns = registry.parse(argv)
    entry = registry.selected(ns)
    if entry is None:
        registry.print_help()
        return 0

    _log_debug(f"run: dispatching '{entry.command.command_name}' root={root}")
    asyncio.run(entry.invoke(ns))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
