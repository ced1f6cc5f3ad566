# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Per-command help rendering.

Replaces argparse's default help for subcommands with a layout that shows
the command's source package and usage examples.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..lib._util.ansi import bold, cyan
from ..lib.core.types import Example, PackageInfo

PROG = "toolctl"


@dataclass(frozen=True)
class CommandView:
    """Everything the help renderer needs to know about one command."""

    name: str
    usage: str
    option_help: str
    description: str | None = None
    alias: str | None = None
    pkg: PackageInfo | None = None
    examples: Sequence[Example] = ()


def _indent(text: str, prefix: str) -> str:
    return re.sub(r"^", prefix, text, flags=re.MULTILINE)


def render_command_help(view: CommandView, color_enabled: bool) -> str:
    """Return the full help text for one command."""
    cmd_name = view.name
    if view.alias:
        cmd_name = f"{cmd_name}|{view.alias}"

    source = (
        [f"  {bold('Source:', color_enabled)} {view.pkg.name}@{view.pkg.version}", ""]
        if view.pkg
        else []
    )

    output = [
        "",
        bold(cyan(f"  {PROG} {cmd_name} {view.usage}", color_enabled), color_enabled),
        f"  {view.description}" if view.description else "",
        "",
        *source,
        f"  {bold('Options:', color_enabled)}",
        "",
        _indent(view.option_help.rstrip("\n"), "    "),
        "",
    ]

    if view.examples:
        formatted = "\n\n".join(
            f"    {ex.desc}: \n    {cyan(ex.cmd, color_enabled)}" for ex in view.examples
        )
        output += [bold("  Example usage:", color_enabled), "", formatted]

    return "\n".join([*output, "", ""])
