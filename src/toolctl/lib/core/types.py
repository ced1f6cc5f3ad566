# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Command descriptors and the shared invocation context.

Descriptors are produced by command discovery and only read by the
registry; they are frozen once built.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# ---------- Context ----------


@dataclass(frozen=True)
class Context:
    """Startup state shared by every command of one invocation."""

    root: Path
    config: dict[str, Any] = field(default_factory=dict)
    config_file: str | None = None  # explicit --config path, if one was given


# ---------- Option defaults ----------


@dataclass(frozen=True)
class Literal:
    """A default used as-is."""

    value: Any


@dataclass(frozen=True)
class Derived:
    """A default computed from the context at registration time."""

    fn: Callable[[Context], Any]


def resolve_default(default: Any, ctx: Context) -> Any:
    """Resolve an option default against *ctx*.

    Bare callables are treated as :class:`Derived`, any other bare value as
    :class:`Literal`.
    """
    if isinstance(default, Literal):
        return default.value
    if isinstance(default, Derived):
        return default.fn(ctx)
    if callable(default):
        return default(ctx)
    return default


# ---------- Descriptors ----------


@dataclass(frozen=True)
class Option:
    command: str  # flag syntax, e.g. "-p, --platform <string>"
    description: str = ""
    parse: Callable[[str], Any] | None = None
    default: Any = None
    required: bool = False


@dataclass(frozen=True)
class Example:
    desc: str
    cmd: str


@dataclass(frozen=True)
class PackageInfo:
    name: str
    version: str


CommandFunc = Callable[[list[Any], Context, dict[str, Any]], Awaitable[None] | None]


@dataclass(frozen=True)
class Command:
    name: str  # first token is the subcommand, the rest declares arguments
    func: CommandFunc
    description: str | None = None
    options: Sequence[Option] = ()
    examples: Sequence[Example] = ()
    pkg: PackageInfo | None = None
    alias: str | None = None

    @property
    def command_name(self) -> str:
        """The token argv is matched against."""
        return self.name.split(" ")[0]
