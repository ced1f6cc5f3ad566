# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Translate descriptor flag and argument syntax into argparse terms.

Option syntax::

    "-p, --platform <string>"   value required
    "--dev [boolean]"           value optional (bare flag gives True)
    "--reset-cache"             plain switch
    "--no-minify"               negated switch, stored as "minify"

Argument syntax (everything after the first token of a command name)::

    "<file>"  "[file]"  "<files...>"  "[files...]"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SPLIT = re.compile(r"[\s,|]+")


@dataclass(frozen=True)
class FlagSpec:
    flags: tuple[str, ...]
    key: str
    takes_value: bool = False
    value_optional: bool = False
    negate: bool = False
    metavar: str | None = None

    @property
    def long(self) -> str | None:
        for flag in self.flags:
            if flag.startswith("--"):
                return flag
        return None

    @property
    def display(self) -> str:
        """The flag users are told about in error messages."""
        return self.long or self.flags[0]


def parse_flag(syntax: str) -> FlagSpec:
    """Parse option flag syntax into a :class:`FlagSpec`.

    Raises ValueError when *syntax* names no flag.
    """
    tokens = [t for t in _SPLIT.split(syntax.strip()) if t]
    flags = tuple(t for t in tokens if t.startswith("-"))
    if not flags:
        raise ValueError(f"Invalid option syntax: {syntax!r}")

    value = next((t for t in tokens if t[0] in "<["), None)
    long = next((f for f in flags if f.startswith("--")), None)

    negate = bool(long and long.startswith("--no-"))
    if long:
        key = long[5:] if negate else long[2:]
    else:
        key = flags[0].lstrip("-")

    if value is None:
        return FlagSpec(flags=flags, key=key, negate=negate)
    return FlagSpec(
        flags=flags,
        key=key,
        takes_value=True,
        value_optional=value.startswith("["),
        negate=negate,
        metavar=value.strip("<>[]").rstrip(".") or None,
    )


@dataclass(frozen=True)
class ArgSpec:
    name: str
    required: bool
    variadic: bool = False

    @property
    def nargs(self) -> str | None:
        if self.variadic:
            return "+" if self.required else "*"
        return None if self.required else "?"

    def __str__(self) -> str:
        inner = self.name + ("..." if self.variadic else "")
        return f"<{inner}>" if self.required else f"[{inner}]"


def parse_args_syntax(name: str) -> list[ArgSpec]:
    """Return the positional arguments declared after the first token of *name*."""
    specs: list[ArgSpec] = []
    for token in name.split()[1:]:
        if token == "[options]":
            continue
        if not (token[:1] in "<[" and token[-1:] in ">]"):
            raise ValueError(f"Invalid argument syntax {token!r} in command {name!r}")
        inner = token[1:-1]
        variadic = inner.endswith("...")
        specs.append(
            ArgSpec(
                name=inner[:-3] if variadic else inner,
                required=token.startswith("<"),
                variadic=variadic,
            )
        )
    return specs


def format_usage(args: list[ArgSpec]) -> str:
    """Usage string shown after the command name in help output."""
    return " ".join(["[options]", *(str(a) for a in args)])
