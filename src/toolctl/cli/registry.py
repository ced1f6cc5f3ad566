# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Command registry: turns command descriptors into argparse subcommands.

The registry owns its parser, so several registries can coexist (tests build
a fresh one per case).  Each registered command gets:

- positional arguments declared after the first token of its name
- one argparse option per descriptor option, keyed by the long flag name
- a placeholder ``--config`` option (the dispatcher reads the value itself)
- the custom help layout from :mod:`toolctl.cli.help`
"""

from __future__ import annotations

import argparse
import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..lib._util.ansi import supports_color
from ..lib.core.flags import ArgSpec, FlagSpec, format_usage, parse_args_syntax, parse_flag
from ..lib.core.options import assert_required_options
from ..lib.core.types import Command, Context, resolve_default
from ..lib.util.logging_utils import _log_debug
from .errors import handle_error
from .help import PROG, CommandView, render_command_help

_ENTRY_ATTR = "_toolctl_entry"


def _identity(value: str) -> str:
    return value


def _escape(text: str) -> str:
    """Escape ``%`` so argparse does not treat help text as a format string."""
    return text.replace("%", "%%")


class _ParsedValueAction(argparse.Action):
    """Store a value supplied on the command line after running the option's parse function.

    Defaults never pass through here, so they reach the command untouched.
    """

    def __init__(
        self, option_strings: Sequence[str], dest: str, parse: Callable[[str], Any], **kwargs: Any
    ) -> None:
        self.parse = parse
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if isinstance(values, str):
            try:
                values = self.parse(values)
            except (TypeError, ValueError) as e:
                raise argparse.ArgumentError(self, f"invalid value {values!r}: {e}") from e
        setattr(namespace, self.dest, values)


class CommandParser(argparse.ArgumentParser):
    """Subcommand parser that renders help through :func:`render_command_help`."""

    def __init__(self, *args: Any, command: Command | None = None, **kwargs: Any) -> None:
        self.command = command
        self.arg_specs: list[ArgSpec] = parse_args_syntax(command.name) if command else []
        super().__init__(*args, **kwargs)

    def option_help(self) -> str:
        formatter = self._get_formatter()
        formatter.add_arguments(self._optionals._group_actions)
        return formatter.format_help()

    def format_help(self) -> str:
        if self.command is None:
            return super().format_help()
        view = CommandView(
            name=self.command.command_name,
            alias=self.command.alias,
            usage=format_usage(self.arg_specs),
            description=self.command.description,
            option_help=self.option_help(),
            pkg=self.command.pkg,
            examples=tuple(self.command.examples),
        )
        return render_command_help(view, supports_color())


@dataclass
class RegisteredCommand:
    """A command bound to its context and parsed syntax."""

    command: Command
    ctx: Context
    arg_specs: list[ArgSpec] = field(default_factory=list)
    flag_specs: list[FlagSpec] = field(default_factory=list)

    def positional_args(self, ns: argparse.Namespace) -> list[Any]:
        return [getattr(ns, _arg_dest(i), None) for i in range(len(self.arg_specs))]

    def passed_options(self, ns: argparse.Namespace) -> dict[str, Any]:
        keys = dict.fromkeys([*(spec.key for spec in self.flag_specs), "config"])
        return {key: getattr(ns, key, None) for key in keys}

    async def invoke(self, ns: argparse.Namespace) -> None:
        """Validate options, then run the command; failures go to handle_error."""
        args = self.positional_args(ns)
        options = self.passed_options(ns)
        try:
            assert_required_options(self.command.options, options)
            result = self.command.func(args, self.ctx, options)
            if inspect.isawaitable(result):
                await result
        except Exception as err:
            handle_error(err)


def _arg_dest(index: int) -> str:
    return f"_arg_{index}"


class CommandRegistry:
    """Explicit, constructed replacement for a process-wide command table."""

    def __init__(self, version: str | None = None) -> None:
        self.parser = argparse.ArgumentParser(
            prog=PROG,
            description="toolctl: build and project tooling commands",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"Run '{PROG} <command> --help' for the options of a command.",
        )
        if version is not None:
            self.parser.add_argument("--version", action="version", version=f"{PROG} {version}")
        self.parser.add_argument(
            "--config",
            dest="global_config",
            metavar="PATH",
            help="Path to the CLI configuration file",
        )
        self._subparsers = self.parser.add_subparsers(
            dest="_command", metavar="<command>", parser_class=CommandParser
        )
        self.entries: list[RegisteredCommand] = []
        self._routed: set[str] = set()

    # ---------- registration ----------

    def add_command(self, command: Command, ctx: Context) -> None:
        """Register *command*; the first registration of a name receives argv routing."""
        entry = RegisteredCommand(
            command=command,
            ctx=ctx,
            arg_specs=parse_args_syntax(command.name),
            flag_specs=[parse_flag(opt.command) for opt in command.options],
        )
        self.entries.append(entry)

        name = command.command_name
        if name in self._routed:
            _log_debug(f"add_command: '{name}' already routed, entry kept unrouted")
            return

        kwargs: dict[str, Any] = {"command": command}
        if command.description:
            kwargs["help"] = _escape(command.description)
        aliases = [command.alias] if command.alias and command.alias not in self._routed else []
        cmd = self._subparsers.add_parser(name, aliases=aliases, **kwargs)
        self._routed.update([name, *aliases])

        for i, spec in enumerate(entry.arg_specs):
            arg_kwargs: dict[str, Any] = {"metavar": spec.name}
            if spec.nargs is not None:
                arg_kwargs["nargs"] = spec.nargs
            cmd.add_argument(_arg_dest(i), **arg_kwargs)

        for opt, spec in zip(command.options, entry.flag_specs):
            _add_option(cmd, opt.description, spec, opt.parse, resolve_default(opt.default, ctx))

        # Consumed by the dispatcher before subcommand parsing; declared here so
        # argparse does not reject it after the command name. A bare --config
        # stores None, as in the dispatcher's pre-scan.
        if not any("--config" in spec.flags for spec in entry.flag_specs):
            cmd.add_argument(
                "--config",
                dest="config",
                nargs="?",
                metavar="string",
                help="Path to the CLI configuration file",
            )
        cmd.set_defaults(**{_ENTRY_ATTR: entry})

    # ---------- lookup ----------

    def names(self) -> set[str]:
        """Every name argv can select, aliases included."""
        return set(self._routed)

    def find(self, name: str | None) -> RegisteredCommand | None:
        """Return the first entry registered under *name* (or its alias)."""
        for entry in self.entries:
            if name in (entry.command.command_name, entry.command.alias):
                return entry
        return None

    # ---------- parsing ----------

    def parse(self, argv: Sequence[str]) -> argparse.Namespace:
        return self.parser.parse_args(list(argv))

    @staticmethod
    def selected(ns: argparse.Namespace) -> RegisteredCommand | None:
        """The entry whose subparser consumed *ns*, if any."""
        return getattr(ns, _ENTRY_ATTR, None)

    def print_help(self) -> None:
        self.parser.print_help()


def _add_option(
    cmd: argparse.ArgumentParser,
    description: str,
    spec: FlagSpec,
    parse: Callable[[str], Any] | None,
    default: Any,
) -> None:
    help_text = _escape(description) if description else None
    if not spec.takes_value:
        if spec.negate:
            cmd.add_argument(
                *spec.flags,
                dest=spec.key,
                action="store_false",
                default=True if default is None else default,
                help=help_text,
            )
        else:
            cmd.add_argument(
                *spec.flags, dest=spec.key, action="store_true", default=default, help=help_text
            )
        return

    cmd.add_argument(
        *spec.flags,
        dest=spec.key,
        action=_ParsedValueAction,
        parse=parse or _identity,
        nargs="?" if spec.value_optional else None,
        const=True if spec.value_optional else None,
        default=default,
        metavar=spec.metavar,
        help=help_text,
    )
