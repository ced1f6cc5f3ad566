# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for CommandRegistry: option mapping, validation and invocation."""

import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path

from test_utils import invoke, recording_command, toolctl_env

from toolctl.cli.registry import CommandRegistry
from toolctl.lib.core.types import Command, Context, Derived, Example, Literal, Option, PackageInfo

CTX = Context(root=Path("/work/app"))


class RegistryInvocationTests(unittest.TestCase):
    def test_required_option_value_reaches_command(self) -> None:
        calls, cmd = recording_command(
            options=[Option(command="--entry-file <path>", description="Entry", required=True)]
        )
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["bundle", "--entry-file", "index.js"])

        self.assertEqual(len(calls), 1)
        args, ctx, options = calls[0]
        self.assertEqual(args, [])
        self.assertIs(ctx, CTX)
        self.assertEqual(options["entry-file"], "index.js")
        self.assertIsNone(options["config"])

    def test_missing_required_option_fails_before_command_runs(self) -> None:
        calls, cmd = recording_command(
            options=[Option(command="--entry-file <path>", required=True)]
        )
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        stderr = StringIO()
        with toolctl_env(), redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as cm:
                invoke(registry, ["bundle"])

        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(calls, [])
        self.assertIn("error: option '--entry-file' missing", stderr.getvalue())

    def test_command_failure_exits_with_status_one(self) -> None:
        async def boom(args, ctx, options):
            raise Exception("boom")

        registry = CommandRegistry()
        registry.add_command(Command(name="explode", func=boom), CTX)

        stderr = StringIO()
        with toolctl_env(), redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as cm:
                invoke(registry, ["explode"])

        self.assertEqual(cm.exception.code, 1)
        self.assertIn("boom", stderr.getvalue())
        self.assertIn("Traceback", stderr.getvalue())

    def test_synchronous_command_function_is_supported(self) -> None:
        seen: list[dict] = []
        registry = CommandRegistry()
        registry.add_command(
            Command(name="sync", func=lambda args, ctx, options: seen.append(options)), CTX
        )

        invoke(registry, ["sync"])

        self.assertEqual(seen, [{"config": None}])

    def test_config_placeholder_is_accepted_by_every_command(self) -> None:
        calls, cmd = recording_command()
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["bundle", "--config", "ci.yml"])

        self.assertEqual(calls[0][2]["config"], "ci.yml")

    def test_bare_config_placeholder_stores_none(self) -> None:
        calls, cmd = recording_command()
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["bundle", "--config"])

        self.assertIsNone(calls[0][2]["config"])

    def test_command_declaring_config_keeps_its_own_option(self) -> None:
        calls, cmd = recording_command(options=[Option(command="--config <file>")])
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["bundle", "--config", "own.yml"])

        self.assertEqual(calls[0][2]["config"], "own.yml")


class RegistryOptionMappingTests(unittest.TestCase):
    def _run(self, options: list[Option], argv: list[str], ctx: Context = CTX) -> dict:
        calls, cmd = recording_command(name="run", options=options)
        registry = CommandRegistry()
        registry.add_command(cmd, ctx)
        invoke(registry, ["run", *argv])
        return calls[0][2]

    def test_parse_function_applies_to_supplied_values_only(self) -> None:
        opts = [Option(command="--port <number>", parse=int, default="8081")]
        self.assertEqual(self._run(opts, [])["port"], "8081")
        self.assertEqual(self._run(opts, ["--port", "9000"])["port"], 9000)

    def test_literal_default(self) -> None:
        opts = [Option(command="--platform <string>", default=Literal("ios"))]
        self.assertEqual(self._run(opts, [])["platform"], "ios")

    def test_derived_default_is_computed_from_context(self) -> None:
        opts = [
            Option(command="--project-root <dir>", default=Derived(lambda ctx: str(ctx.root))),
            Option(command="--assets-dest <dir>", default=lambda ctx: str(ctx.root / "assets")),
        ]
        options = self._run(opts, [])
        self.assertEqual(options["project-root"], "/work/app")
        self.assertEqual(options["assets-dest"], str(Path("/work/app") / "assets"))

    def test_optional_value_flag(self) -> None:
        opts = [Option(command="--dev [boolean]")]
        self.assertIsNone(self._run(opts, [])["dev"])
        self.assertIs(self._run(opts, ["--dev"])["dev"], True)
        self.assertEqual(self._run(opts, ["--dev", "false"])["dev"], "false")

    def test_switches(self) -> None:
        opts = [Option(command="--reset-cache"), Option(command="--no-minify")]
        options = self._run(opts, [])
        self.assertIsNone(options["reset-cache"])
        self.assertIs(options["minify"], True)

        options = self._run(opts, ["--reset-cache", "--no-minify"])
        self.assertIs(options["reset-cache"], True)
        self.assertIs(options["minify"], False)

    def test_short_and_long_flags_share_key(self) -> None:
        opts = [Option(command="-p, --platform <string>")]
        self.assertEqual(self._run(opts, ["-p", "android"])["platform"], "android")

    def test_invalid_value_is_a_usage_error(self) -> None:
        opts = [Option(command="--port <number>", parse=int)]
        with redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as cm:
                self._run(opts, ["--port", "abc"])
        self.assertEqual(cm.exception.code, 2)


class RegistryPositionalTests(unittest.TestCase):
    def test_optional_positional(self) -> None:
        calls, cmd = recording_command(name="link [package]")
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["link"])
        invoke(registry, ["link", "left-pad"])

        self.assertEqual(calls[0][0], [None])
        self.assertEqual(calls[1][0], ["left-pad"])

    def test_required_and_variadic_positionals(self) -> None:
        calls, cmd = recording_command(name="copy [options] <dest> [files...]")
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["copy", "out", "a.txt", "b.txt"])

        self.assertEqual(calls[0][0], ["out", ["a.txt", "b.txt"]])


class RegistryTableTests(unittest.TestCase):
    def test_duplicate_names_are_kept_as_independent_entries(self) -> None:
        first_calls, first = recording_command(description="first")
        second_calls, second = recording_command(description="second")
        registry = CommandRegistry()
        registry.add_command(first, CTX)
        registry.add_command(second, CTX)

        self.assertEqual(len(registry.entries), 2)
        self.assertIs(registry.find("bundle").command, first)

        invoke(registry, ["bundle"])
        self.assertEqual(len(first_calls), 1)
        self.assertEqual(second_calls, [])

    def test_alias_routes_to_command(self) -> None:
        calls, cmd = recording_command(name="run-ios", alias="ios")
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        invoke(registry, ["ios"])

        self.assertEqual(registry.names(), {"run-ios", "ios"})
        self.assertEqual(len(calls), 1)

    def test_command_without_description_is_hidden_from_listing(self) -> None:
        _, visible = recording_command(name="visible", description="Shown in help")
        _, hidden = recording_command(name="hidden")
        registry = CommandRegistry()
        registry.add_command(visible, CTX)
        registry.add_command(hidden, CTX)

        text = registry.parser.format_help()

        self.assertIn("visible", text)
        self.assertIn("Shown in help", text)
        self.assertNotIn("hidden", text)

    def test_percent_in_description_is_escaped(self) -> None:
        _, cmd = recording_command(description="Run 100% of the tests")
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        self.assertIn("100% of the tests", registry.parser.format_help())

    def test_version_flag(self) -> None:
        registry = CommandRegistry(version="1.2.3")
        stdout = StringIO()
        with redirect_stdout(stdout):
            with self.assertRaises(SystemExit) as cm:
                registry.parse(["--version"])
        self.assertEqual(cm.exception.code, 0)
        self.assertIn("toolctl 1.2.3", stdout.getvalue())


class CommandHelpTests(unittest.TestCase):
    def test_subcommand_help_uses_custom_layout(self) -> None:
        _, cmd = recording_command(
            name="bundle [target]",
            description="Build the bundle",
            options=[Option(command="--entry-file <path>", description="Entry point file")],
            examples=[Example(desc="Bundle the app", cmd="toolctl bundle --entry-file index.js")],
            pkg=PackageInfo(name="toolctl-bundler", version="1.2.3"),
        )
        registry = CommandRegistry()
        registry.add_command(cmd, CTX)

        stdout = StringIO()
        with toolctl_env(), redirect_stdout(stdout):
            with self.assertRaises(SystemExit) as cm:
                registry.parse(["bundle", "--help"])

        text = stdout.getvalue()
        self.assertEqual(cm.exception.code, 0)
        self.assertIn("  toolctl bundle [options] [target]", text)
        self.assertIn("  Build the bundle", text)
        self.assertIn("  Source: toolctl-bundler@1.2.3", text)
        self.assertIn("--entry-file path", text)
        self.assertIn("Entry point file", text)
        self.assertIn("--config [string]", text)
        self.assertIn("Example usage:", text)
        self.assertIn("    Bundle the app: \n    toolctl bundle --entry-file index.js", text)
        self.assertNotIn("\x1b[", text)


if __name__ == "__main__":
    unittest.main()
