# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import importlib
import unittest


class CliModuleTests(unittest.TestCase):
    def test_cli_main_is_callable(self) -> None:
        module = importlib.import_module("toolctl.cli.main")
        self.assertTrue(callable(getattr(module, "main", None)))
        self.assertTrue(callable(getattr(module, "run", None)))

    def test_module_entry_point_imports(self) -> None:
        module = importlib.import_module("toolctl.cli.__main__")
        self.assertTrue(callable(getattr(module, "main", None)))
