# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Required-option validation for registered commands."""

from collections.abc import Mapping, Sequence
from typing import Any

from .flags import parse_flag
from .types import Option


class MissingRequiredOptionError(Exception):
    """A command was invoked without one of its required options."""

    def __init__(self, flag: str) -> None:
        super().__init__(f"error: option '{flag}' missing")
        self.flag = flag


def assert_required_options(options: Sequence[Option], passed_options: Mapping[str, Any]) -> None:
    """Raise MissingRequiredOptionError for the first required option without a value."""
    for opt in options:
        if not opt.required:
            continue
        spec = parse_flag(opt.command)
        if passed_options.get(spec.key) is None:
            raise MissingRequiredOptionError(spec.display)
