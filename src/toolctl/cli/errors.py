# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Uniform reporting for failures raised while running a command."""

import sys
import traceback
from typing import NoReturn

from ..lib.util.logging_utils import _log_debug


def handle_error(err: BaseException) -> NoReturn:
    """Print *err* and its traceback to stderr, then exit with status 1."""
    message = str(err) or repr(err)
    print(file=sys.stderr)
    print(message, file=sys.stderr)
    print(file=sys.stderr)
    if err.__traceback__ is not None:
        print("".join(traceback.format_exception(err)).rstrip("\n"), file=sys.stderr)
        print(file=sys.stderr)
    _log_debug(f"handle_error: {type(err).__name__}: {message}")
    raise SystemExit(1)
