# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Built-in commands.

Each module exposes a ``commands`` list of :class:`~toolctl.lib.core.types.Command`
descriptors, the same shape plugins and entry points provide.
"""

from ...lib.core.types import Command
from . import config, info


def builtin_commands() -> list[Command]:
    return [*info.commands, *config.commands]
