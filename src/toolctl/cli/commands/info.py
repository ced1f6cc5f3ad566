"""``toolctl info``: versions, platform and configuration files in use."""

from __future__ import annotations

import platform
import sys
from typing import Any

from ...lib._util.ansi import bold, gray, supports_color
from ...lib.core.config import global_config_search_paths, project_config_path
from ...lib.core.types import Command, Context, Example
from ...lib.core.version import format_version_string, get_version_info


def _exists(flag: bool) -> str:
    return "exists" if flag else "missing"


async def _info(args: list[Any], ctx: Context, options: dict[str, Any]) -> None:
    color_enabled = supports_color()
    version, branch = get_version_info()

    print(bold("System:", color_enabled))
    print(f"- toolctl: {format_version_string(version, branch)}")
    print(f"- Python: {platform.python_version()} ({sys.executable})")
    print(f"- Platform: {platform.platform()}")
    print(bold("Project:", color_enabled))
    print(f"- Root: {gray(str(ctx.root), color_enabled)}")

    print(bold("Configuration files:", color_enabled))
    for path in global_config_search_paths():
        print(f"- global: {gray(str(path), color_enabled)} ({_exists(path.is_file())})")
    proj = project_config_path(ctx.root)
    print(f"- project: {gray(str(proj), color_enabled)} ({_exists(proj.is_file())})")
    if ctx.config_file:
        explicit = ctx.root / ctx.config_file
        print(f"- explicit: {gray(str(explicit), color_enabled)} ({_exists(explicit.is_file())})")


commands = [
    Command(
        name="info",
        func=_info,
        description="Print environment information for bug reports",
        examples=[Example(desc="Show toolctl, Python and platform details", cmd="toolctl info")],
    )
]
