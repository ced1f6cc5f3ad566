"""``toolctl config``: show the resolved configuration with its sources."""

from __future__ import annotations

import json
from typing import Any

import yaml

from ...lib._util.ansi import gray, supports_color
from ...lib.core.config import load_config_stack
from ...lib.core.types import Command, Context, Example, Option


async def _config(args: list[Any], ctx: Context, options: dict[str, Any]) -> None:
    color_enabled = supports_color()
    stack = load_config_stack(ctx.root, ctx.config_file)

    print("Configuration layers (lowest priority first):")
    for scope in stack.scopes:
        keys = ", ".join(sorted(scope.data)) or "-"
        print(f"  [{gray(scope.level, color_enabled)}] {scope.source} keys: {keys}")
    print()

    if options.get("json"):
        print(json.dumps(ctx.config, indent=2, default=str))
    else:
        print(yaml.safe_dump(ctx.config, sort_keys=False).rstrip() if ctx.config else "{}")


commands = [
    Command(
        name="config",
        func=_config,
        description="Show the resolved toolctl configuration",
        options=[Option(command="--json", description="Print the resolved configuration as JSON")],
        examples=[
            Example(desc="Show the merged configuration", cmd="toolctl config"),
            Example(
                desc="Include an extra config file", cmd="toolctl config --config ci.yml --json"
            ),
        ],
    )
]
