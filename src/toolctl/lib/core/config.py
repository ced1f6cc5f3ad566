# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Configuration file discovery and layering.

Three YAML layers are merged, lowest priority first:

- **global**: ``TOOLCTL_CONFIG_FILE`` or the first existing search path
- **project**: ``<root>/toolctl.yml``
- **explicit**: the file passed with ``--config`` (must exist)
"""

import os
import sys
from pathlib import Path
from typing import Any

from .._util.config_stack import ConfigStack, load_yaml_scope
from .paths import config_root

PROJECT_CONFIG_NAME = "toolctl.yml"


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    - If TOOLCTL_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) config_root()/config.yml (TOOLCTL_CONFIG_DIR or the user config dir)
        2) sys.prefix/etc/toolctl/config.yml
        3) /etc/toolctl/config.yml
    """
    env_file = os.environ.get("TOOLCTL_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    return [
        config_root() / "config.yml",
        Path(sys.prefix) / "etc" / "toolctl" / "config.yml",
        Path("/etc/toolctl/config.yml"),
    ]


def global_config_path() -> Path:
    """Global config file path.

    An explicit TOOLCTL_CONFIG_FILE is returned even if missing; otherwise the
    first existing search path wins, falling back to the last candidate.
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def project_config_path(root: Path) -> Path:
    return root / PROJECT_CONFIG_NAME


def load_config_stack(root: Path, explicit: str | None = None) -> ConfigStack:
    """Build the config stack for a project rooted at *root*.

    Raises FileNotFoundError when *explicit* names a missing file, and
    ``yaml.YAMLError`` / ValueError for unreadable files.
    """
    stack = ConfigStack()
    stack.push(load_yaml_scope("global", global_config_path()))
    stack.push(load_yaml_scope("project", project_config_path(root)))
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_absolute():
            path = root / path
        stack.push(load_yaml_scope("explicit", path, required=True))
    return stack


def _string_list(config: dict[str, Any], key: str) -> list[str]:
    value = config.get(key) or []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"Config key '{key}' must be a list of strings")
    return [str(v) for v in value]


def get_plugins(config: dict[str, Any]) -> list[str]:
    """Module names listed under ``plugins``."""
    return _string_list(config, "plugins")


def get_disabled_commands(config: dict[str, Any]) -> set[str]:
    """Command names listed under ``disabled_commands``."""
    return set(_string_list(config, "disabled_commands"))
