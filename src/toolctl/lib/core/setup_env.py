# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Environment preparation run before any command is registered."""

import subprocess
import sys
from importlib import resources


def setup_env_script_name(platform: str | None = None) -> str:
    """Return the packaged setup script for *platform* (default: current)."""
    platform = sys.platform if platform is None else platform
    return "setup_env.bat" if platform.startswith("win") else "setup_env.sh"


def run_setup_env() -> None:
    """Run the platform setup script synchronously.

    Failures are not handled here: ``CalledProcessError`` or ``OSError``
    propagate to the caller and abort the process.
    """
    name = setup_env_script_name()
    script_res = resources.files("toolctl") / "resources" / "scripts" / name
    with resources.as_file(script_res) as script:
        if name.endswith(".bat"):
            cmd = ["cmd", "/c", str(script)]
        else:
            cmd = ["sh", str(script)]
        subprocess.run(cmd, check=True, capture_output=True, text=True)
