"""Best-effort debug log shared by the dispatcher and error reporter."""

import os
import time
from pathlib import Path

from ..core.paths import state_root


def debug_log_path() -> Path:
    """Return the debug log location (``TOOLCTL_LOG_FILE`` overrides)."""
    env = os.getenv("TOOLCTL_LOG_FILE")
    if env:
        return Path(env).expanduser()
    return state_root() / "toolctl.log"


def _log_debug(message: str) -> None:
    """Append a timestamped line to the toolctl debug log.

    Never raises: a read-only state dir or a full disk must not change the
    outcome of a command.
    """
    try:
        log_path = debug_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] pid={os.getpid()} {message}\n")
    except Exception:
        pass
