# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Version and branch information for ``toolctl --version`` and ``toolctl info``."""

import json
import subprocess
from importlib import metadata
from pathlib import Path
from typing import Any


def _git(args: list[str], cwd: Path) -> str | None:
    """Run a git query in *cwd*, returning stripped stdout or None on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=1,
            cwd=str(cwd),
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def _is_release_tag(tag: str | None) -> bool:
    return bool(tag and len(tag) > 1 and tag[0] == "v" and tag[1].isdigit())


def get_version_info() -> tuple[str, str | None]:
    """Get version and branch information.

    The branch is reported only where it means something:

    - VCS installs (``pip install git+https://...``): the requested revision
      recorded in PEP 610 ``direct_url.json``.
    - Source checkouts (a ``pyproject.toml`` three levels up): the current git
      branch, unless HEAD sits on a ``vX.Y.Z`` tag.
    - Anything else: no branch.
    """
    try:
        from toolctl import __version__

        version = __version__
    except (ImportError, AttributeError):
        version = "unknown"

    revision = _get_pep610_revision()
    if revision:
        return version, revision

    # version.py -> core -> lib -> toolctl -> src -> repo
    repo_root = Path(__file__).resolve().parents[4]
    if not (repo_root / "pyproject.toml").exists():
        return version, None
    if _git(["rev-parse", "--is-inside-work-tree"], repo_root) != "true":
        return version, None

    branch = _git(["branch", "--show-current"], repo_root)
    if branch and _is_release_tag(_git(["describe", "--exact-match", "--tags", "HEAD"], repo_root)):
        branch = None
    return version, branch


def _get_pep610_revision(dist_name: str = "toolctl") -> str | None:
    """Return VCS revision from PEP 610 metadata, if available."""
    try:
        direct_url = metadata.distribution(dist_name).read_text("direct_url.json")
    except (metadata.PackageNotFoundError, OSError, UnicodeDecodeError):
        return None
    if not direct_url:
        return None

    try:
        data = json.loads(direct_url)
    except json.JSONDecodeError:
        return None

    vcs_info = data.get("vcs_info")
    if not isinstance(vcs_info, dict):
        return None

    def _clean(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    return _clean(vcs_info.get("requested_revision")) or _clean(vcs_info.get("commit_id"))


def format_version_string(version: str, branch: str | None) -> str:
    """Format version and branch, e.g. ``"0.3.1"`` or ``"0.3.1 [feature-branch]"``."""
    if branch:
        return f"{version} [{branch}]"
    return version
