"""Layered config resolution.

Terminology
-----------
- **Scope**: a single config layer ("global", "project", "explicit").
- **Stack**: an ordered list of scopes, lowest-priority first.
- **deep_merge**: recursive dict merge with ``_inherit`` support.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ---------------------------------------------------------------------------
# Merge helpers
# ---------------------------------------------------------------------------

_INHERIT = "_inherit"


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base*, returning a **new** dict.

    Rules
    -----
    * Dicts are merged recursively.
    * A ``None`` value in *override* deletes the key.
    * Lists in *override* replace the base list, except that each
      ``"_inherit"`` element is replaced by the base list elements.
    """
    merged: dict = {}
    for key in [*base, *(k for k in override if k not in base)]:
        if key not in override:
            merged[key] = base[key]
            continue
        ov = override[key]
        if ov is None:
            continue
        bv = base.get(key)
        if isinstance(ov, dict) and isinstance(bv, dict):
            merged[key] = deep_merge(bv, ov)
        elif isinstance(ov, list) and isinstance(bv, list):
            merged[key] = _merge_lists(bv, ov)
        else:
            merged[key] = ov
    return merged


def _merge_lists(base: list, override: list) -> list:
    if _INHERIT not in override:
        return list(override)
    result: list = []
    for item in override:
        if item == _INHERIT:
            result.extend(base)
        else:
            result.append(item)
    return result


# ---------------------------------------------------------------------------
# Scope / Stack
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConfigScope:
    """A single layer in the config stack."""

    level: str
    source: Path | None
    data: dict


class ConfigStack:
    """Ordered collection of config scopes, lowest-priority first."""

    def __init__(self) -> None:
        self._scopes: list[ConfigScope] = []

    def push(self, scope: ConfigScope) -> None:
        self._scopes.append(scope)

    def resolve(self) -> dict:
        """Deep-merge all scopes in order and return the result."""
        result: dict = {}
        for scope in self._scopes:
            result = deep_merge(result, scope.data)
        return result

    @property
    def scopes(self) -> list[ConfigScope]:
        """Copy of the scope list (for diagnostics)."""
        return list(self._scopes)


def load_yaml_scope(level: str, path: Path, *, required: bool = False) -> ConfigScope:
    """Load a YAML file into a ConfigScope.

    A missing file yields empty data unless *required*, in which case
    FileNotFoundError is raised.  A file whose top level is not a mapping
    raises ValueError.
    """
    if not path.is_file():
        if required:
            raise FileNotFoundError(f"Config file not found: {path}")
        return ConfigScope(level=level, source=path, data={})
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return ConfigScope(level=level, source=path, data=data)
