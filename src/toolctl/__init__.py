"""toolctl package.

Modules:
- toolctl.cli: entry point, command registry, help rendering, built-in commands
- toolctl.lib.core: command descriptors, discovery, configuration, setup, version
- toolctl.lib._util: internal helpers (ANSI colors, config stack)
- toolctl.lib.util: debug logging
"""

__all__ = ["cli", "lib"]

try:
    from importlib.metadata import version

    __version__ = version("toolctl")
except Exception:
    # Not installed: read the version from the source checkout
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                __version__ = tomllib.load(f)["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
