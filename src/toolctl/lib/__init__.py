"""Service layer for toolctl: descriptors, discovery, configuration and helpers.

Nothing here imports from ``toolctl.cli``; built-in commands are handed to
discovery by the CLI.
"""
