"""
CLI Commands.

Organized by API area. Each module exposes register(app), which adds its
commands to the root application as flat subcommands.
"""

from quilt_cli.cli.commands import containers, env, files, monitoring, system, terminal, volumes

COMMAND_MODULES = (
    system,
    containers,
    env,
    files,
    volumes,
    monitoring,
    terminal,
)

__all__ = ["COMMAND_MODULES"]
