"""CLI command implementations for the vastu application.

This package contains subcommands for the vastu CLI, including:
- validate: Validate a configuration file
"""

from vastu.cli.commands.validate import validate_command

__all__ = ["validate_command"]
