"""
Command system for the llama-console REPL.

Commands are / prefixed actions that don't go to the model.
"""

from __future__ import annotations

from llama_console.cli.commands.loader import load_builtin_commands
from llama_console.cli.commands.registry import (
    COMMAND_MARKER,
    Command,
    CommandContext,
    CommandEntry,
    CommandRegistry,
    command_registry,
)

__all__ = [
    "COMMAND_MARKER",
    "Command",
    "CommandContext",
    "CommandEntry",
    "CommandRegistry",
    "command_registry",
    "load_builtin_commands",
]
