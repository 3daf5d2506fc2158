"""Help command - show available commands."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.HELP, "Show this help message")
def cmd_help(ctx: "CommandContext", args: str):
    """Show help message."""
    print("\nAvailable Commands:")
    for entry in command_registry.all_commands():
        print(f"  {entry.usage:<28} - {entry.description}")
    print(f"  {'exit':<28} - Exit the application (no / needed)")
    print()
