"""Exit command - leave the REPL."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext

GOODBYE = "Goodbye! Thanks for chatting!"


@command_registry.register(Command.EXIT, "Exit the application")
def cmd_exit(ctx: "CommandContext", args: str) -> bool:
    """Exit the REPL."""
    print(GOODBYE)
    return True  # Signal to exit REPL
