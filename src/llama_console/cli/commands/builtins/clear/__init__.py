"""Clear command - clear conversation history."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.CLEAR, "Clear conversation history")
def cmd_clear(ctx: "CommandContext", args: str):
    """Clear the conversation log and turn counter."""
    ctx.session_mgr.clear_history()
    print("Conversation history cleared.\n")
