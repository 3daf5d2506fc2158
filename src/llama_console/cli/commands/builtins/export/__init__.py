"""Export command - write the conversation transcript to a JSON file."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.EXPORT, "Export conversation to file", usage="/export [dir]")
def cmd_export(ctx: "CommandContext", args: str):
    """Export the transcript; raises EmptyExport when there is nothing to write."""
    path = ctx.exporter.export(ctx.session_mgr, args.strip() or None)
    print(f"Conversation exported to: {path.name}")
    print(f"  ({path})\n")
