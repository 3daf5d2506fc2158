"""Stats command - show conversation statistics."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.STATS, "Show conversation statistics")
def cmd_stats(ctx: "CommandContext", args: str):
    stats = ctx.session_mgr.get_statistics()
    print("\nConversation Statistics:")
    print(f"  Total Turns: {stats.total_turns}")
    print(f"  User Messages: {stats.user_message_count}")
    print(f"  AI Messages: {stats.assistant_message_count}")
    print(f"  Conversation Length: {stats.log_length}")
    print()
