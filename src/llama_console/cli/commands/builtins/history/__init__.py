"""History command - show conversation history."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext

PREVIEW_CHARS = 100

ROLE_LABELS = {"user": "You", "assistant": "AI"}


def _format_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M:%S")
    except ValueError:
        return timestamp


@command_registry.register(Command.HISTORY, "Show conversation history")
def cmd_history(ctx: "CommandContext", args: str):
    """Show one line per message, content truncated."""
    history = ctx.session_mgr.get_history()
    if not history:
        print("No conversation history yet.\n")
        return

    print("\nConversation History:")
    for msg in history:
        content = msg.content
        preview = content[:PREVIEW_CHARS] + "..." if len(content) > PREVIEW_CHARS else content
        role = ROLE_LABELS.get(msg.role, msg.role)
        print(f"[{_format_time(msg.timestamp)}] {role}: {preview}")
    print()
