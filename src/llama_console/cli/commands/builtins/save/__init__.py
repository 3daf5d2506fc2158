"""Save command - persist the current configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.SAVE, "Save current configuration", usage="/save [path]")
def cmd_save(ctx: "CommandContext", args: str):
    path = ctx.config_store.save(ctx.session_mgr.config, args.strip() or None)
    print(f"Configuration saved to {path}\n")
