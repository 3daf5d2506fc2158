"""Load command - merge a saved configuration into the current one."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.builtins.config import print_config, print_restart_note
from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.LOAD, "Load saved configuration", usage="/load [path]")
def cmd_load(ctx: "CommandContext", args: str):
    """Load and merge; a missing document leaves the configuration unchanged."""
    path = args.strip() or None
    loaded = ctx.config_store.load(path)
    if loaded is None:
        print("No saved configuration found.\n")
        return

    current = ctx.session_mgr.config
    updated = ctx.session_mgr.apply_config(ctx.config_store.merge(current, loaded))
    print(f"Configuration loaded from {path or ctx.config_store.path}")
    print_config(updated)
    print_restart_note(current, updated)
