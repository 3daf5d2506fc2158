"""Reset command - restore the default configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING

from llama_console.cli.commands.builtins.config import print_config, print_restart_note
from llama_console.cli.commands.registry import Command, command_registry

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


@command_registry.register(Command.RESET, "Reset model configuration to defaults")
def cmd_reset(ctx: "CommandContext", args: str):
    current = ctx.session_mgr.config
    updated = ctx.session_mgr.apply_config(ctx.config_store.reset())
    print("Configuration reset to defaults")
    print_config(updated)
    print_restart_note(current, updated)
