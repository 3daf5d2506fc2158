"""Config command - show or override the current configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic.alias_generators import to_camel

from llama_console.cli.commands.registry import Command, command_registry
from llama_console.config import RESOURCE_KEYS, Config

if TYPE_CHECKING:
    from llama_console.cli.commands.registry import CommandContext


def print_config(config: Config, title: str = "Current Model Configuration") -> None:
    """Print every configuration key with its display label."""
    print(f"\n{title}:")
    for name, field in Config.model_fields.items():
        print(f"  {field.title}: {getattr(config, name)}")
    print()


def print_restart_note(before: Config, after: Config) -> None:
    """Note resource keys that only take effect when the model is reloaded."""
    changed = [to_camel(k) for k in RESOURCE_KEYS if getattr(before, k) != getattr(after, k)]
    if changed:
        print(f"Note: {', '.join(changed)} take effect on next start.\n")


def resolve_key(key: str) -> str | None:
    """Map a snake_case or camelCase key to its field name."""
    for name in Config.model_fields:
        if key in (name, to_camel(name)):
            return name
    return None


@command_registry.register(
    Command.CONFIG,
    "Show current model configuration",
    usage="/config [set <key> <value>]",
)
def cmd_config(ctx: "CommandContext", args: str):
    """Show the configuration, or override one key in memory."""
    parts = args.split()

    if not parts:
        print_config(ctx.session_mgr.config)
        return

    if parts[0].lower() != "set" or len(parts) != 3:
        print("Usage: /config [set <key> <value>]\n")
        return

    key = resolve_key(parts[1])
    if key is None:
        keys = ", ".join(to_camel(name) for name in Config.model_fields)
        print(f"Error: Unknown config key: {parts[1]} (keys: {keys})\n")
        return

    current = ctx.session_mgr.config
    try:
        updated = ctx.config_store.merge(current, {key: parts[2]})
    except ValueError as e:
        print(f"Error: invalid value for {to_camel(key)}: {e}\n")
        return

    ctx.session_mgr.apply_config(updated)
    print(f"Set {to_camel(key)} = {getattr(updated, key)}\n")
    print_restart_note(current, updated)
