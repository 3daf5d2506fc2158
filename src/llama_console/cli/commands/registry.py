"""
Command registry for the llama-console REPL.

The set of commands is the closed ``Command`` enum; each builtin registers a
handler for one member. Anything else after the ``/`` marker is an
UnknownCommand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from llama_console.core import UnknownCommand

if TYPE_CHECKING:
    from llama_console.config import ConfigStore
    from llama_console.session import SessionManager, TranscriptExporter

COMMAND_MARKER = "/"


class Command(str, Enum):
    """Recognized REPL commands."""

    HELP = "help"
    CONFIG = "config"
    HISTORY = "history"
    CLEAR = "clear"
    STATS = "stats"
    EXPORT = "export"
    SAVE = "save"
    LOAD = "load"
    RESET = "reset"
    EXIT = "exit"


@dataclass
class CommandContext:
    """Handles passed to every command handler."""

    session_mgr: "SessionManager"
    config_store: "ConfigStore"
    exporter: "TranscriptExporter"


@dataclass
class CommandEntry:
    """Entry for a registered command."""

    command: Command
    handler: Callable[[CommandContext, str], bool | None]
    description: str
    usage: str

    @property
    def name(self) -> str:
        return self.command.value


class CommandRegistry:
    """Registry mapping each Command to its handler."""

    def __init__(self):
        self._commands: dict[Command, CommandEntry] = {}

    def register(self, command: Command, description: str, usage: str | None = None) -> Callable:
        """Decorator to register the handler for ``command``.

        Args:
            command: The Command member handled
            description: Short description for /help
            usage: Usage string (default "/<name>")

        Example:
            @command_registry.register(Command.CLEAR, "Clear conversation history")
            def cmd_clear(ctx, args):
                ctx.session_mgr.clear_history()
        """
        def decorator(func: Callable) -> Callable:
            self._commands[command] = CommandEntry(
                command=command,
                handler=func,
                description=description,
                usage=usage or f"{COMMAND_MARKER}{command.value}",
            )
            return func
        return decorator

    def get(self, command: Command) -> CommandEntry | None:
        return self._commands.get(command)

    def match(self, line: str) -> tuple[CommandEntry, str]:
        """Match a command line to its entry.

        Args:
            line: Full input (e.g. "/save ./cfg.json" or "/HELP").

        Returns:
            Tuple of (CommandEntry, remaining args string)

        Raises:
            UnknownCommand: No registered command has that name.
        """
        text = line.strip()
        if not text.startswith(COMMAND_MARKER):
            raise UnknownCommand(f"Not a command: {text}")

        parts = text[len(COMMAND_MARKER):].split(maxsplit=1)
        name = parts[0].lower() if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        try:
            command = Command(name)
        except ValueError:
            raise UnknownCommand(f"Unknown command: {text}") from None

        entry = self.get(command)
        if entry is None:
            raise UnknownCommand(f"Command not available: {text}")
        return entry, args

    def missing(self) -> list[Command]:
        """Commands that have no registered handler."""
        return [command for command in Command if command not in self._commands]

    def all_commands(self) -> list[CommandEntry]:
        """Registered commands in declaration order."""
        return [self._commands[c] for c in Command if c in self._commands]

    def get_completions(self) -> dict[str, str]:
        """Get command names and descriptions for completion."""
        return {f"{COMMAND_MARKER}{entry.name}": entry.description for entry in self.all_commands()}


# Global command registry
command_registry = CommandRegistry()
