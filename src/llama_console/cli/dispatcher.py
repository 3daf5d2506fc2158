"""
Input dispatch for the llama-console REPL.

Routes one line of input either to a registered command or, when it carries
no command marker, to a chat exchange. Every runtime failure is reported
here and never ends the loop; only an exit command does.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from llama_console.cli.commands import (
    COMMAND_MARKER,
    Command,
    CommandContext,
    command_registry,
    load_builtin_commands,
)
from llama_console.core import ConsoleError, GenerationFailure, UnknownCommand

if TYPE_CHECKING:
    from llama_console.cli.commands import CommandRegistry
    from llama_console.config import ConfigStore
    from llama_console.session import SessionManager, TranscriptExporter

logger = logging.getLogger(__name__)

ASSISTANT_LABEL = "Assistant: "


class CommandDispatcher:
    """Synchronous per-line router over the session's components."""

    def __init__(
        self,
        session_mgr: "SessionManager",
        config_store: "ConfigStore",
        exporter: "TranscriptExporter",
        registry: "CommandRegistry | None" = None,
    ):
        if registry is None:
            load_builtin_commands()
            registry = command_registry
        self.registry = registry
        self.context = CommandContext(
            session_mgr=session_mgr,
            config_store=config_store,
            exporter=exporter,
        )

    @staticmethod
    def is_exit(text: str) -> bool:
        """True for ``exit`` or ``/exit`` in any case."""
        return text.strip().lower() in (Command.EXIT.value, COMMAND_MARKER + Command.EXIT.value)

    def dispatch(self, line: str) -> bool:
        """Process one line of input to completion.

        Args:
            line: Raw input line.

        Returns:
            True if the REPL should exit.
        """
        text = line.strip()
        if not text:
            return False

        # Bare "exit" is accepted without the marker
        if self.is_exit(text):
            text = COMMAND_MARKER + Command.EXIT.value

        if text.startswith(COMMAND_MARKER):
            return self.run_command(text)

        self.chat(text)
        return False

    def run_command(self, text: str) -> bool:
        """Run a command line, reporting any failure."""
        try:
            entry, args = self.registry.match(text)
        except UnknownCommand:
            logger.info(f"Unknown command: {text}")
            print(f"Unknown command: {text}")
            print(f"Type {COMMAND_MARKER}help for available commands.\n")
            return False

        try:
            return entry.handler(self.context, args) is True
        except ConsoleError as e:
            logger.warning(f"/{entry.name} failed: {e}")
            print(f"Error: {e}\n")
        except Exception as e:
            logger.exception(f"/{entry.name} raised")
            print(f"Command error: {e}\n")
        return False

    def chat(self, text: str) -> str | None:
        """Run one chat exchange, printing the response progressively.

        Returns:
            The response text, or None if generation failed.
        """
        print(f"\n{ASSISTANT_LABEL}", end="", flush=True)
        try:
            response = self.context.session_mgr.submit_prompt(text)
        except GenerationFailure as e:
            logger.warning(f"Generation failed: {e}")
            print(f"\nError generating response: {e}\n")
            return None
        except Exception as e:
            logger.exception("Engine raised outside GenerationFailure")
            print(f"\nError generating response: {e}\n")
            return None
        print("\n")
        return response
