"""
Feature-rich REPL implementation using prompt_toolkit.

Provides persistent input history, history auto-suggestion and /command
completion with descriptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory, InMemoryHistory

from llama_console.cli._simple_repl import run_loop
from llama_console.cli.commands import COMMAND_MARKER

if TYPE_CHECKING:
    from llama_console.cli.commands import CommandRegistry
    from llama_console.cli.dispatcher import CommandDispatcher

PROMPT = HTML("<ansigreen>You:</ansigreen> ")


class CommandCompleter(Completer):
    """Completer for /commands."""

    def __init__(self, registry: "CommandRegistry"):
        self.registry = registry

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor

        if not text.startswith(COMMAND_MARKER) or " " in text:
            return

        for cmd, description in self.registry.get_completions().items():
            if cmd.startswith(text.lower()):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=description,
                )


def create_prompt_session(
    dispatcher: "CommandDispatcher",
    history_file: Optional[Path] = None,
) -> PromptSession:
    """Build the prompt_toolkit session used to read input lines."""
    if history_file is not None:
        history_file.parent.mkdir(parents=True, exist_ok=True)
        history = FileHistory(str(history_file))
    else:
        history = InMemoryHistory()
    return PromptSession(
        history=history,
        completer=CommandCompleter(dispatcher.registry),
        auto_suggest=AutoSuggestFromHistory(),
        complete_while_typing=True,
    )


def repl(dispatcher: "CommandDispatcher", history_file: Optional[Path] = None) -> None:
    """Run the interactive REPL with prompt_toolkit input.

    Args:
        dispatcher: Routes each line to a command or chat exchange.
        history_file: Persist input history here.
    """
    session = create_prompt_session(dispatcher, history_file)
    run_loop(lambda: session.prompt(PROMPT), dispatcher)
