"""
REPL (Read-Eval-Print Loop) implementation using plain input().
"""

from __future__ import annotations

import atexit
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from llama_console.cli.commands.builtins.exit import GOODBYE

if TYPE_CHECKING:
    from llama_console.cli.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)

PROMPT = "You: "


def run_loop(read_line: Callable[[], str], dispatcher: "CommandDispatcher") -> None:
    """Read and dispatch lines until exit, end of input or interrupt.

    Each line is fully processed before the next is read. Ctrl+C, at the
    prompt or during a response, ends the session immediately.
    """
    while True:
        try:
            line = read_line()
            if dispatcher.dispatch(line):
                return
        except KeyboardInterrupt:
            logger.debug("Interrupted")
            print(f"\n{GOODBYE}")
            return
        except EOFError:
            print(f"\n{GOODBYE}")
            return


def setup_readline(history_file: Path) -> None:
    """Configure readline for persistent history, when available."""
    try:
        import readline
    except ImportError:
        return

    history_file.parent.mkdir(parents=True, exist_ok=True)
    if history_file.exists():
        try:
            readline.read_history_file(history_file)
        except OSError:
            logger.debug(f"Could not read history file {history_file}")
    readline.set_history_length(1000)
    atexit.register(readline.write_history_file, history_file)


def repl(dispatcher: "CommandDispatcher", history_file: Optional[Path] = None) -> None:
    """Run the interactive REPL on top of input().

    Args:
        dispatcher: Routes each line to a command or chat exchange.
        history_file: Persist input history here (readline only).
    """
    if history_file is not None:
        setup_readline(history_file)
    run_loop(lambda: input(PROMPT), dispatcher)
