"""
CLI module for the llama_console package.

Provides the command dispatcher and the interactive REPL drivers.
"""

from llama_console.cli._simple_repl import repl as simple_repl
from llama_console.cli.dispatcher import CommandDispatcher

__all__ = [
    "CommandDispatcher",
    "simple_repl",
]
