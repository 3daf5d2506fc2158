"""Utility helpers: logging setup and progressive output."""

from llama_console.utils.logging import configure_logging
from llama_console.utils.output import TypewriterOutput

__all__ = [
    "configure_logging",
    "TypewriterOutput",
]
