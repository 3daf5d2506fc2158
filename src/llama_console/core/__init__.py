"""
Core module for the llama_console package.

Provides the exception taxonomy and the shared document base model.
"""

from llama_console.core.datamodels import DocumentModel
from llama_console.core.exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigStorageError,
    ConsoleError,
    EmptyExport,
    ExportError,
    GenerationFailure,
    ModelLoadError,
    UnknownCommand,
)

__all__ = [
    # Models
    "DocumentModel",
    # Exceptions
    "ConsoleError",
    "ModelLoadError",
    "GenerationFailure",
    "ConfigError",
    "ConfigParseError",
    "ConfigStorageError",
    "EmptyExport",
    "ExportError",
    "UnknownCommand",
]
