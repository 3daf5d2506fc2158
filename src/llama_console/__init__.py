"""
llama_console - interactive console for a local llama.cpp model

Chat with a GGUF model from the terminal, inspect and persist generation
settings, and export conversation transcripts.

Example usage:
    from llama_console import ConfigStore, SessionManager
    from llama_console.engine import LlamaEngine

    config = ConfigStore().defaults()
    engine = LlamaEngine.initialize("./model.gguf", config)
    session_mgr = SessionManager(engine, config=config)
    session_mgr.submit_prompt("Hello!")
"""

__version__ = "0.1.0"

from llama_console.config import DEFAULTS, Config, ConfigOverrides, ConfigStore
from llama_console.core import (
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
from llama_console.session import (
    Message,
    SessionManager,
    Statistics,
    Transcript,
    TranscriptExporter,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "DEFAULTS",
    "Config",
    "ConfigOverrides",
    "ConfigStore",
    # Session
    "Message",
    "SessionManager",
    "Statistics",
    "Transcript",
    "TranscriptExporter",
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
