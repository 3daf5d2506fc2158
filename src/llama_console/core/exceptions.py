"""
Exception classes for llama-console.
"""


class ConsoleError(Exception):
    """Base exception for recoverable and fatal console errors."""


class ModelLoadError(ConsoleError):
    """Model artifact missing, corrupt, or the engine failed to initialize."""


class GenerationFailure(ConsoleError):
    """The inference engine failed while generating a response."""


class ConfigError(ConsoleError):
    """Base exception for configuration persistence errors."""


class ConfigParseError(ConfigError):
    """Persisted configuration document is malformed."""


class ConfigStorageError(ConfigError):
    """Persisted configuration could not be read or written."""


class EmptyExport(ConsoleError):
    """Export requested with an empty conversation log."""


class ExportError(ConsoleError):
    """Transcript artifact could not be written."""


class UnknownCommand(ConsoleError):
    """Command-marked input that matches no known command."""
