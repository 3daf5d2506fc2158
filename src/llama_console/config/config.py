"""
Configuration management for llama-console.

The active Configuration lives on the session; ConfigStore persists it to a
JSON document (default ~/.llama-console/config.json) and implements the
defaults -> load -> merge -> save -> reset lifecycle.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import Field, ValidationError

from llama_console.core import ConfigParseError, ConfigStorageError, DocumentModel

logger = logging.getLogger(__name__)

# Application directory for config, models, logs and prompt history
APP_DIR = Path.home() / ".llama-console"

# Default values - single source of truth
DEFAULTS = {
    "context_size": 2048,
    "threads": 4,
    "batch_size": 512,
    "max_tokens": 1024,
    "temperature": 0.7,
    "top_p": 0.9,
}

# Keys that size the engine at initialization; changing them needs a restart
RESOURCE_KEYS = ("context_size", "threads", "batch_size")


class Config(DocumentModel):
    """Generation and runtime settings. Every key always has a value."""

    model_config = {"extra": "ignore"}

    context_size: int = Field(
        default=DEFAULTS["context_size"],
        gt=0,
        title="Context Size",
        description="Context window size (tokens)",
    )
    threads: int = Field(
        default=DEFAULTS["threads"],
        gt=0,
        title="Threads",
        description="CPU threads used by the engine",
    )
    batch_size: int = Field(
        default=DEFAULTS["batch_size"],
        gt=0,
        title="Batch Size",
        description="Prompt processing batch size",
    )
    max_tokens: int = Field(
        default=DEFAULTS["max_tokens"],
        gt=0,
        title="Max Tokens",
        description="Upper bound on generated tokens",
    )
    temperature: float = Field(
        default=DEFAULTS["temperature"],
        ge=0.0,
        le=2.0,
        title="Temperature",
        description="Sampling randomness",
    )
    top_p: float = Field(
        default=DEFAULTS["top_p"],
        gt=0.0,
        le=1.0,
        title="Top P",
        description="Nucleus sampling mass",
    )


class ConfigOverrides(DocumentModel):
    """A partial Configuration: only the keys that were specified.

    Returned by ConfigStore.load() and accepted by merge(). Unknown keys
    are ignored; a None value counts as unspecified.
    """

    model_config = {"extra": "ignore"}

    context_size: Optional[int] = Field(default=None, gt=0)
    threads: Optional[int] = Field(default=None, gt=0)
    batch_size: Optional[int] = Field(default=None, gt=0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, gt=0.0, le=1.0)

    def specified(self) -> dict[str, Any]:
        """Return only the keys that carry a value."""
        return self.model_dump(exclude_none=True)


OverridesLike = Union[Config, ConfigOverrides, Mapping[str, Any]]


class ConfigStore:
    """Loads, merges, saves and resets Configuration documents."""

    CONFIG_FILE = APP_DIR / "config.json"

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else self.CONFIG_FILE

    @staticmethod
    def defaults() -> Config:
        """Return the hard-coded baseline configuration."""
        return Config()

    def load(self, path: Path | str | None = None) -> ConfigOverrides | None:
        """Read a persisted configuration document.

        Args:
            path: Location to read. Defaults to the store's path.

        Returns:
            The keys found in the document, or None if no document exists.

        Raises:
            ConfigParseError: The document is not valid JSON or holds invalid values.
            ConfigStorageError: The document exists but could not be read.
        """
        path = Path(path) if path else self.path
        if not path.exists():
            logger.debug(f"No configuration document at {path}")
            return None

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigStorageError(f"Cannot read {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigParseError(f"Expected a JSON object in {path}")

        try:
            loaded = ConfigOverrides.model_validate(data)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid configuration in {path}: {e}") from e

        logger.info(f"Loaded configuration from {path}: {loaded.specified()}")
        return loaded

    @staticmethod
    def merge(current: Config, loaded: OverridesLike | None) -> Config:
        """Shallow key-wise override of ``current`` by ``loaded``.

        Keys absent from ``loaded`` keep their value from ``current``.

        Raises:
            ValueError: ``loaded`` holds an out-of-range value.
        """
        if loaded is None:
            return current.model_copy()
        if isinstance(loaded, Config):
            updates = loaded.model_dump()
        elif isinstance(loaded, ConfigOverrides):
            updates = loaded.specified()
        else:
            updates = ConfigOverrides.model_validate(dict(loaded)).specified()
        return Config.model_validate({**current.model_dump(), **updates})

    def save(self, config: Config, path: Path | str | None = None) -> Path:
        """Write all six keys to ``path``, replacing any prior content.

        Returns:
            Path to the saved document.

        Raises:
            ConfigStorageError: The document could not be written.
        """
        path = Path(path) if path else self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(config.to_document(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigStorageError(f"Cannot write {path}: {e}") from e
        logger.info(f"Saved configuration to {path}")
        return path

    @classmethod
    def reset(cls) -> Config:
        """Return the defaults; the caller installs them as current."""
        logger.info("Configuration reset to defaults")
        return cls.defaults()
