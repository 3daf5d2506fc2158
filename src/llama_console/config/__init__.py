"""Configuration management for llama-console."""

from llama_console.config.config import (
    APP_DIR,
    DEFAULTS,
    RESOURCE_KEYS,
    Config,
    ConfigOverrides,
    ConfigStore,
)

__all__ = [
    "APP_DIR",
    "DEFAULTS",
    "RESOURCE_KEYS",
    "Config",
    "ConfigOverrides",
    "ConfigStore",
]
