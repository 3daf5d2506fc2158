"""
Command loader - imports the builtin command packages.

Each command lives in its own subdirectory of ``builtins/`` with an
__init__.py that registers itself using the command_registry decorator:

    # builtins/stats/__init__.py
    from llama_console.cli.commands.registry import Command, command_registry

    @command_registry.register(Command.STATS, "Show conversation statistics")
    def cmd_stats(ctx, args):
        ...
"""

from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path

from llama_console.cli.commands.registry import command_registry

logger = logging.getLogger(__name__)

# Package builtins directory
PACKAGE_BUILTINS_DIR = Path(__file__).parent / "builtins"
PACKAGE_BUILTINS_MODULE = f"{__package__}.builtins"


def discover_commands(commands_dir: Path) -> list[str]:
    """
    Discover command package names in the given directory.

    Args:
        commands_dir: Directory to search

    Returns:
        Sorted names of subdirectories holding an __init__.py.
    """
    if not commands_dir.is_dir():
        logger.warning(f"Commands path is not a directory: {commands_dir}")
        return []

    names = []
    for subdir in sorted(commands_dir.iterdir()):
        if not subdir.is_dir():
            continue
        # Skip hidden and private directories
        if subdir.name.startswith((".", "_")):
            continue
        if (subdir / "__init__.py").exists():
            names.append(subdir.name)
        else:
            logger.debug(f"Skipping {subdir.name}: no __init__.py")
    return names


def load_builtin_commands() -> int:
    """
    Import every builtin command package, registering its handler.

    Importing an already-loaded package is a no-op, so this is safe to call
    more than once. Commands left without a handler are logged as a warning.

    Returns:
        Number of command packages imported.
    """
    loaded = 0
    for name in discover_commands(PACKAGE_BUILTINS_DIR):
        import_module(f"{PACKAGE_BUILTINS_MODULE}.{name}")
        logger.debug(f"Loaded command: {name}")
        loaded += 1

    missing = command_registry.missing()
    if missing:
        logger.warning(f"Commands without a handler: {', '.join(c.value for c in missing)}")
    return loaded
