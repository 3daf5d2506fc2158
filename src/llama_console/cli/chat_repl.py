#!/usr/bin/env python3
"""
CLI entry point for the chat REPL (llama-console command).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from llama_console.cli.commands.builtins.exit import GOODBYE
from llama_console.cli.dispatcher import CommandDispatcher
from llama_console.config import APP_DIR, Config, ConfigStore
from llama_console.core import ConfigError, ModelLoadError
from llama_console.engine import LlamaEngine
from llama_console.session import SessionManager, TranscriptExporter
from llama_console.utils import TypewriterOutput, configure_logging
from llama_console.utils.logging import get_log_path

logger = logging.getLogger(__name__)

# Default models directory and model file
DEFAULT_MODELS_DIR = APP_DIR / "models"
DEFAULT_MODEL_NAME = "qwen2-1_5b-instruct-q4_k_m.gguf"

# Input history file path
HISTORY_FILE = APP_DIR / "prompt_history"

GREY = "\033[90m"
RESET = "\033[0m"


def list_models(models_dir: Path = DEFAULT_MODELS_DIR) -> list[Path]:
    """List available GGUF models in the models directory."""
    if not models_dir.exists():
        return []
    return sorted(models_dir.glob("*.gguf"))


def print_models(models_dir: Path = DEFAULT_MODELS_DIR):
    """Print available models with their size."""
    models = list_models(models_dir)
    if not models:
        print(f"No models found in {models_dir}")
        print(f"\nDownload a GGUF model (e.g. {DEFAULT_MODEL_NAME}) into that directory.")
        return

    print(f"Available models in {models_dir}:\n")
    for model in models:
        size_mb = model.stat().st_size / (1024 * 1024)
        print(f"  {model.name:<50} {size_mb:>8.1f} MB")
    print()


def resolve_model(model_arg: str | None, models_dir: Path = DEFAULT_MODELS_DIR) -> Path | None:
    """Resolve the model path from an argument or the models directory.

    Checks presence only; loading is the engine's job.
    """
    if model_arg:
        path = Path(model_arg)
        if path.is_file():
            return path
        named_path = models_dir / model_arg
        if named_path.is_file():
            return named_path
        print(f"Model not found: {model_arg}")
        print("\nLooked in:")
        print(f"  - {path.absolute()}")
        print(f"  - {named_path}")
        return None

    default_path = models_dir / DEFAULT_MODEL_NAME
    if default_path.is_file():
        return default_path

    models = list_models(models_dir)
    if len(models) == 1:
        print(f"Using model: {models[0].name}")
        return models[0]

    if not models:
        print("Model not found!")
        print(f"Please download a GGUF model first. Expected location: {default_path}")
        print("\nOr specify a model path:")
        print("  llama-console /path/to/model.gguf")
        return None

    print(f"Multiple models found in {models_dir}:")
    for i, model in enumerate(models, 1):
        print(f"  {i}. {model.name}")
    print("\nSpecify which model to use:")
    print(f"  llama-console {models[0].name}")
    return None


def load_startup_config(config_store: ConfigStore) -> Config:
    """Defaults merged with the persisted document, if any.

    A malformed document is reported and the defaults are kept.
    """
    config = config_store.defaults()
    try:
        loaded = config_store.load()
    except ConfigError as e:
        print(f"Warning: {e}. Using default configuration.")
        return config
    if loaded is not None:
        print(f"Configuration loaded from {config_store.path}")
    return config_store.merge(config, loaded)


def print_banner():
    print("=" * 50)
    print("Local LLM Chat")
    print("=" * 50)
    print("Type /help for commands, 'exit' or Ctrl+C to quit.")
    print("=" * 50)
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interactive chat with a local GGUF model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Models are loaded from {DEFAULT_MODELS_DIR} by default.
Config file: {ConfigStore.CONFIG_FILE}

Examples:
    llama-console                           # Use model from default dir
    llama-console model.gguf                # Use model by name
    llama-console /path/to/model.gguf       # Use model by path
    llama-console --list                    # List available models
        """,
    )
    parser.add_argument("model", nargs="?", help="Model name or path to GGUF file")
    parser.add_argument("--models-dir", type=Path, default=DEFAULT_MODELS_DIR,
                        help=f"Directory searched for models (default: {DEFAULT_MODELS_DIR})")
    parser.add_argument("--list", "-l", action="store_true", help="List available models")
    parser.add_argument("--config-file", type=Path, default=None,
                        help=f"Configuration document (default: {ConfigStore.CONFIG_FILE})")
    parser.add_argument("--export-dir", type=Path, default=None,
                        help="Directory for /export transcripts (default: current directory)")
    parser.add_argument("--system-prompt", type=str, default=None,
                        help="System prompt for the assistant")
    parser.add_argument("--gpu", type=int, default=0,
                        help="GPU layers to offload (-1 for all, default: 0)")
    parser.add_argument("--simple", action="store_true",
                        help="Use simple REPL (no prompt_toolkit features)")
    parser.add_argument("--no-typewriter", action="store_true",
                        help="Print responses at once instead of progressively")
    parser.add_argument("--typewriter-delay", type=float, default=0.01,
                        help="Seconds between output characters (default: 0.01)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose llama.cpp output")
    parser.add_argument("--show-warnings", action="store_true",
                        help="Show Metal/GPU initialization warnings")
    parser.add_argument("--debug", action="store_true",
                        help="Show debug logging")
    parser.add_argument("--log-file", action="store_true",
                        help="Also write logs under ~/.llama-console/logs/")
    return parser


def main(argv: list[str] | None = None):
    """Main entry point for the llama-console CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug, log_file=get_log_path() if args.log_file else None)

    if args.list:
        print_models(args.models_dir)
        return

    model_path = resolve_model(args.model, args.models_dir)
    if not model_path:
        sys.exit(1)

    try:
        config_store = ConfigStore(args.config_file)
        config = load_startup_config(config_store)

        print("Loading model...")
        print(f"Model path: {model_path}")
        try:
            engine = LlamaEngine.initialize(
                model_path,
                config,
                n_gpu_layers=args.gpu,
                verbose=args.verbose,
                show_warnings=args.show_warnings,
            )
        except ModelLoadError as e:
            logger.error(f"Model load failed: {e}")
            print(f"Error loading model: {e}")
            print("Make sure you have enough RAM and the model file is not corrupted.")
            sys.exit(1)

        print(f"{GREY}Backend: {engine.backend}{RESET}", file=sys.stderr)
        print("Model loaded successfully!\n")

        output = TypewriterOutput(delay=0 if args.no_typewriter else args.typewriter_delay)
        session_mgr = SessionManager(
            engine,
            config=config,
            system_prompt=args.system_prompt,
            output=output,
        )
        dispatcher = CommandDispatcher(session_mgr, config_store, TranscriptExporter(args.export_dir))

        # prompt_toolkit needs a terminal
        if args.simple or not sys.stdin.isatty():
            from llama_console.cli._simple_repl import repl
        else:
            from llama_console.cli._repl import repl

        print_banner()
        repl(dispatcher, history_file=HISTORY_FILE)
    except KeyboardInterrupt:
        print(f"\n{GOODBYE}")


if __name__ == "__main__":
    main()
