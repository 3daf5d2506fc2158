"""
Inference engine wrapper around llama-cpp-python.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from llama_console.core import GenerationFailure, ModelLoadError

if TYPE_CHECKING:
    from llama_cpp import Llama
    from llama_console.config import Config

logger = logging.getLogger(__name__)


class InferenceEngine(Protocol):
    """What the session needs from an engine: a blocking text completion."""

    model_identifier: str

    def generate(self, messages: list[dict[str, Any]], params: "Config") -> str:
        ...


@contextmanager
def _quiet_stderr(enabled: bool = True):
    """Redirect the stderr file descriptor to /dev/null.

    Hides Metal/CUDA initialization chatter printed by llama.cpp. Does
    nothing when stderr has no real file descriptor (e.g. under capture).
    """
    if not enabled:
        yield
        return
    try:
        stderr_fd = sys.stderr.fileno()
    except (AttributeError, OSError, ValueError):
        yield
        return
    old_stderr = os.dup(stderr_fd)
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, stderr_fd)
    try:
        yield
    finally:
        os.dup2(old_stderr, stderr_fd)
        os.close(old_stderr)
        os.close(devnull)


class LlamaEngine:
    """Engine handle backed by a loaded ``llama_cpp.Llama`` model."""

    def __init__(self, llm: "Llama", model_path: Path, n_gpu_layers: int = 0):
        self.llm = llm
        self.model_path = Path(model_path)
        self.n_gpu_layers = n_gpu_layers

    @classmethod
    def initialize(
        cls,
        model_path: Path | str,
        resources: "Config",
        n_gpu_layers: int = 0,
        verbose: bool = False,
        show_warnings: bool = False,
    ) -> "LlamaEngine":
        """Load a GGUF model sized by the resource keys of ``resources``.

        Args:
            model_path: Path to the GGUF file.
            resources: Configuration supplying context_size, threads, batch_size.
            n_gpu_layers: Layers to offload (-1 for all, 0 for CPU only).
            verbose: Let llama.cpp print its own diagnostics.
            show_warnings: Keep stderr attached during loading.

        Raises:
            ModelLoadError: The file is missing, llama-cpp-python is not
                installed, or the model failed to load.
        """
        model_path = Path(model_path)
        if not model_path.is_file():
            raise ModelLoadError(f"Model not found: {model_path}")

        try:
            from llama_cpp import Llama
        except ImportError as e:
            raise ModelLoadError(
                "llama-cpp-python is required. Install it with: pip install 'llama-console[llm]'"
            ) from e

        logger.info(
            f"Loading {model_path} (ctx={resources.context_size}, "
            f"threads={resources.threads}, batch={resources.batch_size}, gpu={n_gpu_layers})"
        )
        try:
            with _quiet_stderr(not show_warnings):
                llm = Llama(
                    model_path=str(model_path),
                    n_ctx=resources.context_size,
                    n_threads=resources.threads,
                    n_batch=resources.batch_size,
                    n_gpu_layers=n_gpu_layers,
                    verbose=verbose,
                )
        except (ValueError, RuntimeError, OSError) as e:
            raise ModelLoadError(f"Failed to load {model_path.name}: {e}") from e

        return cls(llm, model_path, n_gpu_layers=n_gpu_layers)

    @property
    def model_identifier(self) -> str:
        """GGUF ``general.name`` metadata if present, else the file stem."""
        metadata = getattr(self.llm, "metadata", None)
        if isinstance(metadata, dict) and metadata.get("general.name"):
            return str(metadata["general.name"])
        return self.model_path.stem

    @property
    def backend(self) -> str:
        """Compute backend for the startup line, e.g. "CPU" or "Metal (all layers)"."""
        if self.n_gpu_layers == 0:
            return "CPU"
        name = "Metal" if platform.system() == "Darwin" else "CUDA"
        layers = "all" if self.n_gpu_layers < 0 else self.n_gpu_layers
        return f"{name} ({layers} layers)"

    def generate(self, messages: list[dict[str, Any]], params: "Config") -> str:
        """Run one chat completion over ``messages``.

        Raises:
            GenerationFailure: Any error raised inside llama.cpp.
        """
        try:
            # Reset model state before each generation
            self.llm.reset()
            response = self.llm.create_chat_completion(
                messages=messages,
                max_tokens=params.max_tokens,
                temperature=params.temperature,
                top_p=params.top_p,
            )
            return response["choices"][0]["message"].get("content") or ""
        except Exception as e:
            logger.debug("Generation failed", exc_info=True)
            raise GenerationFailure(str(e) or type(e).__name__) from e
