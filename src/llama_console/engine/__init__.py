"""
Engine module for the llama_console package.

Provides the LlamaEngine wrapper around llama-cpp-python.
"""

from llama_console.engine.chat import InferenceEngine, LlamaEngine

__all__ = [
    "InferenceEngine",
    "LlamaEngine",
]
