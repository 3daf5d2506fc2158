"""
Session management module for llama-console.

Provides the conversation log, the exchange orchestrator and transcript export.
"""

from llama_console.session.data_models import (
    DEFAULT_SYSTEM_PROMPT,
    Message,
    Session,
    Statistics,
    Transcript,
)
from llama_console.session.export import TranscriptExporter, export_filename
from llama_console.session.manager import SessionManager

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "Message",
    "Session",
    "SessionManager",
    "Statistics",
    "Transcript",
    "TranscriptExporter",
    "export_filename",
]
