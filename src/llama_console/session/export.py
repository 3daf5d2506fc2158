"""
Transcript export for llama-console.

Writes a self-contained JSON snapshot of the configuration, conversation
log and statistics to conversation-<timestamp>.json.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from llama_console.core import EmptyExport, ExportError
from llama_console.session.data_models import Transcript

if TYPE_CHECKING:
    from llama_console.session.manager import SessionManager

logger = logging.getLogger(__name__)


def export_filename(exported_at: datetime) -> str:
    """File name embedding the export time, with ':' and '.' replaced by '-'."""
    stamp = exported_at.isoformat(timespec="milliseconds")
    return "conversation-" + stamp.replace(":", "-").replace(".", "-") + ".json"


class TranscriptExporter:
    """Builds and writes transcript documents."""

    def __init__(self, export_dir: Path | str | None = None):
        self.export_dir = Path(export_dir) if export_dir else Path.cwd()

    def build(self, session_mgr: "SessionManager", exported_at: Optional[datetime] = None) -> Transcript:
        """Snapshot the session.

        Raises:
            EmptyExport: The conversation log is empty.
        """
        history = session_mgr.get_history()
        if not history:
            raise EmptyExport("No conversation to export.")
        exported_at = exported_at or datetime.now()
        return Transcript(
            exported_at=exported_at.isoformat(timespec="milliseconds"),
            model_identifier=session_mgr.model_identifier,
            configuration=session_mgr.config.model_copy(),
            conversation=[msg.model_copy() for msg in history],
            statistics=session_mgr.get_statistics(),
        )

    def export(self, session_mgr: "SessionManager", export_dir: Path | str | None = None) -> Path:
        """Write the transcript and return its path.

        Raises:
            EmptyExport: The conversation log is empty; nothing is written.
            ExportError: The file could not be written.
        """
        exported_at = datetime.now()
        transcript = self.build(session_mgr, exported_at)
        directory = Path(export_dir) if export_dir else self.export_dir
        path = directory / export_filename(exported_at)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(transcript.to_document(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Cannot write {path}: {e}") from e
        logger.info(f"Exported {len(transcript.conversation)} messages to {path}")
        return path
