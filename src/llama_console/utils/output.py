"""Progressive ("typewriter") presentation of complete response text."""

from __future__ import annotations

import sys
import time
from typing import TextIO


class TypewriterOutput:
    """Write text to a sink in fixed-size chunks with a pause between them.

    A KeyboardInterrupt raised during a pause stops the output immediately.
    Set ``delay`` to 0 to write without pausing.
    """

    def __init__(self, sink: TextIO | None = None, chunk_size: int = 1, delay: float = 0.01):
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if delay < 0:
            raise ValueError("delay must not be negative")
        self._sink = sink
        self.chunk_size = chunk_size
        self.delay = delay

    @property
    def sink(self) -> TextIO:
        # Resolved per call so redirected/captured stdout is honoured
        return self._sink if self._sink is not None else sys.stdout

    def chunks(self, text: str) -> list[str]:
        """Split ``text`` into the chunks ``emit`` writes, in order."""
        return [text[i:i + self.chunk_size] for i in range(0, len(text), self.chunk_size)]

    def emit(self, text: str) -> None:
        sink = self.sink
        for chunk in self.chunks(text):
            sink.write(chunk)
            sink.flush()
            if self.delay:
                time.sleep(self.delay)
