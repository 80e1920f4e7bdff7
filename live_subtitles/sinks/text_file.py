"""Text-file subtitle sink for streaming and overlay software.

WHY: Broadcast tools (OBS text sources, vMix titles) can display the
contents of a text file and refresh it when it changes. Writing the
current subtitle to a file is the lowest-friction way to get subtitles
on air.

HOW: Each display() writes the subtitle to a temporary file next to the
target and atomically replaces the target with os.replace(), so readers
never observe a half-written subtitle.

RULES:
- The file always contains exactly the latest subtitle (no history)
- Content is UTF-8 without a trailing newline
- The parent directory must already exist
"""

from __future__ import annotations

import os
from pathlib import Path

from live_subtitles.sinks.base import SubtitleSink


class TextFileSink(SubtitleSink):
    """Keep a text file containing the current subtitle."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def name(self) -> str:
        return "Text File"

    @property
    def path(self) -> Path:
        return self._path

    def display(self, text: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self._path)
