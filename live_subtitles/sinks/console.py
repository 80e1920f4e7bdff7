"""Console subtitle sink: one line per subtitle on stdout.

WHY: The simplest presentation surface — rehearsals and demos in a
terminal, or piping subtitles into another program.

HOW: Writes each subtitle followed by a newline and flushes immediately,
so downstream readers see it without buffering delay.

RULES:
- Output goes to stdout (status messages go to stderr elsewhere)
- Always flush after writing
- Empty subtitles are written as empty lines
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from live_subtitles.sinks.base import SubtitleSink


class ConsoleSink(SubtitleSink):
    """Print subtitles to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def name(self) -> str:
        return "Console"

    def display(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(text, file=stream, flush=True)
