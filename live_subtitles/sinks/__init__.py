"""Subtitle sink registry — pluggable presentation surfaces.

WHY: The CLI needs a single lookup to find a sink by name. A central dict
makes adding a surface trivial: create the sink class, import it here,
add one line.

HOW: SINKS maps string keys to sink *classes* (not instances). Callers
instantiate with the arguments the sink needs.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are SubtitleSink subclasses
- BroadcastSink is server-only and not listed here
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from live_subtitles.sinks.console import ConsoleSink
from live_subtitles.sinks.text_file import TextFileSink

if TYPE_CHECKING:
    from live_subtitles.sinks.base import SubtitleSink

SINKS: dict[str, type[SubtitleSink]] = {
    "console": ConsoleSink,
    "text_file": TextFileSink,
}
