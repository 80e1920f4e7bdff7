"""Transcript source adapters.

WHY: The engine consumes transcript snapshots but never controls the
recognizer producing them. Sources are the adapters that turn recognizer
output into ordered TranscriptFeed events.

HOW: base.py defines the TranscriptSource ABC and the wire-message
parser used by the HTTP server's websocket source; replay.py provides
file- and text-driven sources.

RULES:
- Sources publish events; they never call the engine
- Every source closes its feed when done
"""

from live_subtitles.sources.base import TranscriptSource, event_from_message
from live_subtitles.sources.replay import ReplayTranscriptSource

__all__ = ["ReplayTranscriptSource", "TranscriptSource", "event_from_message"]
