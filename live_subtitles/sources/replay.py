"""Replay transcript sources for rehearsals, demos, and tests.

WHY: A live recognizer is not always available — when rehearsing a talk,
checking a new translation, or testing. Replaying recorded snapshots, or
simulating a recognizer's interim results from a text, exercises the
exact same session path as live input.

HOW: ReplayTranscriptSource holds a list of snapshot strings and
publishes SourceStarted, one TranscriptSnapshot per entry (sleeping
interval_s between them), then SourceEnded.
  from_file()   — one snapshot per non-blank line of a recorded file
  from_speech() — cumulative word-by-word snapshots of a spoken text,
                  like a recognizer's growing interim results

RULES:
- Snapshots are cumulative, never deltas
- Blank lines in recorded files are skipped
- An unreadable file raises TranscriptSourceError from from_file()
- interval_s <= 0 publishes without sleeping
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, List

from live_subtitles.config import DEFAULT_REPLAY_INTERVAL_S
from live_subtitles.core.errors import TranscriptSourceError
from live_subtitles.core.events import (
    SourceEnded,
    SourceStarted,
    TranscriptFeed,
    TranscriptSnapshot,
)
from live_subtitles.sources.base import TranscriptSource


class ReplayTranscriptSource(TranscriptSource):
    """Publish a fixed sequence of transcript snapshots."""

    def __init__(self, snapshots: Iterable[str], interval_s: float = DEFAULT_REPLAY_INTERVAL_S) -> None:
        self._snapshots: List[str] = list(snapshots)
        self._interval_s = interval_s

    @property
    def name(self) -> str:
        return "Replay"

    @property
    def snapshots(self) -> List[str]:
        return list(self._snapshots)

    @classmethod
    def from_file(cls, path: str | Path, interval_s: float = DEFAULT_REPLAY_INTERVAL_S) -> ReplayTranscriptSource:
        """Load recorded snapshots, one per non-blank line."""
        try:
            lines = Path(path).read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise TranscriptSourceError("Cannot read transcript file {}: {}".format(path, exc)) from exc
        return cls([line.strip() for line in lines if line.strip()], interval_s=interval_s)

    @classmethod
    def from_speech(cls, text: str, interval_s: float = DEFAULT_REPLAY_INTERVAL_S) -> ReplayTranscriptSource:
        """Simulate interim recognition results for a spoken text.

        "How are you" becomes ["How", "How are", "How are you"].
        """
        words = text.split()
        snapshots = [" ".join(words[: i + 1]) for i in range(len(words))]
        return cls(snapshots, interval_s=interval_s)

    async def produce(self, feed: TranscriptFeed) -> None:
        feed.publish(SourceStarted())
        for i, snapshot in enumerate(self._snapshots):
            if i and self._interval_s > 0:
                await asyncio.sleep(self._interval_s)
            feed.publish(TranscriptSnapshot(snapshot))
        feed.publish(SourceEnded())
