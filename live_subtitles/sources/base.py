"""Abstract transcript source and wire-message parsing.

WHY: Transcripts can come from a recorded file, a simulated speaker, or
an external recognizer pushing over a websocket. The session should not
care which; every source just publishes events into a TranscriptFeed.

HOW: TranscriptSource is an ABC with a ``name`` property and a
``produce()`` coroutine. run() wraps produce(): it converts an
unrecoverable TranscriptSourceError into a SourceFailed event and always
closes the feed. event_from_message() turns a JSON message from an
external recognizer into an event.

RULES:
- A source never calls the engine directly — it only publishes
- A source publishes events sequentially, never concurrently with itself
- run() always closes the feed, even on failure or cancellation
- Unknown or malformed wire messages raise ValueError
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from live_subtitles.core.errors import TranscriptSourceError
from live_subtitles.core.events import (
    SourceEnded,
    SourceFailed,
    SourceStarted,
    TranscriptEvent,
    TranscriptFeed,
    TranscriptSnapshot,
    TransportError,
)


class TranscriptSource(ABC):
    """Abstract producer of transcript events."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source name, e.g. 'Replay'."""

    @abstractmethod
    async def produce(self, feed: TranscriptFeed) -> None:
        """Publish this source's events into the feed.

        Raise TranscriptSourceError for unrecoverable failures; publish
        TransportError events for recoverable ones.
        """

    async def run(self, feed: TranscriptFeed) -> None:
        """Produce into the feed, then close it."""
        try:
            await self.produce(feed)
        except TranscriptSourceError as exc:
            feed.publish(SourceFailed(exc))
        finally:
            feed.close()


def event_from_message(message: Dict[str, Any]) -> TranscriptEvent:
    """Parse one external recognizer message into a transcript event.

    Message shapes:
      {"type": "started"}
      {"type": "snapshot", "transcript": "..."}
      {"type": "ended"}
      {"type": "error", "reason": "...", "fatal": false}

    Raises:
        ValueError: Unknown type or missing/invalid fields.
    """
    if not isinstance(message, dict):
        raise ValueError("Message must be a JSON object")

    kind = message.get("type")
    if kind == "started":
        return SourceStarted()
    if kind == "ended":
        return SourceEnded()
    if kind == "snapshot":
        transcript = message.get("transcript", "")
        if transcript is None:
            transcript = ""
        if not isinstance(transcript, str):
            raise ValueError("'transcript' must be a string")
        return TranscriptSnapshot(transcript)
    if kind == "error":
        reason = str(message.get("reason") or "unknown error")
        if message.get("fatal"):
            return SourceFailed(TranscriptSourceError(reason))
        return TransportError(reason)
    raise ValueError("Unknown message type: {!r}".format(kind))
