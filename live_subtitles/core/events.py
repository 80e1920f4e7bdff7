"""Transcript events and the single-consumer delivery feed.

WHY: Transcript sources push updates whenever they like — from a
websocket, a replay file, a recognizer callback. The session must process
them strictly one at a time and in order. Modelling the boundary as a
message queue makes that ordering explicit instead of relying on
re-entrant callbacks.

HOW: Five small event dataclasses describe everything a source can say.
TranscriptFeed wraps an asyncio.Queue: producers publish(), one consumer
iterates with ``async for``. close() ends the iteration after every
event already published has been delivered.

RULES:
- TranscriptSnapshot.text is the cumulative transcript, never a delta
- TransportError is recoverable; SourceFailed is not
- SourceFailed carries a TranscriptSourceError by value
- Exactly one consumer per feed
- Events published after close() are dropped with a warning
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Union

from live_subtitles.core.errors import TranscriptSourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceStarted:
    """The transcript source began a recognition session."""


@dataclass(frozen=True)
class TranscriptSnapshot:
    """The full transcript text recognised so far."""

    text: str


@dataclass(frozen=True)
class SourceEnded:
    """The transcript source ended its recognition session."""


@dataclass(frozen=True)
class TransportError:
    """A recoverable delivery problem; the source keeps running."""

    reason: str


@dataclass(frozen=True)
class SourceFailed:
    """The source stopped for good (unsupported environment, permission denied)."""

    error: TranscriptSourceError


TranscriptEvent = Union[SourceStarted, TranscriptSnapshot, SourceEnded, TransportError, SourceFailed]

_CLOSED = object()


class TranscriptFeed:
    """Ordered single-consumer queue of transcript events."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event: TranscriptEvent) -> None:
        """Enqueue one event for the consumer. Never blocks."""
        if self._closed:
            logger.warning("Dropping %s published after feed close", type(event).__name__)
            return
        self._queue.put_nowait(event)

    def close(self) -> None:
        """Stop iteration once queued events are drained. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> TranscriptFeed:
        return self

    async def __anext__(self) -> TranscriptEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item
