"""Broadcast subtitle sink fanning out to websocket viewers.

WHY: In the HTTP server, any number of browser viewers may watch the
subtitles at once. The engine calls display() once; every connected
viewer must receive the text without the engine waiting on slow clients.

HOW: Each viewer subscribes and gets its own asyncio.Queue bound to the
event loop it subscribed from. display() remembers the latest text and
schedules a put on every subscriber's loop with call_soon_threadsafe(),
so it is safe to call from any thread and never blocks.

RULES:
- display() never blocks and never raises for closed viewers
- current_text is the last displayed subtitle, or None before the first
- subscribe() must be called from inside a running event loop
- Viewers unsubscribe when their connection closes
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Dict, Optional

from live_subtitles.sinks.base import SubtitleSink

logger = logging.getLogger(__name__)


class BroadcastSink(SubtitleSink):
    """Deliver each subtitle to every subscribed viewer queue."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[asyncio.Queue, asyncio.AbstractEventLoop] = {}
        self.current_text: Optional[str] = None

    @property
    def name(self) -> str:
        return "Broadcast"

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Register a viewer and return the queue its subtitles arrive on."""
        queue: asyncio.Queue = asyncio.Queue()
        loop = asyncio.get_running_loop()
        with self._lock:
            self._subscribers[queue] = loop
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        with self._lock:
            self._subscribers.pop(queue, None)

    def reset(self) -> None:
        """Forget the current subtitle (subscribers are kept)."""
        self.current_text = None

    def display(self, text: str) -> None:
        self.current_text = text
        with self._lock:
            targets = list(self._subscribers.items())
        for queue, loop in targets:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, text)
            except RuntimeError:
                # Viewer's loop already closed
                logger.debug("Dropping subtitle for a viewer on a closed loop")
                self.unsubscribe(queue)
