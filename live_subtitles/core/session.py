"""Subtitle session: texts, alignment table, engine lifecycle, and status.

WHY: Something has to own the two loaded documents, rebuild the table
when either changes, start and stop listening, and route transcript
events to the engine. Keeping that in one injected controller — instead
of a global app object wired to a UI — lets the CLI, the HTTP server,
and the tests drive the same logic.

HOW: SubtitleSession stores the original and translated texts and the
current AlignmentTable. start() creates a fresh AlignmentEngine over the
table with the injected sink; stop() discards it. handle_event()
dispatches one transcript event; consume() drains a TranscriptFeed in
order. Every user-visible outcome is reported as a SessionStatus value
through the optional on_status callback and kept as last_status.

RULES:
- Lifecycle: Idle -> Listening (start) -> Idle (stop or source failure)
- SourceStarted and SourceEnded only mark recognizer session boundaries;
  the position survives a recognizer restart
- start() requires both texts non-empty after trimming, else reports a
  status and raises MissingInputError
- start() while listening restarts with an unset position
- stop() is idempotent
- Loading a text replaces the table wholesale; a running engine keeps
  the table it was started with until the next start()
- Snapshots delivered while Idle are ignored
- Ingestion errors are reported as status and re-raised; they never
  touch the engine
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from live_subtitles.core.alignment import AlignmentTable, build_alignment_table
from live_subtitles.core.engine import AlignmentEngine, PositionChange
from live_subtitles.core.errors import LiveSubtitlesError, MissingInputError
from live_subtitles.core.events import (
    SourceEnded,
    SourceFailed,
    SourceStarted,
    TranscriptEvent,
    TranscriptFeed,
    TranscriptSnapshot,
    TransportError,
)
from live_subtitles.ingest.documents import extract_text

if TYPE_CHECKING:
    from live_subtitles.sinks.base import SubtitleSink

logger = logging.getLogger(__name__)


class DocumentRole(str, enum.Enum):
    """Which side of the text pair a document provides."""

    ORIGINAL = "original"
    TRANSLATED = "translated"


class StatusKind(str, enum.Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class SessionStatus:
    """One user-visible status message."""

    message: str
    kind: StatusKind = StatusKind.INFO


StatusCallback = Callable[[SessionStatus], None]


class SubtitleSession:
    """Controller for one pair of texts and its listening sessions."""

    def __init__(
        self,
        sink: Optional[SubtitleSink] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> None:
        self._sink = sink
        self._on_status = on_status
        self._texts = {DocumentRole.ORIGINAL: "", DocumentRole.TRANSLATED: ""}
        self._table = AlignmentTable()
        self._engine: Optional[AlignmentEngine] = None
        self.last_status: Optional[SessionStatus] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def original_text(self) -> str:
        return self._texts[DocumentRole.ORIGINAL]

    @property
    def translated_text(self) -> str:
        return self._texts[DocumentRole.TRANSLATED]

    @property
    def table(self) -> AlignmentTable:
        return self._table

    @property
    def listening(self) -> bool:
        return self._engine is not None and self._engine.listening

    @property
    def current_index(self) -> Optional[int]:
        if self._engine is None:
            return None
        return self._engine.current_index

    @property
    def current_subtitle(self) -> Optional[str]:
        """Translated text at the current position, or None before any match."""
        index = self.current_index
        if index is None or self._engine is None:
            return None
        return self._engine.table[index].translated

    # ------------------------------------------------------------------
    # Status reporting
    # ------------------------------------------------------------------

    def _report(self, message: str, kind: StatusKind = StatusKind.INFO) -> SessionStatus:
        status = SessionStatus(message=message, kind=kind)
        self.last_status = status
        if kind is StatusKind.ERROR:
            logger.warning(message)
        else:
            logger.info(message)
        if self._on_status is not None:
            self._on_status(status)
        return status

    # ------------------------------------------------------------------
    # Loading texts
    # ------------------------------------------------------------------

    def load_text(self, role: DocumentRole, text: str, name: Optional[str] = None) -> AlignmentTable:
        """Store one side of the text pair and rebuild the alignment table.

        Args:
            role: Whether this is the original or the translated text.
            text: Plain text content.
            name: Display name for the status message (e.g. the filename).

        Returns:
            The rebuilt AlignmentTable.
        """
        role = DocumentRole(role)
        self._texts[role] = text
        self._table = build_alignment_table(self.original_text, self.translated_text)
        self._report("{} text loaded: {}".format(role.value.capitalize(), name or "(inline text)"))
        return self._table

    async def load_document(self, role: DocumentRole, path: str | Path) -> AlignmentTable:
        """Extract a document's text and load it.

        Raises:
            UnsupportedFormatError: Unknown document extension.
            DocumentReadError: The document could not be parsed.
        """
        role = DocumentRole(role)
        path = Path(path)
        try:
            text = await extract_text(path)
        except LiveSubtitlesError as exc:
            self.report_load_error(role, exc)
            raise
        return self.load_text(role, text, name=path.name)

    def report_load_error(self, role: DocumentRole, error: Exception) -> SessionStatus:
        """Report a failed document load; texts and table are left untouched."""
        return self._report(
            "Error loading {} text: {}".format(DocumentRole(role).value, error),
            StatusKind.ERROR,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin listening over the current table.

        Raises:
            MissingInputError: If either text is missing.
        """
        if not self.original_text.strip() or not self.translated_text.strip():
            error = MissingInputError()
            self._report(str(error), StatusKind.ERROR)
            raise error

        if self._engine is not None:
            self._engine.stop()
        if not len(self._table):
            logger.warning("Starting with an empty alignment table; nothing can match")

        self._engine = AlignmentEngine(self._table, sink=self._sink)
        self._engine.start()
        logger.info("Listening over %d aligned segments", len(self._table))

    def stop(self) -> None:
        """Stop listening and discard the engine state. Idempotent."""
        if self._engine is None:
            return
        self._engine.stop()
        self._engine = None
        logger.info("Listening stopped")

    # ------------------------------------------------------------------
    # Transcript events
    # ------------------------------------------------------------------

    def handle_event(self, event: TranscriptEvent) -> Optional[PositionChange]:
        """Apply one transcript event.

        Returns:
            The PositionChange emitted by a snapshot, otherwise None.
        """
        if isinstance(event, TranscriptSnapshot):
            if self._engine is None:
                return None
            return self._engine.on_transcript_update(event.text)

        if isinstance(event, SourceStarted):
            if self.listening:
                self._report("Listening...")
            else:
                self._report("Transcript source started while not listening", StatusKind.ERROR)
        elif isinstance(event, SourceEnded):
            self._report("Stopped listening")
        elif isinstance(event, TransportError):
            self._report("Speech recognition error: {}".format(event.reason), StatusKind.ERROR)
        elif isinstance(event, SourceFailed):
            self.stop()
            self._report("Speech recognition error: {}".format(event.error), StatusKind.ERROR)
        else:
            logger.warning("Ignoring unknown transcript event %r", event)
        return None

    async def consume(self, feed: TranscriptFeed) -> int:
        """Process feed events in order until the feed is closed.

        Returns:
            Number of position changes emitted.
        """
        changes = 0
        async for event in feed:
            if self.handle_event(event) is not None:
                changes += 1
        return changes
