"""Transcript alignment engine: position tracking over an alignment table.

WHY: Speech recognition delivers noisy, partial, growing transcripts.
Something has to decide, update by update, which segment of the source
document the speaker has reached and tell the subtitle sink exactly when
that position changes. This is the only component with real state.

HOW: Each transcript snapshot is lower-cased and the whole table is
scanned from index 0. The first entry whose lower-cased source segment
is a contiguous substring of the transcript is the match. When the match
differs from the current index, the index moves and a PositionChange is
emitted to the sink.

RULES:
- The scan always restarts at index 0; it never resumes from current_index
- Lowest matching index wins, even if a later segment is also contained
- No match -> no event, current_index unchanged
- Same index as current -> no event (repeated interim results are idempotent)
- Movement is NOT forward-only: a long transcript still containing an
  early segment's wording reports that early index again
- current_index starts unset (None), so the first match always emits
- Updates while not listening are no-ops
- on_transcript_update() never raises for empty, whitespace or None input
- Single caller at a time: the engine has no locks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from live_subtitles.core.alignment import AlignmentTable

if TYPE_CHECKING:
    from live_subtitles.sinks.base import SubtitleSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionChange:
    """The speaker's tracked position moved to a new segment.

    RULES:
    - index: table index of the newly matched entry
    - translated_segment: that entry's translated text ("" if unavailable)
    """

    index: int
    translated_segment: str


@dataclass
class EngineState:
    """Mutable tracking state for one listening session.

    RULES:
    - table: fixed for the lifetime of the state
    - current_index: None until the first match
    - listening: False before start() and after stop()
    """

    table: AlignmentTable
    current_index: Optional[int] = None
    listening: bool = False


def find_matching_index(table: AlignmentTable, transcript: Optional[str]) -> Optional[int]:
    """Return the lowest table index whose source segment the transcript contains.

    WHY: This is the whole matching policy, kept as a pure function so it
    can be tested without any engine state.

    HOW: Lower-case the transcript once (punctuation is kept), then walk
    the table from the start and test substring containment.

    Args:
        table: The alignment table to scan.
        transcript: Full current transcript snapshot.

    Returns:
        The matching entry's index, or None when nothing matches.
    """
    if not transcript:
        return None

    lowered = transcript.lower()
    for entry in table:
        if entry.source.lower() in lowered:
            return entry.index
    return None


class AlignmentEngine:
    """Track the speaker's position in an alignment table.

    WHY: Callers (the session, the HTTP server) need one object that
    consumes transcript snapshots and decides when the subtitle changes.

    HOW: Holds an EngineState and an injected SubtitleSink. start() and
    stop() flip the listening flag and reset the position;
    on_transcript_update() applies the matching policy.

    RULES:
    - The sink is optional; without one, changes are only returned
    - The engine never references a presentation layer directly
    """

    def __init__(self, table: AlignmentTable, sink: Optional[SubtitleSink] = None) -> None:
        self._state = EngineState(table=table)
        self._sink = sink

    @property
    def table(self) -> AlignmentTable:
        return self._state.table

    @property
    def current_index(self) -> Optional[int]:
        return self._state.current_index

    @property
    def listening(self) -> bool:
        return self._state.listening

    def start(self) -> None:
        """Enter the listening state with an unset position."""
        self._state.current_index = None
        self._state.listening = True

    def stop(self) -> None:
        """Leave the listening state and discard the position. Idempotent."""
        self._state.current_index = None
        self._state.listening = False

    def on_transcript_update(self, transcript: Optional[str]) -> Optional[PositionChange]:
        """Process one transcript snapshot.

        Args:
            transcript: The full cumulative transcript so far (not a diff).

        Returns:
            A PositionChange when the matched index differs from the
            current one, otherwise None.
        """
        if not self._state.listening:
            return None

        index = find_matching_index(self._state.table, transcript)
        if index is None or index == self._state.current_index:
            return None

        previous = self._state.current_index
        self._state.current_index = index
        change = PositionChange(
            index=index,
            translated_segment=self._state.table[index].translated,
        )
        logger.debug("Position moved from %s to %d", previous, index)

        if self._sink is not None:
            self._sink.display(change.translated_segment)
        return change
