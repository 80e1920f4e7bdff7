"""Alignment table dataclasses and the positional table builder.

WHY: The engine needs a fixed corpus of (source sentence, translated
sentence) pairs to track against. Translations are supplied already
sentence-aligned closely enough that pairing by position is an adequate
approximation — no semantic or length-based bitext alignment is attempted.

HOW: Two dataclasses form the corpus:
  AlignmentEntry — one indexed (source, translated) pair
  AlignmentTable — the ordered, immutable sequence of entries, plus the
                   segment counts it was built from
build_alignment_table() segments both texts independently and zips them
up to the shorter length.

RULES:
- len(table) == min(len(source segments), len(translated segments))
- Trailing segments of the longer side are dropped (truncation policy);
  the table keeps the original counts so callers can report the drop
- Pairing is by index only — never by content
- translated may be "" — a valid degraded state, never an error
- The builder never raises for mismatched lengths
- Tables are rebuilt wholesale, never patched
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from live_subtitles.config import MIN_SEGMENT_LENGTH
from live_subtitles.core.segmenter import segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentEntry:
    """A single positional pair of source and translated segments.

    RULES:
    - index: 0-based position in both segment lists
    - source: the source-language segment, original casing
    - translated: the paired translation, or "" when unavailable
    """

    index: int
    source: str
    translated: str = ""


@dataclass(frozen=True)
class AlignmentTable:
    """The static corpus the alignment engine tracks against.

    WHY: Built once per (original, translated) text pair and shared
    read-only by the engine for a whole listening session.

    HOW: Behaves as a read-only sequence of AlignmentEntry (len, iteration,
    indexing). source_count and translated_count record how many segments
    each side produced before truncation.

    RULES:
    - entries are ordered by index, entries[i].index == i
    - dropped_source / dropped_translated count the truncated tail
    """

    entries: Tuple[AlignmentEntry, ...] = field(default_factory=tuple)
    source_count: int = 0
    translated_count: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[AlignmentEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> AlignmentEntry:
        return self.entries[index]

    @property
    def dropped_source(self) -> int:
        """Source segments beyond the table length."""
        return self.source_count - len(self.entries)

    @property
    def dropped_translated(self) -> int:
        """Translated segments beyond the table length."""
        return self.translated_count - len(self.entries)


def build_alignment_table(
    original_text: str,
    translated_text: str,
    min_length: int = MIN_SEGMENT_LENGTH,
) -> AlignmentTable:
    """Build the positional alignment table for a text pair.

    WHY: The engine only understands indexed pairs. This function is the
    bridge between two free-form documents and that corpus.

    HOW: Run the segmenter on each text independently, then zip the two
    lists positionally. zip() stops at the shorter list, which is exactly
    the truncation policy.

    Args:
        original_text: Source-language document text.
        translated_text: Pre-translated document text.
        min_length: Segment length threshold passed to the segmenter.

    Returns:
        AlignmentTable with min(len(source), len(translated)) entries.
    """
    source_segments = segment(original_text, min_length)
    translated_segments = segment(translated_text, min_length)

    entries = tuple(
        AlignmentEntry(index=i, source=source, translated=translated)
        for i, (source, translated) in enumerate(zip(source_segments, translated_segments))
    )
    table = AlignmentTable(
        entries=entries,
        source_count=len(source_segments),
        translated_count=len(translated_segments),
    )

    if table.dropped_source or table.dropped_translated:
        logger.info(
            "Alignment table truncated to %d entries (dropped %d source, %d translated segments)",
            len(table),
            table.dropped_source,
            table.dropped_translated,
        )
    return table
