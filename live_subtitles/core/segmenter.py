"""Sentence-like segmentation of raw document text.

WHY: The alignment engine tracks the speaker sentence by sentence. Both
the original and the translated document must be cut into comparable,
ordered units before they can be paired.

HOW: Split on any run of sentence-terminating punctuation, trim each
piece, and drop short fragments that are punctuation noise rather than
real sentences.

RULES:
- Delimiter: one or more of ".", "!", "?" in sequence (a single delimiter,
  so "...", "?!" and "!!!" never produce empty pieces)
- Each piece is trimmed of surrounding whitespace
- Pieces with trimmed length <= MIN_SEGMENT_LENGTH are dropped
- Order is preserved, casing is preserved
- Empty input yields an empty list; never raises
"""

from __future__ import annotations

import re
from typing import List

from live_subtitles.config import MIN_SEGMENT_LENGTH

# A run of sentence-ending punctuation counts as one delimiter.
_SENTENCE_END_RE = re.compile(r"[.!?]+")


def segment(text: str, min_length: int = MIN_SEGMENT_LENGTH) -> List[str]:
    """Split text into ordered, trimmed, non-trivial segments.

    Args:
        text: Raw document text (any casing, any line breaks).
        min_length: Fragments with a trimmed length at or below this
                    value are discarded.

    Returns:
        List of segment strings in document order.
    """
    if not text:
        return []

    segments: List[str] = []
    for piece in _SENTENCE_END_RE.split(text):
        stripped = piece.strip()
        if len(stripped) > min_length:
            segments.append(stripped)
    return segments
