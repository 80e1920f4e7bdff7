"""Shared test fixtures for the live_subtitles test suite.

WHY: Most test modules need the same small bilingual text pair, a table
built from it, and a sink that records what it was asked to display.

HOW: Pytest fixtures provide the texts, the prebuilt AlignmentTable, and
a RecordingSink instance.

RULES:
- The sample pair has four sentences on each side, all longer than the
  minimum segment length, so the table has exactly four entries.
- RecordingSink keeps every displayed text in order.
"""

from typing import List

import pytest

from live_subtitles.core.alignment import AlignmentTable, build_alignment_table
from live_subtitles.sinks.base import SubtitleSink


ORIGINAL_TEXT = (
    "Good evening everyone. Thank you for coming tonight! "
    "Our story begins in a small village. Are you ready to listen?"
)

TRANSLATED_TEXT = (
    "Bonsoir à tous. Merci d'être venus ce soir ! "
    "Notre histoire commence dans un petit village. Êtes-vous prêts à écouter ?"
)


class RecordingSink(SubtitleSink):
    """Sink that records every displayed subtitle."""

    def __init__(self) -> None:
        self.displayed: List[str] = []

    @property
    def name(self) -> str:
        return "Recording"

    def display(self, text: str) -> None:
        self.displayed.append(text)


@pytest.fixture
def original_text() -> str:
    return ORIGINAL_TEXT


@pytest.fixture
def translated_text() -> str:
    return TRANSLATED_TEXT


@pytest.fixture
def sample_table() -> AlignmentTable:
    """Four-entry table built from the sample pair."""
    return build_alignment_table(ORIGINAL_TEXT, TRANSLATED_TEXT)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
