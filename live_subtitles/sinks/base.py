"""Abstract subtitle sink.

WHY: The engine emits translated subtitles but must not know how they
are shown — a terminal, an overlay text file, or browser viewers. This
base class is the single interface every presentation adapter implements,
so the core stays testable without any rendering surface.

HOW: SubtitleSink is an ABC with a ``name`` property and a ``display()``
method. The engine calls display() once per position change.

RULES:
- display() is fire-and-forget: its return value is ignored
- display() must not block the event loop for long
- Transition effects and styling are the sink's own business

To add a new sink:
1. Create a new file in sinks/
2. Subclass SubtitleSink
3. Implement display() and name
4. Register in SINKS in sinks/__init__.py if it is CLI-selectable
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SubtitleSink(ABC):
    """Abstract base for all subtitle sinks."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable sink name, e.g. 'Console'."""

    @abstractmethod
    def display(self, text: str) -> None:
        """Show one translated subtitle.

        Args:
            text: The translated segment to display. May be "" when the
                  translation is unavailable for the matched segment.
        """
