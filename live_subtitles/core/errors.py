"""Error taxonomy for ingestion, session control, and transcript sources.

WHY: Each boundary of the system has a small, documented set of failure
modes. Typed errors let callers handle each one explicitly instead of
catching everything and guessing.

HOW: All errors derive from LiveSubtitlesError. Ingestion raises
UnsupportedFormatError and DocumentReadError at its boundary. The session
raises MissingInputError from start(). TranscriptSourceError is never
raised by the core — sources deliver it by value inside a SourceFailed
event and the session reports it as a status.

RULES:
- The alignment engine raises none of these during matching
- "No match" is steady-state behaviour, not an error
- Every error carries a human-readable message suitable for status display
"""

from __future__ import annotations


class LiveSubtitlesError(Exception):
    """Base class for all live_subtitles errors."""


class UnsupportedFormatError(LiveSubtitlesError):
    """Raised when ingestion cannot interpret a file's extension.

    RULES:
    - extension is lowercase and includes the leading dot ("" if none)
    - Never reaches the alignment engine
    """

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__("Unsupported file type: {}".format(extension or "(none)"))


class DocumentReadError(LiveSubtitlesError):
    """Raised when a supported document cannot be parsed into text."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__("Could not read {}: {}".format(filename, reason))


class MissingInputError(LiveSubtitlesError):
    """Raised by start() before both original and translated texts are loaded.

    Recoverable: the caller may load the missing text and retry.
    """

    def __init__(
        self,
        message: str = "Please upload both original and translated texts first.",
    ) -> None:
        super().__init__(message)


class TranscriptSourceError(LiveSubtitlesError):
    """An unrecoverable transcript-source failure (unsupported environment,
    permission denial, lost device).

    Delivered by value inside a SourceFailed event, not raised.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
