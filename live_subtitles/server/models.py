"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One model per request or response shape. All models include Field
descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal engine objects directly
- DocumentRole and StatusKind are imported from core.session
  (single source of truth)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from live_subtitles.core.session import DocumentRole, StatusKind


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TranscriptUpdateRequest(BaseModel):
    """One transcript snapshot pushed by an external recognizer."""

    transcript: str = Field(
        description="Full cumulative transcript so far (not a delta).",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DocumentLoadedResponse(BaseModel):
    """Result of loading one side of the text pair.

    RULES:
    - segments counts this document's segments before truncation
    - aligned_entries is the length of the rebuilt alignment table
    """

    role: DocumentRole = Field(description="Which side of the pair was loaded.")
    filename: str = Field(description="Uploaded filename.")
    characters: int = Field(description="Number of characters of extracted text.")
    segments: int = Field(description="Number of segments found in this document.")
    aligned_entries: int = Field(description="Entries in the rebuilt alignment table.")


class AlignmentEntryModel(BaseModel):
    index: int = Field(description="Zero-based segment index.")
    source: str = Field(description="Source-language segment.")
    translated: str = Field(description="Paired translated segment, empty if unavailable.")


class AlignmentTableResponse(BaseModel):
    """The current positional alignment table.

    WHY: Operators check the pairing before going live; the truncation
    counts show when the two documents disagree on sentence count.
    """

    entries: List[AlignmentEntryModel] = Field(description="Aligned segment pairs in order.")
    source_segments: int = Field(description="Segments found in the original text.")
    translated_segments: int = Field(description="Segments found in the translated text.")
    dropped_source: int = Field(description="Original segments dropped by truncation.")
    dropped_translated: int = Field(description="Translated segments dropped by truncation.")


class PositionChangeModel(BaseModel):
    index: int = Field(description="Newly matched segment index.")
    translated_segment: str = Field(description="Translated text for that segment.")


class TranscriptUpdateResponse(BaseModel):
    position_change: Optional[PositionChangeModel] = Field(
        default=None,
        description="The position change, or null when the position did not move.",
    )


class StatusModel(BaseModel):
    message: str = Field(description="Human-readable status message.")
    kind: StatusKind = Field(description="'info' or 'error'.")


class SessionResponse(BaseModel):
    """Current listening state."""

    listening: bool = Field(description="Whether transcript updates are being tracked.")
    current_index: Optional[int] = Field(
        default=None,
        description="Current segment index, null before the first match or when idle.",
    )
    current_subtitle: Optional[str] = Field(
        default=None,
        description="Translated text at the current index.",
    )
    aligned_entries: int = Field(description="Entries in the current alignment table.")
    status: Optional[StatusModel] = Field(
        default=None,
        description="Most recent status message.",
    )


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
