"""Configuration constants, supported formats, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Segment thresholds, supported document formats,
replay pacing, and server defaults are plain data — not buried in
logic — so operators can tune them without touching code.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values with environment-variable overrides.

RULES:
- MIN_SEGMENT_LENGTH: fragments whose trimmed length is <= this are noise
- SUPPORTED_DOCUMENT_FORMATS lists accepted document extensions
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------

MIN_SEGMENT_LENGTH = int(os.getenv("MIN_SEGMENT_LENGTH", "5"))
"""Segments with a trimmed length at or below this are dropped."""

# ---------------------------------------------------------------------------
# Supported document file extensions
# ---------------------------------------------------------------------------

SUPPORTED_DOCUMENT_FORMATS: set[str] = {".txt", ".pdf", ".docx"}
"""Document extensions accepted by ingestion (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Transcript replay and server defaults
# ---------------------------------------------------------------------------

DEFAULT_REPLAY_INTERVAL_S = float(os.getenv("REPLAY_INTERVAL_S", "0.5"))
SERVER_HOST = os.getenv("LIVE_SUBTITLES_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("LIVE_SUBTITLES_PORT", "8000"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
