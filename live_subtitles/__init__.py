"""Live Subtitles — transcript-driven bilingual subtitle tracking.

WHY: A speaker reads from a prepared text while an audience follows a
pre-translated version. Speech recognition produces noisy, partial,
ever-growing transcripts; something has to decide which sentence of the
prepared text the speaker has reached and show its translation.

HOW: Three-stage pipeline — ingest (document text extraction), align
(segmenter + positional alignment table), track (alignment engine driven
by transcript snapshots, emitting to pluggable subtitle sinks). Each
stage is independently testable.

RULES:
- The alignment table is the stable contract between ingestion and tracking
- Transcript sources and subtitle sinks are adapters, never core logic
- The engine never raises during matching; failures are status values
"""

__version__ = "0.1.0"
