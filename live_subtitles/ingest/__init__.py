"""Document ingestion package — text extraction from uploaded files.

WHY: The alignment core consumes plain strings only. This package is the
single place that knows about file formats.

HOW: documents.py provides async extract_text() for paths and
extract_text_from_bytes() for uploads, backed by pypdf and python-docx.

RULES:
- Ingestion errors never reach the alignment engine
- Adding a format = one reader function and one SUPPORTED_DOCUMENT_FORMATS entry
"""

from live_subtitles.ingest.documents import extract_text, extract_text_from_bytes

__all__ = ["extract_text", "extract_text_from_bytes"]
