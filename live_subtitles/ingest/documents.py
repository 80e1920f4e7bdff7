"""Plain-text extraction from uploaded documents.

WHY: Speakers bring their script and its translation as plain text, PDF,
or Word files. The alignment core only understands plain strings, so
every format has to be reduced to text before a table can be built.

HOW: extract_text_from_bytes() dispatches on the lowercase filename
extension to one reader per format. pypdf reads PDFs page by page,
python-docx reads .docx paragraphs, plain text is decoded as UTF-8.
Parsing runs in a worker thread via asyncio.to_thread() so a large
multi-page document never blocks the event loop.

RULES:
- Supported extensions come from config.SUPPORTED_DOCUMENT_FORMATS
- Unknown extension -> UnsupportedFormatError(extension), before any parsing
- Parser failures on a supported extension -> DocumentReadError
- .txt: UTF-8, BOM tolerated, undecodable bytes replaced
- .pdf: page texts joined with newlines
- .docx: paragraph texts joined with newlines
- The returned text is stripped of leading/trailing whitespace
- Legacy binary .doc is not supported
"""

from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path
from typing import Callable, Dict

import docx
from pypdf import PdfReader

from live_subtitles.config import SUPPORTED_DOCUMENT_FORMATS
from live_subtitles.core.errors import DocumentReadError, UnsupportedFormatError

logger = logging.getLogger(__name__)


def _read_text(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="replace")


def _read_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


def _read_docx(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


_READERS: Dict[str, Callable[[bytes], str]] = {
    ".txt": _read_text,
    ".pdf": _read_pdf,
    ".docx": _read_docx,
}


def document_extension(filename: str) -> str:
    """Return the lowercase extension (with dot) of a document filename."""
    return Path(filename).suffix.lower()


def check_supported(filename: str) -> str:
    """Validate a filename's extension and return it.

    Raises:
        UnsupportedFormatError: If the extension is not a supported format.
    """
    ext = document_extension(filename)
    if ext not in SUPPORTED_DOCUMENT_FORMATS or ext not in _READERS:
        raise UnsupportedFormatError(ext)
    return ext


def _extract(filename: str, ext: str, data: bytes) -> str:
    try:
        text = _READERS[ext](data)
    except Exception as exc:
        raise DocumentReadError(filename, str(exc) or type(exc).__name__) from exc
    return text.strip()


async def extract_text_from_bytes(filename: str, data: bytes) -> str:
    """Extract plain text from an in-memory document.

    WHY: The HTTP server receives uploads as bytes and has no file path.

    Args:
        filename: Original filename, used only for its extension and messages.
        data: Raw file content.

    Returns:
        The document's plain text, stripped.

    Raises:
        UnsupportedFormatError: Unknown extension.
        DocumentReadError: The document could not be parsed.
    """
    ext = check_supported(filename)
    text = await asyncio.to_thread(_extract, filename, ext, data)
    logger.info("Extracted %d characters from %s", len(text), filename)
    return text


async def extract_text(path: str | Path) -> str:
    """Extract plain text from a document on disk.

    Args:
        path: Path to a .txt, .pdf or .docx file.

    Returns:
        The document's plain text, stripped.

    Raises:
        UnsupportedFormatError: Unknown extension (checked before reading).
        DocumentReadError: The file could not be read or parsed.
    """
    path = Path(path)
    check_supported(path.name)
    try:
        data = await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise DocumentReadError(path.name, exc.strerror or str(exc)) from exc
    return await extract_text_from_bytes(path.name, data)
