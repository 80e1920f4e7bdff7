"""FastAPI application: document upload, session control, and live subtitles.

WHY: The live setting is a browser-driven one — an operator uploads the
script and its translation, starts listening, an external recognizer
pushes transcripts, and audience screens show the subtitles. An HTTP and
websocket API lets any recognizer and any display plug in.

HOW: A single module-level SubtitleSession, wired to a BroadcastSink,
backs every endpoint. Documents are uploaded as multipart files and
reduced to text by the ingestion package. Transcript snapshots arrive
either as POST requests or over the /session/transcripts websocket; both
call session.handle_event() directly. Viewers connect to /subtitles and
receive each new subtitle as JSON.

RULES:
- All handlers run on one event loop and handle_event() is synchronous,
  so transcript deliveries never overlap
- Ingestion errors map to 400 (unsupported format) and 422 (unreadable)
- start() without both texts maps to 409
- Error responses use the ErrorResponse schema
- Snapshots while idle are accepted and ignored (position_change null)
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Annotated, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile, WebSocket, WebSocketDisconnect

from live_subtitles import __version__
from live_subtitles.config import LOG_FORMAT, LOG_LEVEL, SERVER_HOST, SERVER_PORT
from live_subtitles.core.engine import PositionChange
from live_subtitles.core.errors import DocumentReadError, MissingInputError, UnsupportedFormatError
from live_subtitles.core.events import TranscriptSnapshot
from live_subtitles.core.segmenter import segment
from live_subtitles.core.session import DocumentRole, SubtitleSession
from live_subtitles.ingest.documents import extract_text_from_bytes
from live_subtitles.server.models import (
    AlignmentEntryModel,
    AlignmentTableResponse,
    DocumentLoadedResponse,
    ErrorResponse,
    HealthResponse,
    PositionChangeModel,
    SessionResponse,
    StatusModel,
    TranscriptUpdateRequest,
    TranscriptUpdateResponse,
)
from live_subtitles.sinks.broadcast import BroadcastSink
from live_subtitles.sources.base import event_from_message

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and session setup
# ---------------------------------------------------------------------------

subtitle_sink = BroadcastSink()
session = SubtitleSession(sink=subtitle_sink)

app = FastAPI(
    title="Live Subtitles API",
    description=(
        "Upload a script and its translation, start listening, push speech "
        "transcripts, and stream the matching translated subtitles to viewers."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def reset_session() -> SubtitleSession:
    """Replace the module-level session with a fresh one (same sink)."""
    global session
    session.stop()
    subtitle_sink.reset()
    session = SubtitleSession(sink=subtitle_sink)
    return session


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _change_to_model(change: Optional[PositionChange]) -> Optional[PositionChangeModel]:
    if change is None:
        return None
    return PositionChangeModel(index=change.index, translated_segment=change.translated_segment)


async def _cancel_task(task: asyncio.Task) -> None:
    """Cancel a helper task and retrieve its outcome, whatever it was."""
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError, Exception):
        await task


def _session_to_response(current: SubtitleSession) -> SessionResponse:
    status = current.last_status
    return SessionResponse(
        listening=current.listening,
        current_index=current.current_index,
        current_subtitle=current.current_subtitle,
        aligned_entries=len(current.table),
        status=StatusModel(message=status.message, kind=status.kind) if status else None,
    )


# ---------------------------------------------------------------------------
# Endpoints: Documents and alignment
# ---------------------------------------------------------------------------


@app.post(
    "/documents/{role}",
    response_model=DocumentLoadedResponse,
    status_code=201,
    tags=["documents"],
    summary="Upload the original or translated document",
    description=(
        "Upload a .txt, .pdf or .docx file as the original or translated text. "
        "The alignment table is rebuilt immediately."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported file type"},
        422: {"model": ErrorResponse, "description": "Document could not be read"},
    },
)
async def upload_document(
    role: DocumentRole,
    file: Annotated[UploadFile, File(description="Document to load (.txt, .pdf, .docx).")],
) -> DocumentLoadedResponse:
    filename = file.filename or ""
    data = await file.read()
    try:
        text = await extract_text_from_bytes(filename, data)
    except UnsupportedFormatError as exc:
        session.report_load_error(role, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except DocumentReadError as exc:
        session.report_load_error(role, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    table = session.load_text(role, text, name=filename)
    return DocumentLoadedResponse(
        role=role,
        filename=filename,
        characters=len(text),
        segments=len(segment(text)),
        aligned_entries=len(table),
    )


@app.get(
    "/alignment",
    response_model=AlignmentTableResponse,
    tags=["documents"],
    summary="Show the alignment table",
)
async def get_alignment() -> AlignmentTableResponse:
    table = session.table
    return AlignmentTableResponse(
        entries=[
            AlignmentEntryModel(index=e.index, source=e.source, translated=e.translated)
            for e in table
        ],
        source_segments=table.source_count,
        translated_segments=table.translated_count,
        dropped_source=table.dropped_source,
        dropped_translated=table.dropped_translated,
    )


# ---------------------------------------------------------------------------
# Endpoints: Session control
# ---------------------------------------------------------------------------


@app.get("/session", response_model=SessionResponse, tags=["session"], summary="Session state")
async def get_session() -> SessionResponse:
    return _session_to_response(session)


@app.post(
    "/session/start",
    response_model=SessionResponse,
    tags=["session"],
    summary="Start listening",
    responses={409: {"model": ErrorResponse, "description": "Original or translated text missing"}},
)
async def start_session() -> SessionResponse:
    try:
        session.start()
    except MissingInputError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    subtitle_sink.reset()
    return _session_to_response(session)


@app.post(
    "/session/stop",
    response_model=SessionResponse,
    tags=["session"],
    summary="Stop listening (idempotent)",
)
async def stop_session() -> SessionResponse:
    session.stop()
    return _session_to_response(session)


@app.post(
    "/session/transcript",
    response_model=TranscriptUpdateResponse,
    tags=["session"],
    summary="Push one transcript snapshot",
    description=(
        "Submit the full transcript recognised so far. Returns the position "
        "change if the tracked segment moved, otherwise null."
    ),
)
async def push_transcript(request: TranscriptUpdateRequest) -> TranscriptUpdateResponse:
    change = session.handle_event(TranscriptSnapshot(request.transcript))
    return TranscriptUpdateResponse(position_change=_change_to_model(change))


# ---------------------------------------------------------------------------
# Websockets
# ---------------------------------------------------------------------------


@app.websocket("/session/transcripts")
async def transcript_source_socket(websocket: WebSocket) -> None:
    """Accept transcript events from an external recognizer.

    Each message is acknowledged with the resulting position change, or
    with an error message if it could not be parsed.
    """
    await websocket.accept()
    logger.info("Transcript source connected")
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                event = event_from_message(json.loads(raw))
            except ValueError as exc:
                await websocket.send_json({"type": "error", "detail": str(exc)})
                continue
            change = session.handle_event(event)
            model = _change_to_model(change)
            await websocket.send_json({
                "type": "ack",
                "position_change": model.model_dump() if model else None,
            })
    except WebSocketDisconnect:
        logger.info("Transcript source disconnected")


@app.websocket("/subtitles")
async def subtitles_socket(websocket: WebSocket) -> None:
    """Stream subtitles to a viewer until it disconnects."""
    # Subscribe before accepting so no subtitle is missed after the handshake
    queue = subtitle_sink.subscribe()
    pump: Optional[asyncio.Task] = None

    async def _pump() -> None:
        while True:
            text = await queue.get()
            await websocket.send_json({"type": "subtitle", "text": text})

    try:
        await websocket.accept()
        logger.info("Subtitle viewer connected (%d watching)", subtitle_sink.subscriber_count)
        if subtitle_sink.current_text is not None:
            await websocket.send_json({"type": "subtitle", "text": subtitle_sink.current_text})

        pump = asyncio.create_task(_pump())
        while True:
            # Viewers do not send anything; this only detects disconnects.
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Subtitle viewer disconnected")
    finally:
        if pump is not None:
            await _cancel_task(pump)
        subtitle_sink.unsubscribe(queue)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: str = SERVER_HOST, port: int = SERVER_PORT) -> None:
    """Entry point for the live-subtitles-api console script."""
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    uvicorn.run(app, host=host, port=port)
