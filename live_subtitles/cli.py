"""Command-line interface for live subtitle sessions.

WHY: Operators need a quick way to check how a script and its translation
pair up, and to rehearse a talk against a recorded or simulated
transcript without a browser or a live recognizer.

HOW: Uses argparse to accept the original and translated documents, an
optional transcript source (--transcript for recorded snapshots, --speech
to simulate interim results from a text), a sink selection, and pacing.
Documents are loaded through the session, the transcript source publishes
into a TranscriptFeed, and the session consumes it in order. Runs the
async pipeline via asyncio.run(). Status messages go to stderr;
subtitles go to the selected sink.

RULES:
- Positional arguments: original document, translated document
- --transcript and --speech are mutually exclusive; without either the
  CLI only loads the documents (and prints the table with --show-table)
- --sink text_file requires --output
- Status output goes to stderr (not stdout)
- Errors print "Error: ..." and exit with status 1; Ctrl-C exits 130
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from live_subtitles.config import DEFAULT_REPLAY_INTERVAL_S, LOG_FORMAT, LOG_LEVEL
from live_subtitles.core.alignment import AlignmentTable
from live_subtitles.core.errors import LiveSubtitlesError, MissingInputError
from live_subtitles.core.events import TranscriptFeed
from live_subtitles.core.session import DocumentRole, SessionStatus, StatusKind, SubtitleSession
from live_subtitles.ingest.documents import extract_text
from live_subtitles.sinks import SINKS
from live_subtitles.sinks.base import SubtitleSink
from live_subtitles.sinks.text_file import TextFileSink
from live_subtitles.sources.replay import ReplayTranscriptSource


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so subtitles can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _print_session_status(status: SessionStatus) -> None:
    if status.kind is StatusKind.ERROR:
        _status("Error: {}".format(status.message))
    else:
        _status(status.message)


def _fail(msg: str) -> NoReturn:
    _status("Error: {}".format(msg))
    sys.exit(1)


def _build_sink(key: str, output: Optional[str]) -> SubtitleSink:
    """Instantiate the sink selected on the command line."""
    sink_class = SINKS[key]
    if sink_class is TextFileSink:
        if not output:
            _fail("--sink text_file requires --output")
        output_path = Path(output).resolve()
        if not output_path.parent.is_dir():
            _fail("Output directory does not exist: {}".format(output_path.parent))
        return TextFileSink(output_path)
    return sink_class()


def _print_table(table: AlignmentTable) -> None:
    """Write the alignment table to stdout, one tab-separated entry per line."""
    for entry in table:
        print("{}\t{}\t{}".format(entry.index, entry.source, entry.translated))


async def _build_source(args: argparse.Namespace) -> Optional[ReplayTranscriptSource]:
    if args.transcript:
        return ReplayTranscriptSource.from_file(args.transcript, interval_s=args.interval)
    if args.speech:
        speech = await extract_text(args.speech)
        return ReplayTranscriptSource.from_speech(speech, interval_s=args.interval)
    return None


async def _run_session(args: argparse.Namespace) -> None:
    """Load documents, then replay the transcript source through the session.

    RULES:
    - Validate every input path before loading anything
    - Load errors are reported by the session's status callback
    - The session is always stopped at the end
    """
    original_path = Path(args.original).resolve()
    translated_path = Path(args.translated).resolve()
    for path in (original_path, translated_path):
        if not path.is_file():
            _fail("File not found: {}".format(path))

    sink = _build_sink(args.sink, args.output)
    session = SubtitleSession(sink=sink, on_status=_print_session_status)

    try:
        await session.load_document(DocumentRole.ORIGINAL, original_path)
        await session.load_document(DocumentRole.TRANSLATED, translated_path)
    except LiveSubtitlesError:
        sys.exit(1)

    table = session.table
    _status("  Aligned {} segments ({} original, {} translated)".format(
        len(table), table.source_count, table.translated_count,
    ))
    if table.dropped_source or table.dropped_translated:
        _status("  Dropped {} original and {} translated trailing segments".format(
            table.dropped_source, table.dropped_translated,
        ))

    if args.show_table:
        _print_table(table)

    try:
        source = await _build_source(args)
    except LiveSubtitlesError as e:
        _fail(str(e))
    if source is None:
        return

    try:
        session.start()
    except MissingInputError:
        sys.exit(1)

    _status("Replaying {} transcript snapshots to {}...".format(len(source.snapshots), sink.name))
    feed = TranscriptFeed()
    try:
        _, changes = await asyncio.gather(source.run(feed), session.consume(feed))
    finally:
        session.stop()

    _status("")
    _status("Done! {} subtitle change(s)".format(changes))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running a session.
    """
    parser = argparse.ArgumentParser(
        prog="live_subtitles",
        description="Track a speaker through a prepared text and show the "
                    "matching pre-translated subtitles.",
    )

    parser.add_argument(
        "original",
        help="Original-language document (.txt, .pdf, .docx).",
    )

    parser.add_argument(
        "translated",
        help="Translated document, sentence-aligned with the original.",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--transcript",
        default=None,
        help="Recorded transcript file: one cumulative snapshot per line.",
    )
    source.add_argument(
        "--speech",
        default=None,
        help="Text (or document) to simulate as speech, word by word.",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_REPLAY_INTERVAL_S,
        help="Seconds between replayed snapshots (default: %(default)s).",
    )

    parser.add_argument(
        "--sink",
        choices=sorted(SINKS.keys()),
        default="console",
        help="Where subtitles are shown (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Output file for --sink text_file.",
    )

    parser.add_argument(
        "--show-table",
        action="store_true",
        help="Print the alignment table (index, original, translated) to stdout.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show log messages on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVEL if args.verbose else logging.ERROR,
        format=LOG_FORMAT,
    )
    try:
        asyncio.run(_run_session(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
