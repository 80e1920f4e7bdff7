"""Tests for the SubtitleSession controller.

WHY: The session is where loading, listening and transcript events meet.
Its status messages are what operators read, and its lifecycle decides
whether a late snapshot can still move the subtitle.

HOW: Sessions are built with a RecordingSink and a list-appending status
callback. Async paths (document loading, feed consumption) run inside
asyncio.run() from ordinary synchronous tests.
"""

import asyncio

import pytest

from live_subtitles.core.errors import (
    DocumentReadError,
    MissingInputError,
    TranscriptSourceError,
    UnsupportedFormatError,
)
from live_subtitles.core.events import (
    SourceEnded,
    SourceFailed,
    SourceStarted,
    TranscriptFeed,
    TranscriptSnapshot,
    TransportError,
)
from live_subtitles.core.session import DocumentRole, SessionStatus, StatusKind, SubtitleSession


@pytest.fixture
def statuses():
    return []


@pytest.fixture
def session(recording_sink, statuses):
    return SubtitleSession(sink=recording_sink, on_status=statuses.append)


@pytest.fixture
def loaded_session(session, original_text, translated_text):
    session.load_text(DocumentRole.ORIGINAL, original_text, name="talk.txt")
    session.load_text(DocumentRole.TRANSLATED, translated_text, name="talk_fr.txt")
    return session


class TestLoading:
    def test_load_text_rebuilds_table(self, session, original_text, translated_text):
        session.load_text(DocumentRole.ORIGINAL, original_text)
        assert len(session.table) == 0
        table = session.load_text(DocumentRole.TRANSLATED, translated_text)
        assert len(table) == 4
        assert session.table is table

    def test_load_reports_status(self, session, statuses, original_text):
        session.load_text(DocumentRole.ORIGINAL, original_text, name="talk.txt")
        assert statuses == [SessionStatus("Original text loaded: talk.txt")]

    def test_inline_text_status(self, session, statuses):
        session.load_text("translated", "Bonjour tout le monde.")
        assert statuses[-1].message == "Translated text loaded: (inline text)"
        assert session.translated_text == "Bonjour tout le monde."

    def test_reload_replaces_table(self, loaded_session):
        loaded_session.load_text(DocumentRole.TRANSLATED, "Une seule phrase ici.")
        assert len(loaded_session.table) == 1

    def test_load_document_from_disk(self, session, statuses, tmp_path, original_text):
        path = tmp_path / "talk.txt"
        path.write_text(original_text, encoding="utf-8")
        asyncio.run(session.load_document(DocumentRole.ORIGINAL, path))
        assert session.original_text == original_text
        assert statuses[-1].message == "Original text loaded: talk.txt"

    def test_unsupported_document_reports_error(self, session, statuses, tmp_path):
        path = tmp_path / "talk.rtf"
        path.write_text("Some text here.", encoding="utf-8")
        with pytest.raises(UnsupportedFormatError):
            asyncio.run(session.load_document(DocumentRole.ORIGINAL, path))
        assert statuses[-1].kind is StatusKind.ERROR
        assert statuses[-1].message == "Error loading original text: Unsupported file type: .rtf"
        assert session.original_text == ""

    def test_missing_document_reports_error(self, session, statuses, tmp_path):
        with pytest.raises(DocumentReadError):
            asyncio.run(session.load_document(DocumentRole.TRANSLATED, tmp_path / "gone.txt"))
        assert statuses[-1].kind is StatusKind.ERROR
        assert statuses[-1].message.startswith("Error loading translated text: Could not read gone.txt")

    def test_failed_load_keeps_previous_text(self, loaded_session, original_text, tmp_path):
        with pytest.raises(UnsupportedFormatError):
            asyncio.run(loaded_session.load_document(DocumentRole.ORIGINAL, tmp_path / "x.doc"))
        assert loaded_session.original_text == original_text
        assert len(loaded_session.table) == 4


class TestStart:
    def test_start_without_texts_raises(self, session, statuses):
        with pytest.raises(MissingInputError):
            session.start()
        assert not session.listening
        assert statuses[-1] == SessionStatus(
            "Please upload both original and translated texts first.", StatusKind.ERROR,
        )

    def test_start_with_empty_translation_raises(self, session, original_text):
        session.load_text(DocumentRole.ORIGINAL, original_text)
        session.load_text(DocumentRole.TRANSLATED, "")
        with pytest.raises(MissingInputError):
            session.start()
        assert not session.listening

    def test_whitespace_only_text_counts_as_missing(self, session, original_text):
        session.load_text(DocumentRole.ORIGINAL, original_text)
        session.load_text(DocumentRole.TRANSLATED, "   \n\t ")
        with pytest.raises(MissingInputError):
            session.start()

    def test_start_listens_with_unset_position(self, loaded_session):
        loaded_session.start()
        assert loaded_session.listening
        assert loaded_session.current_index is None
        assert loaded_session.current_subtitle is None

    def test_restart_resets_position(self, loaded_session):
        loaded_session.start()
        loaded_session.handle_event(TranscriptSnapshot("good evening everyone"))
        assert loaded_session.current_index == 0
        loaded_session.start()
        assert loaded_session.current_index is None

    def test_start_with_empty_table_still_listens(self, session, caplog):
        session.load_text(DocumentRole.ORIGINAL, "Tiny. Short.")
        session.load_text(DocumentRole.TRANSLATED, "Petit. Bref.")
        with caplog.at_level("WARNING", logger="live_subtitles.core.session"):
            session.start()
        assert session.listening
        assert "empty alignment table" in caplog.text


class TestStop:
    def test_stop_twice_does_not_raise(self, loaded_session):
        loaded_session.start()
        loaded_session.stop()
        loaded_session.stop()
        assert not loaded_session.listening

    def test_stop_before_start_does_not_raise(self, session):
        session.stop()
        assert not session.listening

    def test_snapshot_after_stop_is_ignored(self, loaded_session, recording_sink):
        loaded_session.start()
        loaded_session.stop()
        assert loaded_session.handle_event(TranscriptSnapshot("good evening everyone")) is None
        assert recording_sink.displayed == []


class TestHandleEvent:
    def test_snapshot_moves_position(self, loaded_session, recording_sink):
        loaded_session.start()
        change = loaded_session.handle_event(TranscriptSnapshot("thank you for coming tonight"))
        assert change.index == 1
        assert loaded_session.current_subtitle == "Merci d'être venus ce soir"
        assert recording_sink.displayed == ["Merci d'être venus ce soir"]

    def test_snapshot_while_idle_is_ignored(self, loaded_session, recording_sink):
        assert loaded_session.handle_event(TranscriptSnapshot("good evening everyone")) is None
        assert recording_sink.displayed == []

    def test_source_started_reports_listening(self, loaded_session, statuses):
        loaded_session.start()
        loaded_session.handle_event(SourceStarted())
        assert statuses[-1] == SessionStatus("Listening...")

    def test_source_started_while_idle_is_an_error(self, loaded_session, statuses):
        loaded_session.handle_event(SourceStarted())
        assert not loaded_session.listening
        assert statuses[-1] == SessionStatus(
            "Transcript source started while not listening", StatusKind.ERROR,
        )

    def test_source_ended_keeps_listening(self, loaded_session, statuses):
        loaded_session.start()
        loaded_session.handle_event(TranscriptSnapshot("good evening everyone"))
        loaded_session.handle_event(SourceEnded())
        assert loaded_session.listening
        assert loaded_session.current_index == 0
        assert statuses[-1] == SessionStatus("Stopped listening")

    def test_transport_error_keeps_listening(self, loaded_session, statuses):
        loaded_session.start()
        loaded_session.handle_event(TransportError("network"))
        assert loaded_session.listening
        assert statuses[-1] == SessionStatus("Speech recognition error: network", StatusKind.ERROR)

    def test_source_failed_stops(self, loaded_session, statuses):
        loaded_session.start()
        loaded_session.handle_event(SourceFailed(TranscriptSourceError("not-allowed")))
        assert not loaded_session.listening
        assert statuses[-1] == SessionStatus("Speech recognition error: not-allowed", StatusKind.ERROR)
        assert loaded_session.last_status is statuses[-1]

    def test_works_without_status_callback(self, original_text, translated_text):
        session = SubtitleSession()
        session.load_text(DocumentRole.ORIGINAL, original_text)
        session.load_text(DocumentRole.TRANSLATED, translated_text)
        session.start()
        session.handle_event(SourceEnded())
        assert session.last_status == SessionStatus("Stopped listening")
class TestConsume:
    """consume() drains a feed in publish order."""

    @staticmethod
    def _consume(session, events):
        async def go():
            feed = TranscriptFeed()
            for event in events:
                feed.publish(event)
            feed.close()
            return await session.consume(feed)

        return asyncio.run(go())

    def test_counts_position_changes(self, loaded_session, recording_sink):
        loaded_session.start()
        changes = self._consume(loaded_session, [
            SourceStarted(),
            TranscriptSnapshot("good evening"),
            TranscriptSnapshot("good evening everyone"),
            TranscriptSnapshot("good evening everyone thank"),
            TranscriptSnapshot("thank you for coming tonight"),
            TranscriptSnapshot("thank you for coming tonight"),
        ])
        assert changes == 2
        assert recording_sink.displayed == ["Bonsoir à tous", "Merci d'être venus ce soir"]

    def test_recognizer_restart_keeps_tracking(self, loaded_session, recording_sink):
        loaded_session.start()
        changes = self._consume(loaded_session, [
            SourceStarted(),
            TranscriptSnapshot("good evening everyone"),
            SourceEnded(),
            SourceStarted(),
            TranscriptSnapshot("thank you for coming tonight"),
        ])
        assert changes == 2
        assert loaded_session.listening
        assert recording_sink.displayed == ["Bonsoir à tous", "Merci d'être venus ce soir"]
