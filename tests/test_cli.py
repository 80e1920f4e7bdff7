"""Tests for the command-line interface.

WHY: The CLI is the rehearsal tool. Subtitles must land on stdout and
status on stderr, and bad input must exit with a clear message instead
of a traceback.

HOW: main() is called with an explicit argv built from tmp_path files.
Replays use --interval 0 so nothing sleeps. capsys separates stdout
from stderr.
"""

import pytest

from live_subtitles.cli import build_parser, main


@pytest.fixture
def documents(tmp_path, original_text, translated_text):
    original = tmp_path / "talk.txt"
    translated = tmp_path / "talk_fr.txt"
    original.write_text(original_text, encoding="utf-8")
    translated.write_text(translated_text, encoding="utf-8")
    return str(original), str(translated)


@pytest.fixture
def transcript_file(tmp_path):
    path = tmp_path / "transcript.txt"
    path.write_text(
        "good evening\n"
        "good evening everyone\n"
        "\n"
        "thank you for coming tonight\n"
        "thank you for coming tonight\n"
        "our story begins in a small village\n",
        encoding="utf-8",
    )
    return str(path)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["a.txt", "b.txt"])
        assert args.original == "a.txt"
        assert args.translated == "b.txt"
        assert args.sink == "console"
        assert args.transcript is None
        assert args.speech is None
        assert args.show_table is False

    def test_transcript_and_speech_are_exclusive(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["a.txt", "b.txt", "--transcript", "t.txt", "--speech", "s.txt"])
        assert exc_info.value.code == 2

    def test_unknown_sink_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.txt", "b.txt", "--sink", "projector"])


class TestReplay:
    def test_subtitles_on_stdout_status_on_stderr(self, documents, transcript_file, capsys):
        main([*documents, "--transcript", transcript_file, "--interval", "0"])
        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            "Bonsoir à tous",
            "Merci d'être venus ce soir",
            "Notre histoire commence dans un petit village",
        ]
        assert "Original text loaded: talk.txt" in captured.err
        assert "Aligned 4 segments (4 original, 4 translated)" in captured.err
        assert "Replaying 5 transcript snapshots to Console..." in captured.err
        assert "Listening..." in captured.err
        assert "Stopped listening" in captured.err
        assert "Done! 3 subtitle change(s)" in captured.err

    def test_cumulative_speech_stays_on_first_segment(self, documents, capsys):
        original, _ = documents
        main([*documents, "--speech", original, "--interval", "0"])
        captured = capsys.readouterr()
        # Every cumulative snapshot still contains the first sentence
        assert captured.out.splitlines() == ["Bonsoir à tous"]
        assert "Done! 1 subtitle change(s)" in captured.err

    def test_text_file_sink(self, documents, transcript_file, tmp_path, capsys):
        output = tmp_path / "subtitle.txt"
        main([
            *documents, "--transcript", transcript_file, "--interval", "0",
            "--sink", "text_file", "--output", str(output),
        ])
        assert output.read_text(encoding="utf-8") == "Notre histoire commence dans un petit village"
        assert capsys.readouterr().out == ""


class TestShowTable:
    def test_prints_tab_separated_table(self, documents, capsys):
        main([*documents, "--show-table"])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 4
        assert lines[0] == "0\tGood evening everyone\tBonsoir à tous"

    def test_truncation_reported(self, tmp_path, original_text, capsys):
        original = tmp_path / "talk.txt"
        translated = tmp_path / "short.txt"
        original.write_text(original_text, encoding="utf-8")
        translated.write_text("Bonsoir à tous.", encoding="utf-8")
        main([str(original), str(translated)])
        err = capsys.readouterr().err
        assert "Aligned 1 segments (4 original, 1 translated)" in err
        assert "Dropped 3 original and 0 translated trailing segments" in err


class TestErrors:
    def test_missing_document(self, tmp_path, documents, capsys):
        _, translated = documents
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.txt"), translated])
        assert exc_info.value.code == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_unsupported_document(self, tmp_path, documents, capsys):
        _, translated = documents
        original = tmp_path / "talk.rtf"
        original.write_text("Good evening everyone.", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(original), translated])
        assert exc_info.value.code == 1
        assert "Error: Error loading original text: Unsupported file type: .rtf" in capsys.readouterr().err

    def test_missing_translation_text(self, tmp_path, documents, transcript_file, capsys):
        original, _ = documents
        empty = tmp_path / "empty.txt"
        empty.write_text("   \n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([original, str(empty), "--transcript", transcript_file, "--interval", "0"])
        assert exc_info.value.code == 1
        assert "Please upload both original and translated texts first." in capsys.readouterr().err

    def test_text_file_sink_requires_output(self, documents, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([*documents, "--sink", "text_file"])
        assert exc_info.value.code == 1
        assert "--sink text_file requires --output" in capsys.readouterr().err

    def test_unreadable_transcript_file(self, tmp_path, documents, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([*documents, "--transcript", str(tmp_path / "missing.txt")])
        assert exc_info.value.code == 1
        assert "Cannot read transcript file" in capsys.readouterr().err
