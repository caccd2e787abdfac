"""Tests for the command-line interface.

WHY: The CLI is how psalters are re-pointed in practice. It must write
the expected files, never clobber earlier output by accident, and fail
with a clear message and exit status 1 on bad input.

HOW: main() is called with an explicit argv list; files live in tmp_path
and status output is captured with capsys.
"""

import json
import logging

import pytest

from chant_pointer import cli
from chant_pointer.cli import _resolve_log_level, _resolve_output_path, build_parser, main
from chant_pointer.psalms import validate_record


def _run(*args):
    main([str(a) for a in args])


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["psalms.json"])
        assert args.input_file == "psalms.json"
        assert args.formats is None
        assert args.overwrite is False
        assert args.verbose is False

    def test_short_flags(self):
        args = build_parser().parse_args(["psalms.json", "-t", "6C", "-o", "out"])
        assert args.tone == "6C"
        assert args.output_dir == "out"


class TestOutputPath:

    def test_free_name(self, tmp_path):
        path = _resolve_output_path("psalms", ".annotated.json", tmp_path)
        assert path == tmp_path / "psalms.annotated.json"

    def test_conflict_gets_counter(self, tmp_path):
        (tmp_path / "psalms.annotated.json").write_text("{}", encoding="utf-8")
        (tmp_path / "psalms.annotated-2.json").write_text("{}", encoding="utf-8")
        path = _resolve_output_path("psalms", ".annotated.json", tmp_path)
        assert path == tmp_path / "psalms.annotated-3.json"

    def test_overwrite(self, tmp_path):
        (tmp_path / "psalms.annotated.json").write_text("{}", encoding="utf-8")
        path = _resolve_output_path("psalms", ".annotated.json", tmp_path, overwrite=True)
        assert path == tmp_path / "psalms.annotated.json"


class TestRun:

    def test_collection_written(self, collection_file, tmp_path):
        out_dir = tmp_path / "annotated"
        _run(collection_file, "--tone", "2", "--output-dir", out_dir)

        out_path = out_dir / "psalms.annotated.json"
        data = json.loads(out_path.read_text(encoding="utf-8"))
        validate_record(data, "annotatedCollection")
        assert data["psalms"][1]["annotated_text"].splitlines()[0] == (
            "Praise /the ^Lord, O my soul"
        )
        assert data["psalms"][0]["chant_tone"] == "2"

    def test_single_psalm_written(self, psalm_file, tmp_path):
        _run(psalm_file, "--tone", "8", "--output-dir", tmp_path)
        data = json.loads((tmp_path / "psalm_95.annotated.json").read_text(encoding="utf-8"))
        assert data["psalm_number"] == 95
        assert len(data["chant_annotations"]) == 2

    def test_multiple_formats(self, psalm_file, tmp_path):
        _run(psalm_file, "--tone", "2", "-o", tmp_path,
             "--formats", "annotated_json,pointed_text")
        text = (tmp_path / "psalm_95.pointed.txt").read_text(encoding="utf-8")
        assert "^O come, let us /sing unto the Lord;" in text
        assert (tmp_path / "psalm_95.annotated.json").is_file()

    def test_second_run_does_not_overwrite(self, psalm_file, tmp_path):
        _run(psalm_file, "--tone", "2", "-o", tmp_path)
        _run(psalm_file, "--tone", "2", "-o", tmp_path)
        assert (tmp_path / "psalm_95.annotated.json").is_file()
        assert (tmp_path / "psalm_95.annotated-2.json").is_file()

    def test_overwrite_flag(self, psalm_file, tmp_path):
        _run(psalm_file, "--tone", "2", "-o", tmp_path)
        _run(psalm_file, "--tone", "4", "-o", tmp_path, "--overwrite")
        data = json.loads((tmp_path / "psalm_95.annotated.json").read_text(encoding="utf-8"))
        assert data["chant_tone"] == "4"
        assert not (tmp_path / "psalm_95.annotated-2.json").exists()

    def test_status_on_stderr(self, psalm_file, tmp_path, capsys):
        _run(psalm_file, "--tone", "2", "-o", tmp_path)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Saved: psalm_95.annotated.json" in captured.err
        assert "1 psalm(s), 2 line(s)" in captured.err


class TestErrors:
    """Bad input prints "Error: ..." to stderr and exits with status 1."""

    def _expect_failure(self, capsys, *args):
        with pytest.raises(SystemExit) as exc_info:
            _run(*args)
        assert exc_info.value.code == 1
        return capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        err = self._expect_failure(capsys, tmp_path / "missing.json", "-o", tmp_path)
        assert "Error: File not found" in err

    def test_wrong_extension(self, tmp_path, capsys):
        path = tmp_path / "psalms.txt"
        path.write_text("O come", encoding="utf-8")
        err = self._expect_failure(capsys, path, "-o", tmp_path)
        assert "Unsupported file type '.txt'" in err

    def test_unknown_format(self, psalm_file, tmp_path, capsys):
        err = self._expect_failure(capsys, psalm_file, "-o", tmp_path, "--formats", "midi")
        assert "Unknown format 'midi'" in err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        err = self._expect_failure(capsys, path, "-o", tmp_path)
        assert "Invalid JSON in broken.json" in err

    def test_unrecognized_document(self, tmp_path, capsys):
        path = tmp_path / "te_deum.json"
        path.write_text(json.dumps({"title": "Te Deum"}), encoding="utf-8")
        err = self._expect_failure(capsys, path, "-o", tmp_path)
        assert "Unrecognized input format" in err

    def test_schema_violation(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"psalms": [{"text": "O come"}]}), encoding="utf-8")
        err = self._expect_failure(capsys, path, "-o", tmp_path)
        assert "Invalid psalm record in bad.json" in err


class TestLogLevel:
    """CHANT_POINTER_LOG_LEVEL never turns into a traceback."""

    def test_known_names(self):
        assert _resolve_log_level("INFO") == logging.INFO
        assert _resolve_log_level("debug") == logging.DEBUG

    def test_unknown_name_falls_back_to_warning(self, capsys):
        assert _resolve_log_level("LOUD") == logging.WARNING
        assert "unknown log level 'LOUD'" in capsys.readouterr().err

    def test_main_runs_with_unknown_level(self, psalm_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli, "LOG_LEVEL", "LOUD")
        _run(psalm_file, "-o", tmp_path / "out")
        assert (tmp_path / "out" / "psalm_95.annotated.json").exists()
        assert "Error:" not in capsys.readouterr().err
