"""Tests for the pngchunks command-line interface."""

import json
import logging
import subprocess
import sys

import pytest
import yaml

from pngchunks.__main__ import (
    EXIT_OK,
    EXIT_REJECTED,
    EXIT_USAGE,
    ReportFormat,
    format_reports,
    inspect_codes,
    main,
    parse_code,
)
from pngchunks.lib.chunk_type import ChunkType, RenderMode
from pngchunks.lib.config import ChunkSettings
from pngchunks.lib.errors import NonAlphabeticError, WrongLengthError


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch):
    """main() reconfigures the root logger; put it back afterwards."""
    for name in ("CHUNKS_RENDER_MODE", "CHUNKS_VERBOSE", "CHUNKS_LOG_JSON", "CHUNKS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestParseCode:
    """Tests for parse_code."""

    def test_text(self):
        assert parse_code("IHDR") == ChunkType.try_from_text("IHDR")

    def test_hex(self):
        assert parse_code("52755374", hex_input=True).raw_bytes == b"RuSt"

    def test_hex_validates(self):
        with pytest.raises(NonAlphabeticError):
            parse_code("52753174", hex_input=True)

    def test_hex_raw_skips_validation(self):
        assert parse_code("00ff4142", hex_input=True, raw=True).raw_bytes == b"\x00\xffAB"

    def test_hex_wrong_length(self):
        with pytest.raises(WrongLengthError):
            parse_code("5275", hex_input=True)

    def test_bad_hex(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            parse_code("zzzzzzzz", hex_input=True)


class TestFormatReports:
    """Tests for format_reports."""

    def test_text_table(self):
        reports = [ChunkType.try_from_text("RuSt").report()]
        output = format_reports(reports, ReportFormat.TEXT)
        lines = output.splitlines()
        assert lines[0].split() == ["code", "critical", "public", "reserved", "copy", "valid"]
        assert lines[2].split() == ["RuSt", "yes", "no", "yes", "yes", "yes"]

    def test_json(self):
        reports = [ChunkType.try_from_text("tEXt").report()]
        data = json.loads(format_reports(reports, ReportFormat.JSON))
        assert data[0]["code"] == "tEXt"
        assert data[0]["critical"] is False
        assert data[0]["safe_to_copy"] is True

    def test_yaml(self):
        reports = [ChunkType.try_from_text("IHDR").report()]
        data = yaml.safe_load(format_reports(reports, ReportFormat.YAML))
        assert data[0]["code"] == "IHDR"
        assert data[0]["valid"] is True


class TestInspectCodes:
    """Tests for inspect_codes."""

    def test_counts_rejections(self, caplog):
        with caplog.at_level(logging.ERROR):
            reports, rejected = inspect_codes(["RuSt", "Ru1t", "Ru"], ChunkSettings())

        assert [r.code for r in reports] == ["RuSt"]
        assert rejected == 2
        kinds = [r.chunk_error["kind"] for r in caplog.records if hasattr(r, "chunk_error")]
        assert kinds == ["non_alphabetic", "wrong_length"]

    def test_require_valid(self):
        reports, rejected = inspect_codes(["Rust", "RuSt"], ChunkSettings(), require_valid=True)
        assert [r.code for r in reports] == ["RuSt"]
        assert rejected == 1

    def test_without_require_valid_keeps_invalid(self):
        reports, rejected = inspect_codes(["Rust"], ChunkSettings())
        assert reports[0].valid is False
        assert rejected == 0

    def test_strict_render_rejects_raw_non_ascii(self):
        reports, rejected = inspect_codes(
            ["00ff4142"], ChunkSettings(), hex_input=True, raw=True
        )
        assert reports == []
        assert rejected == 1

    def test_escape_render_reports_raw_non_ascii(self):
        settings = ChunkSettings(render_mode=RenderMode.ESCAPE)
        reports, rejected = inspect_codes(["52ff5374"], settings, hex_input=True, raw=True)
        assert reports[0].code == "R\\xffSt"
        assert reports[0].alphabetic is False
        assert rejected == 0


class TestMain:
    """Tests for main()."""

    def test_accepts_codes(self, capsys):
        assert main(["IHDR", "tEXt"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "IHDR" in out
        assert "tEXt" in out

    def test_rejects_code(self, capsys):
        assert main(["IHDR", "Ru1t"]) == EXIT_REJECTED
        captured = capsys.readouterr()
        assert "IHDR" in captured.out
        assert "Ru1t" in captured.err

    def test_json_output(self, capsys):
        assert main(["RuSt", "--format", "json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data[0]["reserved_bit_valid"] is True

    def test_bad_format(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["RuSt", "--format", "xml"])
        assert exc_info.value.code == EXIT_USAGE

    def test_raw_requires_hex(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["RuSt", "--raw"])
        assert exc_info.value.code == EXIT_USAGE

    def test_bad_render_mode(self, capsys):
        assert main(["RuSt", "--render-mode", "shout"]) == EXIT_USAGE
        assert "render" in capsys.readouterr().err.lower()

    def test_bad_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("CHUNKS_LOG_JSON", "maybe")
        assert main(["RuSt"]) == EXIT_USAGE
        assert "CHUNKS_LOG_JSON" in capsys.readouterr().err

    def test_unopenable_log_file(self, tmp_path, capsys):
        log_file = tmp_path / "missing" / "chunks.log"
        assert main(["RuSt", "--log-file", str(log_file)]) == EXIT_USAGE
        assert "Cannot open log file" in capsys.readouterr().err

    def test_unopenable_log_file_from_environment(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("CHUNKS_LOG_FILE", str(tmp_path / "missing" / "chunks.log"))
        assert main(["RuSt"]) == EXIT_USAGE
        assert "Error:" in capsys.readouterr().err

    def test_undecodable_argument_is_rejected(self, capsys):
        assert main(["RuS\udcff"]) == EXIT_REJECTED

    def test_render_mode_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("CHUNKS_RENDER_MODE", "escape")
        assert main(["52ff5374", "--hex", "--raw", "--format", "json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data[0]["code"] == "R\\xffSt"

    def test_json_logs(self, capsys):
        assert main(["Ru1t", "--json-logs"]) == EXIT_REJECTED
        lines = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
        error = next(line for line in lines if line["level"] == "ERROR")
        assert error["extra"]["chunk_error"]["kind"] == "non_alphabetic"


class TestModuleInvocation:
    """Tests for python -m pngchunks."""

    def test_help_flag(self):
        result = subprocess.run(
            [sys.executable, "-m", "pngchunks", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_exit_status(self):
        result = subprocess.run(
            [sys.executable, "-m", "pngchunks", "RuSt", "Ru1t"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == EXIT_REJECTED
        assert "RuSt" in result.stdout
