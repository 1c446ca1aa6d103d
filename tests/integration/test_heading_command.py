"""CLI tests for the `heading` command."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from formatcleaner.cli import app


def test_heading_rewrites_text_option() -> None:
    """`--text` should print the rewritten heading."""

    result = CliRunner().invoke(app, ["heading", "--text", "## Old", "--level", "3"])

    assert result.exit_code == 0, result.output
    assert "### Old" in result.output


def test_heading_rewrites_document_line_in_place(tmp_path: Path) -> None:
    """A document line should be rewritten without touching other lines."""

    source = tmp_path / "note.md"
    source.write_text("intro\n### Section\nbody", encoding="utf-8")

    result = CliRunner().invoke(
        app, ["heading", str(source), "--line", "2", "--level", "1", "--in-place"]
    )

    assert result.exit_code == 0, result.output
    assert source.read_text(encoding="utf-8") == "intro\n# Section\nbody"


def test_heading_rejects_line_beyond_document(tmp_path: Path) -> None:
    """Out-of-range lines should fail at the select stage."""

    source = tmp_path / "note.md"
    source.write_text("one line", encoding="utf-8")

    result = CliRunner().invoke(app, ["heading", str(source), "--line", "5"])

    assert result.exit_code == 1
    assert "heading failed at stage `select`" in result.output


def test_heading_requires_line_or_text() -> None:
    """Missing inputs should produce a stage error with a hint."""

    result = CliRunner().invoke(app, ["heading"])

    assert result.exit_code == 1
    assert "heading failed at stage `select`" in result.output
    assert "Hint:" in result.output


def test_heading_in_place_keeps_crlf_line_endings(tmp_path: Path) -> None:
    """Rewriting one line should leave every CRLF ending in the file intact."""

    source = tmp_path / "note.md"
    source.write_bytes(b"Title\r\nbody one\r\nbody two\r\n")

    result = CliRunner().invoke(
        app, ["heading", str(source), "--line", "1", "--level", "2", "--in-place"]
    )

    assert result.exit_code == 0, result.output
    assert source.read_bytes() == b"## Title\r\nbody one\r\nbody two\r\n"
