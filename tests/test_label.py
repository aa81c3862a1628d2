from __future__ import annotations

import logging

from md_to_bbcode.config import ConverterConfig
from md_to_bbcode.constants import PARSE_ERROR_SENTINEL
from md_to_bbcode.exceptions import ContractViolationError
from md_to_bbcode.label import BBCodeParser, MarkdownLabel


def _failing_convert(text: str) -> str:
    raise ContractViolationError("broken event source")


def test_parser_returns_markup():
    assert BBCodeParser().parse("*hi*") == "[i]hi[/i]\n"


def test_parser_uses_config():
    parser = BBCodeParser(ConverterConfig(heading_sizes=(50, 40, 30, 20, 10, 5)))
    assert parser.parse("# Big") == "[font_size=50]Big[/font_size]\n"


def test_parser_returns_sentinel_on_failure(monkeypatch, caplog):
    parser = BBCodeParser()
    monkeypatch.setattr(parser._converter, "convert", _failing_convert)

    with caplog.at_level(logging.ERROR, logger="md_to_bbcode.label"):
        assert parser.parse("anything") == PARSE_ERROR_SENTINEL

    assert "Failed to convert Markdown" in caplog.text


def test_label_renders_initial_markdown():
    label = MarkdownLabel("# Title")

    assert label.use_bbcode is True
    assert label.markdown == "# Title"
    assert label.text == "[font_size=36]Title[/font_size]\n"


def test_label_defaults_to_empty():
    label = MarkdownLabel()

    assert label.markdown == ""
    assert label.text == ""


def test_setting_markdown_rerenders():
    label = MarkdownLabel("old")
    label.markdown = "**new**"

    assert label.text == "[b]new[/b]\n"


def test_append_extends_source_and_markup():
    label = MarkdownLabel("first")
    label.append("\n\n*second*")

    assert label.markdown == "first\n\n*second*"
    assert label.text == "first\n[i]second[/i]\n"


def test_append_failure_leaves_label_unchanged(monkeypatch, caplog):
    label = MarkdownLabel("kept")
    monkeypatch.setattr(label._converter, "convert", _failing_convert)

    with caplog.at_level(logging.ERROR, logger="md_to_bbcode.label"):
        label.append("lost")

    assert label.markdown == "kept"
    assert label.text == "kept\n"
    assert "broken event source" in caplog.text


def test_refresh_failure_keeps_previous_text(monkeypatch, caplog):
    label = MarkdownLabel("kept")
    monkeypatch.setattr(label._converter, "convert", _failing_convert)

    with caplog.at_level(logging.ERROR, logger="md_to_bbcode.label"):
        label.markdown = "replacement"

    assert label.markdown == "replacement"
    assert label.text == "kept\n"
    assert "Failed to render Markdown" in caplog.text
