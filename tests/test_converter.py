from __future__ import annotations

import textwrap

import pytest

from md_to_bbcode.config import ConfigError, ConverterConfig
from md_to_bbcode.converter import Converter, convert_markdown
from md_to_bbcode.exceptions import (
    ContractViolationError,
    TableShapeError,
    UnsupportedEventError,
)
from md_to_bbcode.models import (
    Alignment,
    End,
    FootnoteReference,
    Rule,
    Start,
    Tag,
    TagKind,
    TaskListMarker,
    Text,
)


def test_converts_full_document(converter):
    source = textwrap.dedent(
        """\
        # Test Header

        ## Subheader

        *Hello* **world**!

        Goodbye.

        - hello
        - world

        [godot](godotengine.org 'blah')

        <https://godotengine.org>

        New paragraph
        with text on the next line but same paragraph.

        | first | second | third |
        | --- | --- | --- |
        | hello | world | |
        """
    )

    assert converter.convert(source) == textwrap.dedent(
        """\
        [font_size=36]Test Header[/font_size]

        [font_size=24]Subheader[/font_size]

        [i]Hello[/i] [b]world[/b]!

        Goodbye.

        [ul]
        hello
        world
        [/ul]

        [hint=blah][url=godotengine.org]godot[/url][/hint]

        [url]https://godotengine.org[/url]

        New paragraph with text on the next line but same paragraph.

        [table=3]
        [cell]first[/cell][cell]second[/cell][cell]third[/cell]
        [cell]hello[/cell][cell]world[/cell][cell][/cell]
        [/table]
        """
    )


def test_header_ends_with_single_newline(converter):
    assert converter.convert("# Hello World") == "[font_size=36]Hello World[/font_size]\n"


@pytest.mark.parametrize(
    ("level", "size"),
    [(1, 36), (2, 24), (3, 18), (4, 12), (5, 10), (6, 8)],
)
def test_heading_levels_map_to_font_sizes(converter, level, size):
    assert converter.convert(f"{'#' * level} Title") == f"[font_size={size}]Title[/font_size]\n"


def test_setext_heading(converter):
    assert converter.convert("Title\n-----") == "[font_size=24]Title[/font_size]\n"


def test_custom_heading_sizes():
    config = ConverterConfig(heading_sizes=(40, 30, 20, 16, 12, 10))
    assert convert_markdown("### Three", config) == "[font_size=20]Three[/font_size]\n"


@pytest.mark.parametrize(
    "heading_sizes",
    ["40,30,20,16,12,10", [40, 30, 20, 16, 12, 10]],
)
def test_heading_sizes_from_string_or_list(heading_sizes):
    converter = Converter(ConverterConfig(heading_sizes=heading_sizes))

    assert converter.config.heading_sizes == (40, 30, 20, 16, 12, 10)
    assert converter.convert("# a\n\n## b") == (
        "[font_size=40]a[/font_size]\n\n[font_size=30]b[/font_size]\n"
    )

def test_inline_formatting(converter):
    assert converter.convert("*a* **b** ~~c~~") == "[i]a[/i] [b]b[/b] [s]c[/s]\n"


def test_nested_inline_formatting(converter):
    assert converter.convert("**bold *both***") == "[b]bold [i]both[/i][/b]\n"


def test_soft_break_collapses_to_space(converter):
    assert converter.convert("first\nsecond") == "first second\n"


def test_hard_break_produces_blank_line(converter):
    assert converter.convert("first  \nsecond") == "first\n\nsecond\n"
    assert converter.convert("first\\\nsecond") == "first\n\nsecond\n"


def test_paragraphs_are_separated_by_blank_line(converter):
    assert converter.convert("one\n\ntwo") == "one\n\ntwo\n"


def test_unordered_list(converter):
    assert converter.convert("- a\n- b") == "[ul]\na\nb\n[/ul]\n"


def test_ordered_list(converter):
    assert converter.convert("3. a\n4. b") == "[ol type=1]\na\nb\n[/ol]\n"


def test_ordered_list_type_is_configurable():
    config = ConverterConfig(ordered_list_type="i")
    assert convert_markdown("1. a", config) == "[ol type=i]\na\n[/ol]\n"


def test_nested_list(converter):
    assert converter.convert("- a\n  - b") == "[ul]\na[ul]\nb\n[/ul]\n\n\n[/ul]\n"


def test_block_quote(converter):
    assert converter.convert("> quoted") == "> quoted\n"


def test_block_quote_prefix_is_configurable():
    assert convert_markdown("> quoted", ConverterConfig(quote_prefix="| ")) == "| quoted\n"


def test_fenced_code_block(converter):
    assert converter.convert("```python\nprint(1)\n```") == "[code]print(1)\n[/code]"


def test_indented_code_block(converter):
    assert converter.convert("    x = 1\n") == "[code]x = 1\n[/code]"


def test_inline_code_and_html_pass_through(converter):
    assert converter.convert("Use `x` <br> here") == "Use x <br> here\n"


def test_html_block_passes_through(converter):
    assert converter.convert("<div>hi</div>\n") == "<div>hi</div>\n"


def test_link_with_title(converter):
    assert (
        converter.convert('[text](https://example.com "Title")')
        == "[hint=Title][url=https://example.com]text[/url][/hint]\n"
    )


def test_link_without_title(converter):
    assert converter.convert("[text](https://example.com)") == "[url=https://example.com]text[/url]\n"


def test_reference_link_renders_as_inline_link(converter):
    source = "[text][ref]\n\n[ref]: https://example.com"
    assert converter.convert(source) == "[url=https://example.com]text[/url]\n"


def test_email_autolink(converter):
    assert converter.convert("<user@example.com>") == "[url]user@example.com[/url]\n"


def test_image_without_title_drops_alt_text(converter):
    assert converter.convert("![alt text](pic.png)") == "[img]pic.png[/img]\n"


def test_image_with_title(converter):
    assert (
        converter.convert('![alt](pic.png "Caption")')
        == "[hint=Caption][img]pic.png[/img][/hint]\n"
    )


def test_image_inside_link(converter):
    assert (
        converter.convert("[![alt](pic.png)](https://example.com)")
        == "[url=https://example.com][img]pic.png[/img][/url]\n"
    )


def test_rule_uses_default_markup(converter):
    assert converter.convert("a\n\n---\n\nb") == "a\n\n[center]* * *[/center]\n\nb\n"


def test_rule_can_be_dropped():
    assert convert_markdown("a\n\n---\n\nb", ConverterConfig(rule_markup="")) == "a\n\nb\n"


def test_trailing_rule_ends_with_single_newline(converter):
    assert converter.convert("***") == "[center]* * *[/center]\n"


def test_empty_input(converter):
    assert converter.convert("") == ""


def test_table_with_inline_formatting_stays_in_cells(converter):
    source = "| *a* | `b` |\n| - | - |\n| [c](d) | e |"
    assert converter.convert(source) == (
        "[table=2]\n"
        "[cell][i]a[/i][/cell][cell]b[/cell]\n"
        "[cell][url=d]c[/url][/cell][cell]e[/cell]\n"
        "[/table]\n"
    )


def test_table_after_paragraph(converter):
    source = "Intro\n\n| a | b |\n| - | - |"
    assert converter.convert(source) == (
        "Intro\n\n[table=2]\n[cell]a[/cell][cell]b[/cell]\n[/table]\n"
    )


def test_table_pads_missing_cells(converter):
    source = "| a | b | c |\n| - | - | - |\n| hello |"
    assert converter.convert(source) == (
        "[table=3]\n"
        "[cell]a[/cell][cell]b[/cell][cell]c[/cell]\n"
        "[cell]hello[/cell][cell][/cell][cell][/cell]\n"
        "[/table]\n"
    )


def test_sequential_calls_do_not_leak(converter):
    converter.convert("# First\n\n| a | b |\n| - | - |\n| c | d |")
    assert converter.convert("second") == "second\n"


def test_converter_recovers_after_contract_violation(converter):
    with pytest.raises(UnsupportedEventError):
        converter.convert_events([Text("partial"), FootnoteReference("1")])

    assert converter.convert("after") == "after\n"


def test_invalid_config_is_rejected():
    with pytest.raises(ConfigError):
        Converter(ConverterConfig(heading_sizes=(1, 2, 3)))


def _table(columns: int) -> Tag:
    return Tag(TagKind.TABLE, alignments=(Alignment.NONE,) * columns)


def _cell(text: str) -> list:
    cell = Tag(TagKind.TABLE_CELL)
    return [Start(cell), Text(text), End(cell)]


def test_convert_events_builds_table():
    head = Tag(TagKind.TABLE_HEAD)
    events = [Start(_table(2)), Start(head), *_cell("a"), *_cell("b"), End(head), End(_table(0))]

    assert Converter().convert_events(events) == (
        "[table=2]\n[cell]a[/cell][cell]b[/cell]\n[/table]\n"
    )


def test_convert_events_rejects_short_row():
    head = Tag(TagKind.TABLE_HEAD)
    events = [Start(_table(2)), Start(head), *_cell("a"), End(head), End(_table(0))]

    with pytest.raises(TableShapeError) as excinfo:
        Converter().convert_events(events)

    assert excinfo.value.row_index == 0
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 1


def test_convert_events_rejects_nested_table():
    with pytest.raises(ContractViolationError):
        Converter().convert_events([Start(_table(1)), Start(_table(1))])


@pytest.mark.parametrize("kind", [TagKind.TABLE, TagKind.TABLE_ROW, TagKind.TABLE_CELL])
def test_convert_events_rejects_table_parts_outside_table(kind):
    with pytest.raises(ContractViolationError):
        Converter().convert_events([End(Tag(kind))])


def test_convert_events_discards_unclosed_table():
    converter = Converter()
    assert converter.convert_events([Text("kept"), Start(_table(1)), *_cell("lost")]) == "kept"
    assert converter.convert_events([Text("next")]) == "next"


@pytest.mark.parametrize(
    "event",
    [
        FootnoteReference("note"),
        TaskListMarker(True),
        Start(Tag(TagKind.FOOTNOTE_DEFINITION)),
        End(Tag(TagKind.FOOTNOTE_DEFINITION)),
    ],
)
def test_convert_events_rejects_disabled_features(event):
    with pytest.raises(UnsupportedEventError):
        Converter().convert_events([event])


def test_convert_events_emits_rule_markup():
    config = ConverterConfig(rule_markup="[hr]")
    assert Converter(config).convert_events([Rule()]) == "[hr]\n"
