from md_to_bbcode.models import (
    ConverterContext,
    ConverterMode,
    LinkType,
    Start,
    Tag,
    TagKind,
)
from md_to_bbcode.table import TableBuilder


def test_converter_mode_members():
    assert list(ConverterMode) == [ConverterMode.NORMAL, ConverterMode.IN_TABLE]


def test_converter_context_defaults():
    ctx = ConverterContext()

    assert ctx.mode is ConverterMode.NORMAL
    assert ctx.table is None
    assert ctx.image_depth == 0
    assert ctx.fragments == []


def test_converter_context_fragments_are_not_shared():
    first = ConverterContext()
    first.fragments.append("x")

    assert ConverterContext().fragments == []


def test_converter_context_custom_values():
    table = TableBuilder(2)
    ctx = ConverterContext(table=table, image_depth=1)

    assert ctx.table is table
    assert ctx.image_depth == 1


def test_converter_context_mode_follows_table():
    ctx = ConverterContext()

    ctx.table = TableBuilder(2)
    assert ctx.mode is ConverterMode.IN_TABLE

    ctx.table = None
    assert ctx.mode is ConverterMode.NORMAL


def test_tag_defaults():
    tag = Tag(TagKind.PARAGRAPH)

    assert tag.level == 0
    assert tag.ordered is False
    assert tag.start is None
    assert tag.link_type is LinkType.INLINE
    assert tag.destination == ""
    assert tag.title == ""
    assert tag.alignments == ()
    assert tag.info == ""


def test_events_compare_by_value():
    assert Start(Tag(TagKind.HEADING, level=1)) == Start(Tag(TagKind.HEADING, level=1))
    assert Start(Tag(TagKind.HEADING, level=1)) != Start(Tag(TagKind.HEADING, level=2))
