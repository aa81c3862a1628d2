"""Markdown to BBCode conversion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from markdown_it import MarkdownIt

from .config import ConfigError, ConverterConfig, normalize_config, validate_config
from .constants import BLOCK_END, HARD_BREAK, LINE_END, SOFT_BREAK
from .events import build_parser, iter_events
from .exceptions import ContractViolationError, ConversionError, UnsupportedEventError
from .filesystem import collect_file_stat, enforce_file_size, safe_read
from .models import (
    Code,
    ConverterContext,
    ConverterMode,
    End,
    FootnoteReference,
    HardBreak,
    Html,
    LinkType,
    ParseEvent,
    Rule,
    SoftBreak,
    Start,
    Tag,
    TagKind,
    TaskListMarker,
    Text,
)
from .table import TableBuilder

logger = logging.getLogger(__name__)

TagMarkup = Callable[[Tag, ConverterConfig], "str | None"]


def _heading_open(tag: Tag, config: ConverterConfig) -> str:
    return f"[font_size={config.heading_sizes[tag.level - 1]}]"


def _list_open(tag: Tag, config: ConverterConfig) -> str:
    if tag.ordered:
        return f"[ol type={config.ordered_list_type}]\n"
    return "[ul]\n"


def _list_close(tag: Tag, config: ConverterConfig) -> str:
    return "[/ol]\n\n" if tag.ordered else "[/ul]\n\n"


def _link_open(tag: Tag, config: ConverterConfig) -> str:
    if tag.link_type is not LinkType.INLINE:
        return "[url]"
    if tag.title:
        return f"[hint={tag.title}][url={tag.destination}]"
    return f"[url={tag.destination}]"


def _link_close(tag: Tag, config: ConverterConfig) -> str:
    return "[/url][/hint]" if tag.title else "[/url]"


def _image_open(tag: Tag, config: ConverterConfig) -> str:
    if tag.title:
        return f"[hint={tag.title}][img]{tag.destination}"
    return f"[img]{tag.destination}"


def _image_close(tag: Tag, config: ConverterConfig) -> str:
    return "[/img][/hint]" if tag.title else "[/img]"


def _fixed(markup: str | None) -> TagMarkup:
    return lambda tag, config: markup


def _footnote(tag: Tag, config: ConverterConfig) -> str:
    raise UnsupportedEventError("footnote definition")


# Pure tag -> markup tables. Table kinds are absent: they change converter
# state instead of emitting markup directly.
OPEN_MARKUP: dict[TagKind, TagMarkup] = {
    TagKind.PARAGRAPH: _fixed(None),
    TagKind.HEADING: _heading_open,
    TagKind.BLOCK_QUOTE: lambda tag, config: config.quote_prefix or None,
    TagKind.CODE_BLOCK: _fixed("[code]"),
    TagKind.LIST: _list_open,
    TagKind.ITEM: _fixed(None),
    TagKind.FOOTNOTE_DEFINITION: _footnote,
    TagKind.EMPHASIS: _fixed("[i]"),
    TagKind.STRONG: _fixed("[b]"),
    TagKind.STRIKETHROUGH: _fixed("[s]"),
    TagKind.LINK: _link_open,
    TagKind.IMAGE: _image_open,
}

CLOSE_MARKUP: dict[TagKind, TagMarkup] = {
    TagKind.PARAGRAPH: _fixed(BLOCK_END),
    TagKind.HEADING: _fixed("[/font_size]" + BLOCK_END),
    TagKind.BLOCK_QUOTE: _fixed(None),
    TagKind.CODE_BLOCK: _fixed("[/code]"),
    TagKind.LIST: _list_close,
    TagKind.ITEM: _fixed(LINE_END),
    TagKind.FOOTNOTE_DEFINITION: _footnote,
    TagKind.EMPHASIS: _fixed("[/i]"),
    TagKind.STRONG: _fixed("[/b]"),
    TagKind.STRIKETHROUGH: _fixed("[/s]"),
    TagKind.LINK: _link_close,
    TagKind.IMAGE: _image_close,
}


class Converter:
    """Translate Markdown, or a stream of parse events, into BBCode markup.

    A converter keeps its fragment buffer between calls and clears it at the
    start of each one, so an instance can be reused sequentially but must not
    be shared between threads.

    Args:
        config: Markup settings; defaults to a new `ConverterConfig`.
        parser: Markdown parser used by `convert`; defaults to `build_parser()`.

    Raises:
        ConfigError: If `config` fails validation.

    Examples:
        Converter().convert("# Hello World")  # "[font_size=36]Hello World[/font_size]\\n"
    """

    def __init__(self, config: ConverterConfig | None = None, parser: MarkdownIt | None = None):
        self.config = normalize_config(config or ConverterConfig())
        validate_config(self.config)
        self.parser = parser or build_parser()
        self._context = ConverterContext()

    def convert(self, markdown_text: str) -> str:
        """Convert Markdown text to BBCode markup.

        Args:
            markdown_text: Markdown source.

        Returns:
            str: Markup ending in at most one newline.

        Raises:
            ContractViolationError: If the parser emits events this converter is
                never meant to receive (footnotes, task lists) or a malformed
                table region.
        """
        return self.convert_events(iter_events(markdown_text, self.parser))

    def convert_events(self, events: Iterable[ParseEvent]) -> str:
        """Convert an already tokenized event stream to BBCode markup.

        Args:
            events: Well-nested parse events, consumed exactly once in order.

        Returns:
            str: Markup ending in at most one newline.

        Raises:
            ContractViolationError: If the stream contains unsupported events,
                table events outside a table, a nested table, or a table row
                whose cell count differs from the table's column count.
        """
        context = self._reset()
        logger.debug("Starting conversion")

        for event in events:
            self._dispatch(event)

        if context.table is not None:
            logger.warning("Discarding table left open at end of input")
            context.table = None

        fragments = context.fragments
        # End with a single newline
        if fragments and fragments[-1].endswith(BLOCK_END):
            fragments[-1] = fragments[-1][:-1]
        output = "".join(fragments)
        fragments.clear()

        logger.debug("Finished conversion (%d characters)", len(output))
        return output

    def _reset(self) -> ConverterContext:
        context = self._context
        context.table = None
        context.image_depth = 0
        context.fragments.clear()
        return context

    def _dispatch(self, event: ParseEvent) -> None:
        if isinstance(event, Start):
            self._handle_start(event.tag)
        elif isinstance(event, End):
            self._handle_end(event.tag)
        elif isinstance(event, (Text, Code, Html)):
            self._emit(event.text)
        elif isinstance(event, SoftBreak):
            self._emit(SOFT_BREAK)
        elif isinstance(event, HardBreak):
            self._emit(HARD_BREAK)
        elif isinstance(event, Rule):
            if self.config.rule_markup:
                self._emit(self.config.rule_markup + BLOCK_END)
        elif isinstance(event, FootnoteReference):
            raise UnsupportedEventError("footnote reference")
        elif isinstance(event, TaskListMarker):
            raise UnsupportedEventError("task list marker")
        else:
            raise UnsupportedEventError(type(event).__name__)

    def _emit(self, fragment: str) -> None:
        """Route a fragment to the pending table cell or the output sequence."""
        context = self._context
        if context.image_depth:
            return
        if context.mode is ConverterMode.IN_TABLE:
            context.table.push_cell_text(fragment)
        else:
            context.fragments.append(fragment)

    def _handle_start(self, tag: Tag) -> None:
        context = self._context
        if tag.kind is TagKind.TABLE:
            if context.mode is ConverterMode.IN_TABLE:
                raise ContractViolationError("Table opened inside another table")
            context.table = TableBuilder(len(tag.alignments))
            return
        if tag.kind in (TagKind.TABLE_HEAD, TagKind.TABLE_ROW, TagKind.TABLE_CELL):
            self._require_table(tag)
            return

        markup = OPEN_MARKUP[tag.kind](tag, self.config)
        if markup is not None:
            self._emit(markup)
        if tag.kind is TagKind.IMAGE:
            context.image_depth += 1

    def _handle_end(self, tag: Tag) -> None:
        context = self._context
        if tag.kind is TagKind.TABLE:
            table = self._require_table(tag)
            context.table = None
            self._emit(table.render())
            return
        if tag.kind in (TagKind.TABLE_HEAD, TagKind.TABLE_ROW):
            self._require_table(tag).finish_row()
            return
        if tag.kind is TagKind.TABLE_CELL:
            self._require_table(tag).finish_cell()
            return

        if tag.kind is TagKind.IMAGE:
            context.image_depth -= 1
        markup = CLOSE_MARKUP[tag.kind](tag, self.config)
        if markup is not None:
            self._emit(markup)

    def _require_table(self, tag: Tag) -> TableBuilder:
        context = self._context
        if context.mode is not ConverterMode.IN_TABLE:
            raise ContractViolationError(f"{tag.kind.name} event outside of a table")
        return context.table


def convert_markdown(markdown_text: str, config: ConverterConfig | None = None) -> str:
    """Convert Markdown text to BBCode markup with a fresh converter.

    Args:
        markdown_text: Markdown source.
        config: Markup settings; defaults to a new `ConverterConfig`.

    Returns:
        str: Converted markup.

    Raises:
        ConfigError: If the configuration fails validation.
        ContractViolationError: If the parser emits events the converter
            rejects.

    Examples:
        convert_markdown("**bold** and ~~gone~~")
    """
    return Converter(config).convert(markdown_text)


class ConvertFileError(Exception):
    """Raised when converting a Markdown file fails."""


def convert_file(
    filepath: Path, config: ConverterConfig | None = None, max_file_size: int | None = None
) -> str:
    """Read a Markdown file and convert it to BBCode markup.

    Args:
        filepath: Path to the Markdown file.
        config: Markup settings; defaults to a new `ConverterConfig`.
        max_file_size: Optional override for the maximum file size in bytes.

    Returns:
        str: Converted markup.

    Raises:
        ConvertFileError: If configuration is invalid, the file is too large,
            cannot be read or decoded, or conversion fails.

    Examples:
        markup = convert_file(Path("README.md"))
    """
    try:
        config = normalize_config(config or ConverterConfig())
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    effective_max_file_size = config.max_file_size if max_file_size is None else max_file_size
    if effective_max_file_size <= 0:
        raise ConvertFileError("`max_file_size` override must be a positive integer")

    try:
        enforce_file_size(collect_file_stat(filepath), effective_max_file_size, filepath)
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    try:
        return Converter(config).convert(content)
    except ConversionError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error
