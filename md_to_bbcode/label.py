"""Host-side helpers for displaying converted Markdown in a rich-text label.

These mirror what a UI binding needs: a parser that never raises, and a label
object that keeps the Markdown source and its rendered markup in sync.
"""

from __future__ import annotations

import logging

from .config import ConverterConfig
from .constants import PARSE_ERROR_SENTINEL
from .converter import Converter
from .exceptions import ConversionError

logger = logging.getLogger(__name__)


class BBCodeParser:
    """Convert Markdown for a host that expects a string back in every case.

    Args:
        config: Markup settings; defaults to a new `ConverterConfig`.

    Examples:
        BBCodeParser().parse("*hi*")  # "[i]hi[/i]"
    """

    def __init__(self, config: ConverterConfig | None = None):
        self._converter = Converter(config)

    def parse(self, text: str) -> str:
        """Return the markup for `text`, or `PARSE_ERROR_SENTINEL` on failure."""
        try:
            return self._converter.convert(text)
        except ConversionError:
            logger.error("Failed to convert Markdown", exc_info=True)
            return PARSE_ERROR_SENTINEL


class MarkdownLabel:
    """A rich-text label whose content is driven by Markdown source.

    Setting `markdown` re-renders the whole document into `text`. `append`
    converts only the new fragment and extends both the source and the
    rendered markup, leaving earlier output untouched.

    Attributes:
        text: Rendered markup currently displayed.
        use_bbcode: Always True; the label interprets `text` as BBCode.

    Args:
        markdown: Initial Markdown source.
        config: Markup settings; defaults to a new `ConverterConfig`.

    Examples:
        label = MarkdownLabel("# Title")
        label.append("\\n\\nMore *text*")
        label.text  # "[font_size=36]Title[/font_size]\\n[i]..."
    """

    def __init__(self, markdown: str = "", config: ConverterConfig | None = None):
        self._converter = Converter(config)
        self._markdown = ""
        self.text = ""
        self.use_bbcode = True
        self.markdown = markdown

    @property
    def markdown(self) -> str:
        return self._markdown

    @markdown.setter
    def markdown(self, markdown: str) -> None:
        self._markdown = markdown
        self.refresh()

    def append(self, text: str) -> None:
        """Convert `text` and append it to the source and the rendered markup.

        On conversion failure the error is logged and the label is unchanged.
        """
        try:
            rendered = self._converter.convert(text)
        except ConversionError as error:
            logger.error("Failed to append Markdown: %s", error)
            return
        self._markdown = f"{self._markdown}{text}"
        self.text = f"{self.text}{rendered}"

    def refresh(self) -> None:
        """Re-render `markdown` into `text`; the previous text is kept on failure."""
        try:
            self.text = self._converter.convert(self._markdown)
        except ConversionError as error:
            logger.error("Failed to render Markdown: %s", error)
