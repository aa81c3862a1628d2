"""Constants used across the md-to-bbcode package."""

from __future__ import annotations

from .config import ConverterConfig

DEFAULT_CONFIG = ConverterConfig()

HEADING_FONT_SIZES = DEFAULT_CONFIG.heading_sizes
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Whitespace fragments
SOFT_BREAK = " "
HARD_BREAK = "\n\n"
BLOCK_END = "\n\n"
LINE_END = "\n"

# Returned by the host binding when a conversion fails
PARSE_ERROR_SENTINEL = "parsing error"

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn", ".mdwn")
