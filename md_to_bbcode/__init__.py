"""
md-to-bbcode: Markdown to BBCode converter for rich-text labels.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-to-bbcode README.md

Library Usage:
    from md_to_bbcode import Converter

    converter = Converter()
    markup = converter.convert("# Title\\n\\nSome *emphasis*.")
"""

from .config import ConfigError, ConverterConfig
from .converter import Converter, ConvertFileError, convert_file, convert_markdown
from .events import build_parser, iter_events
from .exceptions import (
    ContractViolationError,
    ConversionError,
    TableShapeError,
    UnsupportedEventError,
)
from .label import BBCodeParser, MarkdownLabel
from .table import TableBuilder

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "Converter",
    "convert_markdown",
    "convert_file",
    "iter_events",
    "build_parser",
    "TableBuilder",
    # Host binding
    "BBCodeParser",
    "MarkdownLabel",
    # Configuration
    "ConverterConfig",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "ContractViolationError",
    "ConvertFileError",
    "TableShapeError",
    "UnsupportedEventError",
    # Version
    "__version__",
]
