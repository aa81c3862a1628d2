"""
Converts a Markdown file to BBCode markup for rich-text labels.
The markup is printed to stdout, or written to a file with --output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from .config import ORDERED_LIST_TYPES, ConfigError, build_config
from .converter import Converter, ConvertFileError, convert_file
from .exceptions import ConversionError
from .filesystem import get_max_file_size, normalize_filepath, write_output

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="md-to-bbcode")
@click.option("--heading-sizes", help="Comma-separated font sizes for heading levels 1-6")
@click.option("--quote-prefix", help="Text emitted at the start of a block quote")
@click.option("--rule-markup", help="Markup emitted for a thematic break (empty to drop them)")
@click.option(
    "--ordered-list-type",
    type=click.Choice(ORDERED_LIST_TYPES),
    help="Numbering style for ordered lists",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the markup to this file instead of stdout",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def cli(
    filepath: str,
    heading_sizes: str | None = None,
    quote_prefix: str | None = None,
    rule_markup: str | None = None,
    ordered_list_type: str | None = None,
    output: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting Markdown to BBCode markup.

    Args:
        filepath: Path to the Markdown file to convert, or ``-`` for stdin.
        heading_sizes: Override for the heading font sizes (``"36,24,18,12,10,8"``).
        quote_prefix: Override for the block quote prefix.
        rule_markup: Override for the thematic break markup.
        ordered_list_type: Override for the ordered list numbering style.
        output: Destination file; stdout when omitted.
        verbose: Whether to log debug messages to stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If reading, converting, or writing fails.

    Examples:
        md-to-bbcode README.md --heading-sizes 40,30,22,16,12,10 -o README.bbcode
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    from_stdin = filepath == "-"
    if not from_stdin:
        try:
            filepath = normalize_filepath(filepath, base_dir)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            base_dir if from_stdin else filepath.parent,
            heading_sizes=heading_sizes,
            quote_prefix=quote_prefix,
            rule_markup=rule_markup,
            ordered_list_type=ordered_list_type,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    if from_stdin:
        try:
            markup = Converter(config).convert(sys.stdin.read())
        except ConversionError as error:
            raise click.ClickException(str(error)) from error
    else:
        try:
            markup = convert_file(filepath, config, max_file_size)
        except ConvertFileError as error:
            raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(markup, nl=False)
        return

    try:
        write_output(Path(output), markup)
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
