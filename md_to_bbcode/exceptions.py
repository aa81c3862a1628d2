"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    Represents errors encountered while turning Markdown into BBCode markup.
    """


class ContractViolationError(ConversionError):
    """Raised when the event stream breaks the converter's contract.

    Covers table events arriving outside a table and tables opened inside
    another table. These indicate a bug in the event source, not bad input.
    """


class UnsupportedEventError(ContractViolationError):
    """Raised when the event source emits an event that is never enabled.

    Args:
        event_name: Name of the offending event or token type.
    """

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Unsupported event {event_name!r}; the parser should never emit it")


class TableShapeError(ContractViolationError):
    """Raised when a table row does not match the table's column count.

    Args:
        row_index: Zero-based index of the offending row (the header is row 0).
        expected: Column count declared when the table was opened.
        actual: Number of cells collected for the row.
    """

    def __init__(self, row_index: int, expected: int, actual: int):
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Table row {self.row_index} has {self.actual} cells "
            f"but the table declares {self.expected} columns"
        )
