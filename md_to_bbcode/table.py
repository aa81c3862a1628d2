"""Accumulates table cells and renders them as one BBCode block."""

from __future__ import annotations

import logging

from .exceptions import TableShapeError

logger = logging.getLogger(__name__)


class TableBuilder:
    """Collect the cells of a single table and render them on close.

    The column count is fixed when the table opens. Cells are gathered into a
    row in progress, and each finished row must have exactly that many cells.

    Attributes:
        column_count: Number of columns declared by the table header.
        rows: Completed rows, each a list of rendered cell strings.

    Examples:
        builder = TableBuilder(2)
        builder.push_cell_text("a")
        builder.finish_cell()
        builder.finish_cell()
        builder.finish_row()
        builder.render()  # "[table=2]\\n[cell]a[/cell][cell][/cell]\\n[/table]\\n"
    """

    def __init__(self, column_count: int):
        self.column_count = column_count
        self.rows: list[list[str]] = []
        self._row: list[str] = []
        self._cell: list[str] | None = None

    def push_cell_text(self, text: str) -> None:
        """Append text to the pending cell.

        Successive calls before `finish_cell` concatenate, so a cell holding
        several inline runs (``a *b* c``) keeps all of them.
        """
        if self._cell is None:
            self._cell = []
        self._cell.append(text)

    def finish_cell(self) -> None:
        """Move the pending cell into the current row; an empty cell becomes ``""``."""
        self._row.append("".join(self._cell) if self._cell is not None else "")
        self._cell = None

    def finish_row(self) -> None:
        """Move the current row into the completed rows.

        Raises:
            TableShapeError: If the row does not hold exactly `column_count` cells.
        """
        if len(self._row) != self.column_count:
            raise TableShapeError(len(self.rows), self.column_count, len(self._row))
        self.rows.append(self._row)
        self._row = []

    def render(self) -> str:
        """Render the collected rows.

        Returns:
            str: ``[table=N]`` on its own line, one line of ``[cell]...[/cell]``
                groups per row, then ``[/table]`` and a newline.
        """
        lines = [f"[table={self.column_count}]\n"]
        for row in self.rows:
            lines.append("".join(f"[cell]{cell}[/cell]" for cell in row) + "\n")
        lines.append("[/table]\n")
        logger.debug("Rendered table with %d columns and %d rows", self.column_count, len(self.rows))
        return "".join(lines)
