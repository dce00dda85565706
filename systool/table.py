"""Box-drawn text tables."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO


def _width(cell: str) -> int:
    # Column widths are measured in UTF-8 bytes while padding counts characters,
    # so cells with non-ASCII text get extra padding.
    return len(cell.encode("utf-8"))


class Table:
    """A table with a fixed set of headers and rows added one at a time."""

    def __init__(self, headers: Iterable[str]) -> None:
        self.headers = list(headers)
        self.rows: list[list[str]] = []
        self.widths = [_width(header) for header in self.headers]

    def add_row(self, row: Iterable[str]) -> None:
        """Add a row, padding or cutting it to the number of headers."""
        cells = list(row)[: len(self.headers)]
        cells.extend([""] * (len(self.headers) - len(cells)))
        self.widths = [max(width, _width(cell)) for width, cell in zip(self.widths, cells)]
        self.rows.append(cells)

    def _line(self, cells: list[str]) -> str:
        body = "│".join(f" {cell.ljust(width)} " for cell, width in zip(cells, self.widths))
        return f"│{body}│\n"

    def render(self, writer: TextIO) -> None:
        """Write the table; a table without headers writes nothing."""
        if not self.headers:
            return
        rule = "─" * (sum(width + 3 for width in self.widths) - 3)
        writer.write(f"┌{rule}┐\n")
        writer.write(self._line(self.headers))
        writer.write(f"├{rule}┤\n")
        for row in self.rows:
            writer.write(self._line(row))
        writer.write(f"└{rule}┘\n")