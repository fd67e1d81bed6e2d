"""A grid of cells with header row and column, text rendering and binary storage."""

import struct
import sys

from gridcalc.cell import Cell
from gridcalc.config import Alignment
from gridcalc.position import Position

_MIN_WIDTH = 3
_CLEAR_SCREEN = "\033[2J\033[H"
_HEADER = struct.Struct("<??iQQQQQQQ")
_SIZE = struct.Struct("<Q")
_ALIGNMENT_CODES = {Alignment.LEFT: 0, Alignment.CENTER: 1, Alignment.RIGHT: 2}
_ALIGNMENTS = {code: alignment for alignment, code in _ALIGNMENT_CODES.items()}


def _read_string(stream):
    """Read one length-prefixed, NUL-terminated string; None when the data runs out."""
    prefix = stream.read(_SIZE.size)
    if len(prefix) < _SIZE.size:
        return None
    (length,) = _SIZE.unpack(prefix)
    data = stream.read(length + 1)
    if len(data) < length + 1:
        return None
    return data[:length].decode("utf-8", errors="replace")


class Table:
    """Cells indexed by letter row and numbered column.

    Row 0 holds the column numbers and column 0 the row letters; the sizes
    include that extra header row and column.
    """

    def __init__(self, config):
        self.auto_fit = config.auto_fit
        self.clear_console_after_command = config.clear_console_after_command
        self.alignment = config.alignment
        self.initial_rows = config.initial_table_rows + 1
        self.initial_cols = config.initial_table_cols + 1
        self.max_rows = config.max_table_rows + 1
        self.max_cols = config.max_table_cols + 1
        self.visible_cell_symbols = config.visible_cell_symbols
        self.current_rows = self.initial_rows
        self.current_cols = self.initial_cols
        self.cells = self._blank_cells()

        for row in range(1, self.max_rows):
            letters = str(Position(row, 1))[:-1]
            self.cells[row][0].assign(f'"{letters}"')
        for col in range(1, self.max_cols):
            self.cells[0][col].assign(str(col))

        self.current_rows = self.initial_rows
        self.current_cols = self.initial_cols

    def _blank_cells(self):
        return [
            [Cell(Position(row, col), self) for col in range(self.max_cols)]
            for row in range(self.max_rows)
        ]

    def cell_at(self, position):
        """Return the cell at ``position`` or None when it lies outside the table."""
        if not (0 <= position.row < self.max_rows and 0 <= position.col < self.max_cols):
            return None
        return self.cells[position.row][position.col]

    def column_widths(self):
        """Return the printed width of every visible column."""
        widths = []
        for col in range(self.current_cols):
            width = _MIN_WIDTH
            for row in range(self.current_rows):
                length = len(self.cells[row][col].display)
                if not self.auto_fit and self.visible_cell_symbols <= length:
                    width = self.visible_cell_symbols
                    continue
                width = max(width, length)
            widths.append(width)
        return widths

    def _border(self, widths):
        return "".join("|" + "-" * width for width in widths) + "|"

    def _row_line(self, widths, row):
        parts = []
        for col, width in enumerate(widths):
            display = self.cells[row][col].display
            if width < len(display):
                parts.append("|" + display[:width])
                continue

            spare = width - len(display)
            if self.alignment is Alignment.CENTER or row == 0 or col == 0:
                half = " " * (spare // 2)
                extra = " " if spare % 2 == 1 else ""
                text = half + extra + display + half
            elif self.alignment is Alignment.RIGHT:
                text = " " * spare + display
            else:
                text = display + " " * spare
            parts.append("|" + text)
        return "".join(parts) + "|"

    def render(self):
        """Return the visible part of the table as bordered text lines."""
        widths = self.column_widths()
        border = self._border(widths)
        lines = []
        for row in range(self.current_rows):
            lines.append(border)
            lines.append(self._row_line(widths, row))
        lines.append(border)
        return "".join(line + "\n" for line in lines)

    def show(self, out=None):
        """Write the table to ``out``, clearing the screen first if configured."""
        out = sys.stdout if out is None else out
        if self.clear_console_after_command:
            out.write(_CLEAR_SCREEN)
        out.write(self.render())

    def track_position(self, position):
        """Grow the visible area so that ``position`` is shown."""
        if position.row > self.max_rows or position.col > self.max_cols:
            return
        self.current_rows = max(self.current_rows, position.row + 1)
        self.current_cols = max(self.current_cols, position.col + 1)

    def dump(self, stream):
        """Write the settings and every cell's raw content to a binary stream."""
        stream.write(
            _HEADER.pack(
                self.auto_fit,
                self.clear_console_after_command,
                _ALIGNMENT_CODES[self.alignment],
                self.visible_cell_symbols,
                self.initial_rows,
                self.initial_cols,
                self.current_rows,
                self.current_cols,
                self.max_rows,
                self.max_cols,
            )
        )
        for row in self.cells:
            for cell in row:
                data = cell.raw_content.encode("utf-8")
                stream.write(_SIZE.pack(len(data)) + data + b"\0")

    def load(self, stream):
        """Replace the cells with those stored in a binary stream.

        The table keeps its own settings and size; cells that do not fit are
        skipped and missing ones stay empty.  Raises ValueError when the
        header is incomplete.
        """
        header = stream.read(_HEADER.size)
        if len(header) < _HEADER.size:
            raise ValueError("truncated table header")
        fields = _HEADER.unpack(header)
        if fields[2] not in _ALIGNMENTS:
            raise ValueError(f"unknown alignment code: {fields[2]}")
        stored_rows, stored_cols, _, stored_max_cols = fields[6:10]

        active_rows, active_cols = self.current_rows, self.current_cols
        self.cells = self._blank_cells()

        exhausted = False
        for row in range(self.max_rows):
            for col in range(stored_max_cols):
                raw = _read_string(stream)
                if raw is None:
                    exhausted = True
                    break
                if col < self.max_cols:
                    self.cells[row][col].assign(raw)
            if exhausted:
                break

        self.current_rows, self.current_cols = active_rows, active_cols
        if stored_cols > self.current_cols:
            self.current_cols = min(stored_cols, self.max_cols)
        if stored_rows > self.current_rows:
            self.current_rows = min(stored_rows, self.max_rows)