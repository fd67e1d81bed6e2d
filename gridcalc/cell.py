"""A single spreadsheet cell: its raw input, what it displays and its links."""

from gridcalc.formulas import (
    ChangeContentArgs,
    find_formula,
    make_cell_invalid,
)
from gridcalc.parser import (
    CellType,
    RawContentType,
    expression_arguments,
    expression_name,
    raw_content_type,
)
from gridcalc.position import Position, is_position
from gridcalc.textutil import ascii_upper


def _copy_reference(receiver, sender, change):
    """Mirror the referenced cell after it changed."""
    receiver.set_display(sender.display, sender.cell_type)


class Cell:
    """A cell of a table.

    ``depends_on`` holds the positions this cell reads from and
    ``dependents`` the positions that read from it.  ``on_change`` is called
    as ``on_change(self, sender, change)`` when a cell it depends on changes.
    The table must offer ``cell_at(position)`` and ``track_position(position)``.
    """

    def __init__(self, position=None, table=None):
        self.position = position if position is not None else Position()
        self.table = table
        self.raw_content = ""
        self.display = ""
        self.cell_type = CellType.EMPTY
        self.depends_on = []
        self.dependents = []
        self.on_change = None

    def __repr__(self):
        return (
            f"Cell({self.position}, raw={self.raw_content!r}, "
            f"display={self.display!r}, type={self.cell_type.name})"
        )

    def assign(self, raw_content):
        """Store new raw input and evaluate it; does nothing without a table."""
        if self.table is None:
            return
        self.table.track_position(self.position)
        self.raw_content = raw_content
        self._evaluate()

    def _evaluate(self):
        kind = raw_content_type(self.raw_content)
        self.clear_dependencies()

        if kind is RawContentType.EMPTY:
            self.set_display("", CellType.EMPTY)
        elif kind is RawContentType.BOOL:
            self.set_display(ascii_upper(self.raw_content), CellType.BOOL)
        elif kind is RawContentType.NUMBER:
            self.set_display(self.raw_content, CellType.NUMBER)
        elif kind is RawContentType.STRING:
            self.set_display(self.raw_content[1:-1], CellType.STRING)
        elif kind is RawContentType.REFERENCE:
            self._evaluate_reference()
        elif kind is RawContentType.EXPRESSION:
            self._evaluate_expression()
        else:
            make_cell_invalid(self)

    def _evaluate_reference(self):
        target_name = self.raw_content[self.raw_content.find("=") + 1 :]
        if not is_position(target_name):
            make_cell_invalid(self)
            return

        target = self.table.cell_at(Position.from_string(target_name))
        if target is None or target.has_path_to(self.position):
            make_cell_invalid(self)
            return

        self.add_dependency(target)
        self.on_change = _copy_reference
        self.set_display(target.display, target.cell_type)

    def _evaluate_expression(self):
        formula = find_formula(expression_name(self.raw_content))
        if formula is None:
            make_cell_invalid(self)
            return

        formula.on_run(self, expression_arguments(self.raw_content))
        self.on_change = formula.on_change

    def set_display(self, display, cell_type):
        """Change what the cell shows and let dependent cells react."""
        change = ChangeContentArgs(self.display, self.cell_type)
        self.display = display
        self.cell_type = cell_type

        if self.table is None:
            return

        for position in list(self.dependents):
            dependent = self.table.cell_at(position)
            if dependent is None:
                if position in self.dependents:
                    self.dependents.remove(position)
                continue
            if dependent.on_change is not None:
                dependent.on_change(dependent, self, change)

    def has_path_to(self, position):
        """Tell whether this cell reads, directly or not, from ``position``."""
        if self.position == position:
            return True
        if self.table is None:
            return False

        visited = set()
        pending = [self]
        while pending:
            current = pending.pop()
            if current.position == position:
                return True
            if current.position in visited:
                continue
            visited.add(current.position)
            for source in current.depends_on:
                cell = self.table.cell_at(source)
                if cell is not None:
                    pending.append(cell)
        return False

    def add_dependency(self, other):
        """Record that this cell reads from ``other``."""
        if other is None:
            return
        if other.position not in self.depends_on:
            self.depends_on.append(other.position)
        if self.position not in other.dependents:
            other.dependents.append(self.position)

    def remove_dependency(self, other):
        """Forget that this cell reads from ``other``."""
        if other is None:
            return
        if other.position in self.depends_on:
            self.depends_on.remove(other.position)
        if self.position in other.dependents:
            other.dependents.remove(self.position)

    def clear_dependencies(self):
        """Drop every link to cells this one reads from, and its change handler."""
        if self.table is not None:
            for position in list(self.depends_on):
                self.remove_dependency(self.table.cell_at(position))
        self.depends_on.clear()
        self.on_change = None