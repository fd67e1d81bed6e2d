"""Built-in spreadsheet functions and the table of formulas by name.

The functions work on any cell object that offers ``position``, ``display``,
``cell_type``, ``raw_content`` and ``table`` attributes together with
``has_path_to(position)``, ``add_dependency(other)`` and
``set_display(display, cell_type)``.  The table must offer ``cell_at(position)``
which returns ``None`` for positions outside it.
"""

import operator
from dataclasses import dataclass
from typing import Callable

from gridcalc.parser import (
    ArgumentType,
    CellType,
    argument_type,
    expression_arguments,
    expression_name,
    positions_in_range,
)
from gridcalc.position import Position
from gridcalc.textutil import (
    ascii_upper,
    format_number,
    is_size_t,
    to_bool,
    to_double,
    to_size_t,
)

ERROR_DISPLAY = "#VALUE!"


@dataclass(frozen=True)
class ChangeContentArgs:
    """What a cell showed before its content changed."""

    previous_content: str
    previous_cell_type: CellType


@dataclass(frozen=True)
class Formula:
    """A named function: ``on_run`` evaluates it, ``on_change`` reacts to inputs."""

    name: str
    on_run: Callable
    on_change: Callable


def make_cell_invalid(cell):
    """Put the cell into the error state."""
    cell.set_display(ERROR_DISPLAY, CellType.ERROR)


def _referenced_positions(arg):
    kind = argument_type(arg)
    if kind is ArgumentType.REFERENCE:
        return [Position.from_string(arg)]
    if kind is ArgumentType.RANGE:
        return positions_in_range(arg)
    return []


def _link(cell, positions):
    """Make ``cell`` depend on every position; False if one is missing or cyclic."""
    for position in positions:
        target = cell.table.cell_at(position)
        if target is None or target.has_path_to(cell.position):
            return False
        cell.add_dependency(target)
    return True


def _cell_value(target):
    if target.cell_type is CellType.NUMBER:
        return to_double(target.display)
    if target.cell_type is CellType.BOOL:
        return 1.0 if to_bool(target.display) else 0.0
    return None


def _numeric_values(cell, args):
    """Collect the numeric values of the arguments, or None on any error."""
    values = []
    for arg in args:
        kind = argument_type(arg)
        if kind is ArgumentType.NUMBER:
            values.append(to_double(arg))
        elif kind is ArgumentType.BOOL:
            values.append(1.0 if to_bool(arg) else 0.0)
        elif kind is ArgumentType.REFERENCE:
            target = cell.table.cell_at(Position.from_string(arg))
            if target.cell_type is CellType.ERROR:
                return None
            value = _cell_value(target)
            if value is not None:
                values.append(value)
        elif kind is ArgumentType.RANGE:
            for position in positions_in_range(arg):
                target = cell.table.cell_at(position)
                if target.cell_type is CellType.ERROR:
                    return None
                value = _cell_value(target)
                if value is not None:
                    values.append(value)
        elif kind is ArgumentType.INVALID:
            return None
    return values


def _link_arguments(cell, args):
    return _link(cell, [pos for arg in args for pos in _referenced_positions(arg)])


def run_sum(cell, args):
    """SUM: add numbers, booleans and referenced numeric cells."""
    if not _link_arguments(cell, args):
        make_cell_invalid(cell)
        return

    values = _numeric_values(cell, args)
    if not values:
        make_cell_invalid(cell)
        return

    cell.set_display(format_number(sum(values, 0.0)), CellType.NUMBER)


def run_average(cell, args):
    """AVERAGE: mean of numbers, booleans and referenced numeric cells."""
    if not _link_arguments(cell, args):
        make_cell_invalid(cell)
        return

    values = _numeric_values(cell, args)
    if not values:
        make_cell_invalid(cell)
        return

    cell.set_display(format_number(sum(values, 0.0) / len(values)), CellType.NUMBER)


def _is_one_range(args):
    return len(args) == 1 and argument_type(args[0]) is ArgumentType.RANGE


def _run_extreme(cell, args, better):
    if not _is_one_range(args):
        make_cell_invalid(cell)
        return

    positions = positions_in_range(args[0])
    if not _link(cell, positions):
        make_cell_invalid(cell)
        return

    best = None
    for position in positions:
        target = cell.table.cell_at(position)
        if target is None or target.cell_type is CellType.ERROR:
            make_cell_invalid(cell)
            return
        if target.cell_type is CellType.NUMBER and (
            best is None or better(to_double(target.display), to_double(best.display))
        ):
            best = target

    if best is None:
        make_cell_invalid(cell)
        return

    cell.set_display(best.display, CellType.NUMBER)


def run_min(cell, args):
    """MIN: the smallest numeric cell of a single range."""
    _run_extreme(cell, args, operator.lt)


def run_max(cell, args):
    """MAX: the largest numeric cell of a single range."""
    _run_extreme(cell, args, operator.gt)


def run_len(cell, args):
    """LEN: length of a literal argument or of a referenced cell's display."""
    if len(args) != 1 or argument_type(args[0]) is ArgumentType.RANGE:
        make_cell_invalid(cell)
        return

    if argument_type(args[0]) is ArgumentType.REFERENCE:
        target = cell.table.cell_at(Position.from_string(args[0]))
        if target is None or target.has_path_to(cell.position):
            make_cell_invalid(cell)
            return
        cell.add_dependency(target)
        cell.set_display(str(len(target.display)), CellType.NUMBER)
    else:
        cell.set_display(str(len(args[0])), CellType.NUMBER)


def change_len(cell, sender, change):
    """Recompute LEN after the referenced cell changed."""
    cell.set_display(str(len(sender.display)), CellType.NUMBER)


def run_concat(cell, args):
    """CONCAT: join the non-empty cells of a range with a quoted delimiter."""
    if (
        len(args) != 2
        or argument_type(args[0]) is not ArgumentType.RANGE
        or argument_type(args[1]) is not ArgumentType.STRING
        or len(args[1]) < 2
    ):
        make_cell_invalid(cell)
        return

    delimiter = args[1][1:-1]
    positions = positions_in_range(args[0])
    if not _link(cell, positions):
        make_cell_invalid(cell)
        return

    pieces = []
    for position in positions:
        target = cell.table.cell_at(position)
        if target.cell_type is CellType.ERROR:
            make_cell_invalid(cell)
            return
        if target.cell_type is CellType.EMPTY:
            continue
        pieces.append(target.display)

    cell.set_display(delimiter.join(pieces), CellType.STRING)


def run_substr(cell, args):
    """SUBSTR: ``length`` characters of text starting at ``start``."""
    if (
        len(args) != 3
        or argument_type(args[0]) is ArgumentType.RANGE
        or not is_size_t(args[1])
        or not is_size_t(args[2])
    ):
        make_cell_invalid(cell)
        return

    start = to_size_t(args[1])
    length = to_size_t(args[2])
    if length == 0:
        make_cell_invalid(cell)
        return

    text = args[0]
    if argument_type(args[0]) is ArgumentType.REFERENCE:
        target = cell.table.cell_at(Position.from_string(args[0]))
        if target is None or target.has_path_to(cell.position):
            make_cell_invalid(cell)
            return
        cell.add_dependency(target)
        if target.cell_type is CellType.ERROR:
            make_cell_invalid(cell)
            return
        text = target.display

    end = start + length - 1
    if len(text) <= end:
        make_cell_invalid(cell)
        return

    cell.set_display(text[start : end + 1], CellType.STRING)


def run_count(cell, args):
    """COUNT: number of non-empty cells in a single range."""
    if not _is_one_range(args):
        make_cell_invalid(cell)
        return

    positions = positions_in_range(args[0])
    if not _link(cell, positions):
        make_cell_invalid(cell)
        return

    count = 0
    for position in positions:
        target = cell.table.cell_at(position)
        if target.cell_type is CellType.ERROR:
            make_cell_invalid(cell)
            return
        if target.cell_type is not CellType.EMPTY:
            count += 1

    cell.set_display(str(count), CellType.NUMBER)


def rerun(cell, sender, change):
    """Evaluate the cell's expression again after one of its inputs changed."""
    formula = find_formula(expression_name(cell.raw_content))
    if formula is None:
        make_cell_invalid(cell)
        return
    formula.on_run(cell, expression_arguments(cell.raw_content))


_FORMULAS = (
    Formula("SUM", run_sum, rerun),
    Formula("AVERAGE", run_average, rerun),
    Formula("AVG", run_average, rerun),
    Formula("MIN", run_min, rerun),
    Formula("MAX", run_max, rerun),
    Formula("LEN", run_len, change_len),
    Formula("CONCAT", run_concat, rerun),
    Formula("SUBSTR", run_substr, rerun),
    Formula("SUBSTRING", run_substr, rerun),
    Formula("COUNT", run_count, rerun),
)


def get_formulas():
    """Return every known formula in lookup order."""
    return _FORMULAS


def find_formula(name):
    """Return the formula with this name in any letter case, or None."""
    wanted = ascii_upper(name)
    return next((f for f in _FORMULAS if ascii_upper(f.name) == wanted), None)