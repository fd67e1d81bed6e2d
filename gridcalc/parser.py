"""Classification of raw cell input and of formula arguments."""

from enum import Enum, auto

from gridcalc.position import Position, is_position
from gridcalc.textutil import (
    is_bool,
    is_double,
    remove_free_spaces,
    split,
    substr,
)


class RawContentType(Enum):
    """What a user typed into a cell."""

    EMPTY = auto()
    NUMBER = auto()
    BOOL = auto()
    STRING = auto()
    REFERENCE = auto()
    EXPRESSION = auto()
    ERROR = auto()


class ArgumentType(Enum):
    """What a single formula argument is."""

    NUMBER = auto()
    BOOL = auto()
    STRING = auto()
    REFERENCE = auto()
    RANGE = auto()
    INVALID = auto()


class CellType(Enum):
    """The kind of value a cell displays."""

    EMPTY = auto()
    NUMBER = auto()
    BOOL = auto()
    STRING = auto()
    ERROR = auto()


def _is_quoted(text):
    return bool(text) and text[0] == '"' and text[-1] == '"'


def raw_content_type(text):
    """Classify raw cell input."""
    if text == "":
        return RawContentType.EMPTY
    if is_bool(text):
        return RawContentType.BOOL
    if is_double(text):
        return RawContentType.NUMBER

    if text[0] == "=":
        open_at = text.find("(")
        if open_at != -1 and open_at < text.find(")"):
            return RawContentType.EXPRESSION
        return RawContentType.REFERENCE

    if _is_quoted(text):
        return RawContentType.STRING

    return RawContentType.ERROR


def _split_range(text):
    separator = text.find(":")
    if separator <= 0 or separator == len(text) - 1:
        return None
    first, second = text[:separator], text[separator + 1 :]
    if is_position(first) and is_position(second):
        return first, second
    return None


def argument_type(text):
    """Classify one formula argument."""
    if is_bool(text):
        return ArgumentType.BOOL
    if is_double(text):
        return ArgumentType.NUMBER
    if is_position(text):
        return ArgumentType.REFERENCE
    if _is_quoted(text):
        return ArgumentType.STRING
    if _split_range(text) is not None:
        return ArgumentType.RANGE
    return ArgumentType.INVALID


def expression_name(text):
    """Return the function name of an expression such as "=SUM(A1)", else ""."""
    if raw_content_type(text) is not RawContentType.EXPRESSION:
        return ""
    return substr(text, text.find("=") + 1, text.find("(") - 1)


def expression_arguments(text):
    """Return the comma-separated arguments between the parentheses."""
    inside = substr(text, text.find("(") + 1, text.find(")") - 1)
    return split(remove_free_spaces(inside), ",")


def positions_in_range(text):
    """Return every position in a range like "A1:B3", letters outermost."""
    bounds = _split_range(text) if argument_type(text) is ArgumentType.RANGE else None
    if bounds is None:
        return []

    first, second = (Position.from_string(part) for part in bounds)
    rows = range(min(first.row, second.row), max(first.row, second.row) + 1)
    cols = range(min(first.col, second.col), max(first.col, second.col) + 1)
    return [Position(row, col) for row in rows for col in cols]