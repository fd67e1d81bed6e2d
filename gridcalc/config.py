"""Table settings read from a "name:value" per line configuration file."""

from dataclasses import dataclass
from enum import Enum

from gridcalc.textutil import ascii_lower, is_bool, is_size_t, split, to_bool, to_size_t


class Alignment(Enum):
    """Horizontal placement of text inside a cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ConfigError(Exception):
    """The configuration is missing a property or holds an invalid value."""


class Property:
    """One named setting of kind ``int`` (positive), ``bool`` or ``Alignment``."""

    def __init__(self, name, kind):
        if kind not in (int, bool, Alignment):
            raise TypeError(f"unsupported property kind: {kind!r}")
        self.name = name
        self.kind = kind
        self.value = None
        self.error = True
        self.error_message = f"ABORTING! {name} - Missing property!"

    def is_valid(self, text):
        """Tell whether the text is an acceptable value for this property."""
        if self.kind is int:
            return is_size_t(text) and to_size_t(text) > 0
        if self.kind is bool:
            return is_bool(text)
        return ascii_lower(text) in {member.value for member in Alignment}

    def _parse(self, text):
        if self.kind is int:
            return to_size_t(text)
        if self.kind is bool:
            return to_bool(text)
        return Alignment(ascii_lower(text))

    def set_from_string(self, text):
        """Set the value from text; on failure record the error and return False."""
        if not self.is_valid(text):
            self.error = True
            self.error_message = f"ABORTING! {self.name}:{text} - Invalid value"
            return False
        self.error = False
        self.value = self._parse(text)
        return True

    def mark_missing_value(self):
        """Record that the property was named without a value."""
        self.error = True
        self.error_message = f"ABORTING! {self.name}: - Invalid value"


def read_properties(path):
    """Return the non-empty ':'-separated pieces of every line; [] if unreadable."""
    try:
        with open(path, encoding="utf-8") as stream:
            lines = stream.read().split("\n")
    except OSError:
        return []

    return [pieces for pieces in (split(line, ":") for line in lines) if pieces]


_PROPERTIES = (
    ("initialTableRows", "initial_table_rows", int),
    ("initialTableCols", "initial_table_cols", int),
    ("maxTableRows", "max_table_rows", int),
    ("maxTableCols", "max_table_cols", int),
    ("autoFit", "auto_fit", bool),
    ("visibleCellSymbols", "visible_cell_symbols", int),
    ("initialAlignment", "alignment", Alignment),
    ("clearConsoleAfterCommand", "clear_console_after_command", bool),
)


@dataclass
class TableConfig:
    """Settings that shape a new table."""

    initial_table_rows: int
    initial_table_cols: int
    max_table_rows: int
    max_table_cols: int
    auto_fit: bool
    visible_cell_symbols: int
    alignment: Alignment
    clear_console_after_command: bool

    @classmethod
    def from_file(cls, path):
        """Read every setting from the file; raise ConfigError on any problem."""
        properties = {name: Property(name, kind) for name, _, kind in _PROPERTIES}

        for pieces in read_properties(path):
            prop = properties.get(pieces[0])
            if prop is None:
                continue
            if len(pieces) < 2:
                prop.mark_missing_value()
                continue
            prop.set_from_string(pieces[1])

        failing = [prop for prop in properties.values() if prop.error]
        if failing:
            raise ConfigError(failing[-1].error_message)

        return cls(
            **{field: properties[name].value for name, field, _ in _PROPERTIES}
        )