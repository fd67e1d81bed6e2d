"""Cell coordinates written as letters followed by a number, e.g. "AB12"."""

import re
from dataclasses import dataclass

from gridcalc.textutil import ascii_upper, to_size_t

_LETTERS_IN_ALPHABET = 26
_POSITION_RE = re.compile(r"[A-Z]+[1-9][0-9]*")


def is_position(text):
    """Tell whether the text names a cell: letters then a number not starting with 0."""
    return _POSITION_RE.fullmatch(ascii_upper(text)) is not None


@dataclass(frozen=True)
class Position:
    """A cell position: ``row`` is the letter index, ``col`` the number."""

    row: int = 1
    col: int = 1

    @classmethod
    def from_string(cls, text):
        """Parse a name such as "b7"; an invalid name gives Position(0, 0)."""
        upper = ascii_upper(text)
        if not is_position(upper):
            return cls(0, 0)

        split_at = next(i for i, ch in enumerate(upper) if "1" <= ch <= "9")

        row = 0
        for ch in upper[:split_at]:
            row = row * _LETTERS_IN_ALPHABET + (ord(ch) - ord("A")) + 1

        return cls(row, to_size_t(upper[split_at:]))

    def __str__(self):
        letters = []
        remaining = self.row
        while remaining > 0:
            remaining -= 1
            letters.append(chr(ord("A") + remaining % _LETTERS_IN_ALPHABET))
            remaining //= _LETTERS_IN_ALPHABET
        return "".join(reversed(letters)) + str(self.col)