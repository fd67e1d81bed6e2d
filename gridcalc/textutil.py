"""Text helpers for cell contents: number formatting, parsing and splitting."""

import re

SIZE_T_MAX = 2**64 - 1
_SIZE_T_DIGITS = len(str(SIZE_T_MAX))
_PRECISION = 10

_DOUBLE_RE = re.compile(r" *([+-]?)([0-9]*)(?:([.,])([0-9]*) *)?")


def format_number(value):
    """Render a number the way cells display it.

    Integers are written plainly.  Floats keep at most ten fractional
    digits, with trailing zeros dropped and no point for whole values.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)

    num = float(value)
    negative = num < 0
    if negative:
        num = -num

    integer = int(num)
    num -= integer
    parts = [str(integer)]

    leading_zeroes = 0
    probe = num
    while probe < 0.1 and leading_zeroes < _PRECISION:
        probe *= 10
        leading_zeroes += 1

    if leading_zeroes < _PRECISION:
        scaled = num
        for _ in range(_PRECISION):
            scaled *= 10
        digits = str(int(scaled)).rstrip("0") or "0"
        parts.extend([".", "0" * leading_zeroes, digits])

    text = "".join(parts)
    return "-" + text if negative else text


def substr(text, start, end):
    """Return the characters from ``start`` to ``end``, both inclusive.

    Raises IndexError when either index falls outside the text; returns an
    empty string when ``end`` comes before ``start``.
    """
    length = len(text)
    if start < 0 or end < 0 or start >= length or end >= length:
        raise IndexError("index bigger than length")
    if end < start:
        return ""
    return text[start : end + 1]


def ascii_upper(text):
    """Upper-case ASCII letters only."""
    return "".join(ch.upper() if "a" <= ch <= "z" else ch for ch in text)


def ascii_lower(text):
    """Lower-case ASCII letters only."""
    return "".join(ch.lower() if "A" <= ch <= "Z" else ch for ch in text)


def split(text, separator=" "):
    """Split on ``separator`` outside quotes and parentheses, dropping empty pieces."""
    pieces = []
    start = 0
    quoted = False
    depth = 0

    for index, ch in enumerate(text):
        if ch == separator and not quoted and depth == 0:
            if index > start:
                pieces.append(text[start:index])
            start = index + 1

        if ch == '"' and depth == 0:
            quoted = not quoted

        if ch == "(" and not quoted:
            depth += 1

        if ch == ")" and depth > 0 and not quoted:
            depth -= 1

    if start < len(text):
        pieces.append(text[start:])

    return pieces


def remove_free_spaces(text):
    """Drop every space that is not inside double quotes."""
    kept = []
    quoted = False
    for ch in text:
        if ch == " " and not quoted:
            continue
        if ch == '"':
            quoted = not quoted
        kept.append(ch)
    return "".join(kept)


def _match_double(text):
    match = _DOUBLE_RE.fullmatch(text)
    if match is None:
        return None
    _, before, point, after = match.groups()
    if before or (point and after):
        return match
    return None


def is_double(text):
    """Tell whether the text is a decimal number ('.' or ',' as the point)."""
    return _match_double(text) is not None


def to_double(text):
    """Parse a decimal number; raise ValueError if the text is not one."""
    match = _match_double(text)
    if match is None:
        raise ValueError(f"couldn't convert to double: {text!r}")

    sign, before, _, after = match.groups()
    left = int(before) if before else 0
    after = after or ""
    right = int(after) if after else 0
    result = left + right / float(10 ** len(after))
    return -result if sign == "-" else result


def is_size_t(text):
    """Tell whether the text is an unsigned 64-bit integer written in digits."""
    if not text or len(text) > _SIZE_T_DIGITS:
        return False
    if not all("0" <= ch <= "9" for ch in text):
        return False
    return int(text) <= SIZE_T_MAX


def to_size_t(text):
    """Parse an unsigned 64-bit integer; raise ValueError otherwise."""
    if not is_size_t(text):
        raise ValueError(f"can't convert to size_t: {text!r}")
    return int(text)


def is_bool(text):
    """Tell whether the text is 'true' or 'false' in any case."""
    return ascii_lower(text) in ("true", "false")


def to_bool(text):
    """Parse 'true' or 'false' in any case; raise ValueError otherwise."""
    if not is_bool(text):
        raise ValueError(f"invalid boolean: {text!r}")
    return ascii_lower(text) == "true"