import pytest

from gridcalc.parser import (
    ArgumentType,
    RawContentType,
    argument_type,
    expression_arguments,
    expression_name,
    positions_in_range,
    raw_content_type,
)
from gridcalc.position import Position


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", RawContentType.EMPTY),
        ("true", RawContentType.BOOL),
        ("FaLsE", RawContentType.BOOL),
        ("1.5", RawContentType.NUMBER),
        ("-3", RawContentType.NUMBER),
        ("=SUM(A1)", RawContentType.EXPRESSION),
        ("=A1", RawContentType.REFERENCE),
        ("=)(", RawContentType.REFERENCE),
        ('"hi"', RawContentType.STRING),
        ("hello", RawContentType.ERROR),
    ],
)
def test_raw_content_type(text, expected):
    assert raw_content_type(text) is expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("FALSE", ArgumentType.BOOL),
        ("-3", ArgumentType.NUMBER),
        ("B2", ArgumentType.REFERENCE),
        ('"x"', ArgumentType.STRING),
        ("A1:B2", ArgumentType.RANGE),
        ("a1:b2", ArgumentType.RANGE),
        ("A1:", ArgumentType.INVALID),
        (":A1", ArgumentType.INVALID),
        ("A1:B", ArgumentType.INVALID),
        ("foo", ArgumentType.INVALID),
        ("", ArgumentType.INVALID),
    ],
)
def test_argument_type(text, expected):
    assert argument_type(text) is expected


def test_expression_name():
    assert expression_name("=SUM(A1:B2)") == "SUM"
    assert expression_name("=A1") == ""
    assert expression_name("=(A1)") == ""


def test_expression_arguments_strip_spaces_outside_quotes():
    assert expression_arguments('=SUM( A1 , 2, "a b" )') == ["A1", "2", '"a b"']


def test_expression_arguments_empty():
    assert expression_arguments("=SUM()") == []


def test_expression_arguments_without_parentheses_raises():
    with pytest.raises(IndexError):
        expression_arguments("=A1")


def test_positions_in_range_order():
    expected = [Position.from_string(name) for name in ("A1", "A2", "B1", "B2")]
    assert positions_in_range("A1:B2") == expected


def test_positions_in_range_is_symmetric():
    assert positions_in_range("B2:A1") == positions_in_range("A1:B2")
    assert positions_in_range("A2:B1") == positions_in_range("A1:B2")


def test_positions_in_range_size():
    positions = positions_in_range("A1:C4")
    assert len(positions) == 3 * 4
    assert len(set(positions)) == len(positions)


def test_positions_in_single_cell_range():
    assert positions_in_range("C3:C3") == [Position.from_string("C3")]


def test_positions_in_non_range_is_empty():
    assert positions_in_range("A1") == []
    assert positions_in_range("nope") == []