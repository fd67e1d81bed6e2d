import pytest

from gridcalc.cell import Cell
from gridcalc.formulas import ERROR_DISPLAY
from gridcalc.parser import CellType
from gridcalc.position import Position


class FakeTable:
    def __init__(self, rows=5, cols=5):
        self.cells = {
            Position(r, c): Cell(Position(r, c), self)
            for r in range(rows)
            for c in range(cols)
        }
        self.tracked = []

    def cell_at(self, position):
        return self.cells.get(position)

    def track_position(self, position):
        self.tracked.append(position)


@pytest.fixture
def table():
    return FakeTable()


def test_number_keeps_raw_text(table):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign("12.5")
    assert cell.display == "12.5"
    assert cell.cell_type is CellType.NUMBER


def test_bool_is_upper_cased(table):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign("true")
    assert cell.display == "TRUE"
    assert cell.cell_type is CellType.BOOL


def test_string_drops_quotes(table):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign('"hello world"')
    assert cell.display == "hello world"
    assert cell.cell_type is CellType.STRING


def test_empty_input(table):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign("5")
    cell.assign("")
    assert cell.display == ""
    assert cell.cell_type is CellType.EMPTY


def test_garbage_is_error(table):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign("abc")
    assert cell.display == ERROR_DISPLAY
    assert cell.cell_type is CellType.ERROR


def test_assign_tracks_position(table):
    table.cell_at(Position.from_string("B2")).assign("1")
    assert table.tracked == [Position.from_string("B2")]


def test_assign_without_table_does_nothing():
    cell = Cell(Position(1, 1), None)
    cell.assign("5")
    assert cell.raw_content == ""
    assert cell.cell_type is CellType.EMPTY


def test_reference_copies_and_follows(table):
    a1 = table.cell_at(Position.from_string("A1"))
    b1 = table.cell_at(Position.from_string("B1"))
    a1.assign("5")
    b1.assign("=A1")
    assert b1.display == "5"
    assert b1.cell_type is CellType.NUMBER

    a1.assign('"text"')
    assert b1.display == "text"
    assert b1.cell_type is CellType.STRING


def test_reference_chain_propagates(table):
    a1 = table.cell_at(Position.from_string("A1"))
    b1 = table.cell_at(Position.from_string("B1"))
    c1 = table.cell_at(Position.from_string("C1"))
    a1.assign("1")
    b1.assign("=A1")
    c1.assign("=B1")
    a1.assign("false")
    assert c1.display == "FALSE"
    assert c1.cell_type is CellType.BOOL


@pytest.mark.parametrize("raw", ["=Z99", "=foo", "="])
def test_bad_reference_is_error(table, raw):
    cell = table.cell_at(Position.from_string("A1"))
    cell.assign(raw)
    assert cell.cell_type is CellType.ERROR


def test_self_reference_is_error(table):
    a1 = table.cell_at(Position.from_string("A1"))
    a1.assign("=A1")
    assert a1.cell_type is CellType.ERROR


def test_cycle_is_rejected(table):
    a1 = table.cell_at(Position.from_string("A1"))
    b1 = table.cell_at(Position.from_string("B1"))
    a1.assign("=B1")
    b1.assign("=A1")
    assert b1.cell_type is CellType.ERROR
    assert b1.depends_on == []


def test_formula_recomputes_on_change(table):
    a1 = table.cell_at(Position.from_string("A1"))
    a2 = table.cell_at(Position.from_string("A2"))
    b1 = table.cell_at(Position.from_string("B1"))
    a1.assign("1")
    a2.assign("2")
    b1.assign("=SUM(A1:A2)")
    assert b1.display == "3"
    assert b1.cell_type is CellType.NUMBER

    a1.assign("x")
    assert b1.cell_type is CellType.ERROR


def test_len_follows_referenced_cell(table):
    a1 = table.cell_at(Position.from_string("A1"))
    b1 = table.cell_at(Position.from_string("B1"))
    a1.assign('"abc"')
    b1.assign("=LEN(A1)")
    assert b1.display == "3"
    a1.assign('"hello"')
    assert b1.display == "5"


def test_unknown_formula_is_error(table):
    a1 = table.cell_at(Position.from_string("A1"))
    a1.assign("=NOPE(1)")
    assert a1.display == ERROR_DISPLAY


def test_reassign_drops_old_links(table):
    a1 = table.cell_at(Position.from_string("A1"))
    b1 = table.cell_at(Position.from_string("B1"))
    a1.assign("1")
    b1.assign("=A1")
    b1.assign("7")
    assert b1.depends_on == []
    assert a1.dependents == []
    a1.assign("9")
    assert b1.display == "7"


def test_add_and_remove_dependency_are_symmetric(table):
    a = table.cell_at(Position.from_string("A1"))
    b = table.cell_at(Position.from_string("B1"))
    a.add_dependency(b)
    a.add_dependency(b)
    assert a.depends_on == [b.position]
    assert b.dependents == [a.position]
    a.remove_dependency(b)
    assert a.depends_on == []
    assert b.dependents == []


def test_clear_dependencies(table):
    a = table.cell_at(Position.from_string("A1"))
    b = table.cell_at(Position.from_string("B1"))
    c = table.cell_at(Position.from_string("C1"))
    a.add_dependency(b)
    a.add_dependency(c)
    a.on_change = lambda *args: None
    a.clear_dependencies()
    assert a.depends_on == []
    assert b.dependents == [] and c.dependents == []
    assert a.on_change is None


def test_has_path_to_is_transitive(table):
    a = table.cell_at(Position.from_string("A1"))
    b = table.cell_at(Position.from_string("B1"))
    c = table.cell_at(Position.from_string("C1"))
    a.add_dependency(b)
    b.add_dependency(c)
    assert a.has_path_to(c.position)
    assert a.has_path_to(a.position)
    assert not c.has_path_to(a.position)


def test_set_display_drops_missing_dependents(table):
    a = table.cell_at(Position.from_string("A1"))
    ghost = Position(100, 100)
    a.dependents.append(ghost)
    a.set_display("x", CellType.STRING)
    assert ghost not in a.dependents
    assert a.display == "x"


def test_set_display_passes_previous_content(table):
    a = table.cell_at(Position.from_string("A1"))
    b = table.cell_at(Position.from_string("B1"))
    seen = []
    b.add_dependency(a)
    b.on_change = lambda receiver, sender, change: seen.append(change)
    a.set_display("first", CellType.STRING)
    a.set_display("second", CellType.STRING)
    assert seen[-1].previous_content == "first"
    assert seen[-1].previous_cell_type is CellType.STRING