# gridcalc

A small interactive spreadsheet that runs in the terminal. Cells hold numbers,
booleans, quoted strings, references to other cells (`=A1`) or formulas
(`=SUM(A1:B3)`). When a cell changes, every cell that depends on it is
recomputed. A reference or formula that would create a cycle is refused, and
the cell shows `#VALUE!` instead.

## Installing

    pip install .

For the tests:

    pip install .[test]
    pytest

## Starting

    gridcalc

The program reads commands from standard input, one per line (lines longer
than 1023 characters are cut short). It stops at `exit` or at the end of input.

### Top-level commands

| Command                         | Effect                                                |
|---------------------------------|-------------------------------------------------------|
| `new <config-file>`             | Create an empty table laid out by a config file       |
| `open <table-file> <config>`    | Load a saved table, using the config for its settings |
| `exit`                          | Quit (any letter case)                                |

If the configuration is missing a property or holds an invalid value, its
error message is printed and no table is opened. If the table file cannot be
opened, `Couldn't find file for table` is printed.

### Commands while a table is open

The table is printed after each command.

| Command                  | Effect                                                        |
|--------------------------|---------------------------------------------------------------|
| `A1 insert <content>`    | Put content into cell A1                                      |
| `A1 <content>`           | Same as `insert`                                              |
| `A1 delete`              | Blank what A1 shows; its stored content is left unchanged     |
| `save <file>`            | Write the table to a binary file                              |
| `close`                  | Close the table and return to the top level (any case)        |

A command line is split on spaces, except inside quotation marks and
parentheses, so `"hello world"` is a single string value and
`=SUM(A1, B1)` is a single formula. Cell names are letters followed by a
number (`A1`, `ab12`); the letters pick the row and the number the column.
The first printed row holds the column numbers and the first printed column
the row letters.

## Cell contents

| Input                  | Result                                                    |
|------------------------|-----------------------------------------------------------|
| (empty)                | Empty cell                                                |
| `true`, `FALSE`, ...   | Boolean, shown in upper case                              |
| `12`, `-3.5`, `0,25`   | Number (`.` or `,` as the decimal point)                  |
| `"text"`               | String, shown without the quotes                          |
| `=B2`                  | Shows whatever B2 shows, and follows its changes          |
| `=NAME(args)`          | Formula                                                   |
| anything else          | `#VALUE!`                                                 |

## Configuration file

One `name:value` pair per line. Every property must be present and valid:

    initialTableRows:5
    initialTableCols:5
    maxTableRows:20
    maxTableCols:20
    autoFit:true
    visibleCellSymbols:10
    initialAlignment:left
    clearConsoleAfterCommand:false

The size properties must be positive whole numbers. `autoFit` and
`clearConsoleAfterCommand` are `true` or `false`; `initialAlignment` is
`left`, `center` or `right`. With `autoFit` off, columns are cut to
`visibleCellSymbols` characters when their content is that long or longer.
With `clearConsoleAfterCommand` on, an ANSI clear-screen sequence is written
before each printout. Lines naming unknown properties are ignored.

## Formulas

Names are case-insensitive. Arguments are numbers, booleans, quoted strings,
cell references (`B2`) or ranges (`A1:C3`).

| Formula                         | Result                                                          |
|---------------------------------|-----------------------------------------------------------------|
| `SUM(...)`                      | Sum of numbers and booleans (true counts as 1); strings ignored |
| `AVERAGE(...)`, `AVG(...)`      | Mean of numbers and booleans                                    |
| `MIN(range)`, `MAX(range)`      | Smallest / largest number in a single range                     |
| `LEN(value)`                    | Length of the argument as written, or of a referenced cell's text |
| `CONCAT(range, "sep")`          | Non-empty cells in the range joined by `sep`                    |
| `SUBSTR(value, start, length)`  | `length` characters from 0-based `start`; `SUBSTRING` is the same |
| `COUNT(range)`                  | Number of non-empty cells in the range                          |

A formula shows `#VALUE!` when its arguments are of the wrong kind, when a
referenced cell is in error or outside the table, when it would read from
itself, or when SUM, AVERAGE, MIN or MAX find no number to work on.

## Save files

`save` writes the table settings and the raw content of every cell.
`open` reads them back into a table built from the given configuration; that
table keeps its own settings and size, cells that do not fit are skipped, and
every cell is evaluated again as it is loaded.

## Using it from Python

```python
from gridcalc.config import Alignment, TableConfig
from gridcalc.position import Position
from gridcalc.table import Table

config = TableConfig(
    initial_table_rows=3,
    initial_table_cols=3,
    max_table_rows=10,
    max_table_cols=10,
    auto_fit=True,
    visible_cell_symbols=10,
    alignment=Alignment.LEFT,
    clear_console_after_command=False,
)
table = Table(config)
table.cell_at(Position.from_string("A1")).assign("2")
table.cell_at(Position.from_string("B1")).assign("=SUM(A1,3)")
print(table.cell_at(Position.from_string("B1")).display)  # 5
print(table.render())
```

- `gridcalc.config.TableConfig.from_file(path)` loads a configuration and
  raises `gridcalc.config.ConfigError` on any problem.
- `gridcalc.table.Table` holds the cells and offers `cell_at`, `render`,
  `show`, `dump` and `load`.
- `gridcalc.cell.Cell.assign` stores raw input; `display` and `cell_type`
  hold what the cell shows.
- `gridcalc.position.Position` converts between `B7`-style names and
  row/column numbers.
- `gridcalc.cli.App(stdin, stdout).run()` runs the command loop on any pair
  of text streams.