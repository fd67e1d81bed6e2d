"""Interactive command loop for creating, editing and saving tables."""

import sys

from gridcalc.config import ConfigError, TableConfig
from gridcalc.parser import CellType
from gridcalc.position import Position, is_position
from gridcalc.table import Table
from gridcalc.textutil import ascii_lower, split

_MAX_INPUT = 1023


class App:
    """Reads commands from ``stdin`` and writes tables and messages to ``stdout``."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout

    def _read_line(self):
        line = self.stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")[:_MAX_INPUT]

    def _say(self, message):
        self.stdout.write(message + "\n")

    def run(self):
        """Handle "new" and "open" commands until "exit" or end of input."""
        command = ""
        while ascii_lower(command) != "exit":
            command = self._read_line()
            if command is None:
                return

            args = split(command)
            if not args:
                continue

            name, rest = args[0], args[1:]
            if name == "new":
                self.new_table(rest)
            elif name == "open":
                self.open_table(rest)

    def _load_config(self, path):
        try:
            return TableConfig.from_file(path)
        except ConfigError as error:
            self._say(str(error))
            return None

    def new_table(self, args):
        """Create an empty table from the configuration file in ``args[0]``."""
        if len(args) < 1:
            self._say("Not enough arguments")
            return

        config = self._load_config(args[0])
        if config is None:
            return
        self.edit_table(Table(config))

    def open_table(self, args):
        """Open the table file ``args[0]`` with the configuration ``args[1]``."""
        if len(args) < 2:
            self._say("Not enough arguments")
            return

        config = self._load_config(args[1])
        if config is None:
            return
        table = Table(config)

        try:
            with open(args[0], "rb") as stream:
                table.load(stream)
        except OSError:
            self._say("Couldn't find file for table")
            return
        except ValueError:
            self._say("Couldn't read table from file")
            return

        self.edit_table(table)

    def _save(self, table, args):
        if len(args) < 2:
            self._say("Couldn't save to file")
            return
        try:
            with open(args[1], "wb") as stream:
                table.dump(stream)
        except OSError:
            self._say("Couldn't save to file")

    def edit_table(self, table):
        """Show the table and apply cell commands until "close"."""
        must_print = True
        while True:
            if must_print:
                table.show(self.stdout)
            else:
                must_print = True

            command = self._read_line()
            if command is None or ascii_lower(command) == "close":
                return

            args = split(command)
            if not args:
                continue

            if ascii_lower(args[0]) == "save":
                must_print = False
                self._save(table, args)
                continue

            if not is_position(args[0]):
                self._say("Invalid input")
                must_print = False
                continue

            cell = table.cell_at(Position.from_string(args[0]))
            if cell is None:
                self._say("Cell not found")
                continue

            action = args[1:]
            if not action:
                self._say("Invalid input")
                continue

            if action[0] == "insert":
                if len(action) < 2:
                    self._say("Invalid input")
                    continue
                cell.assign(action[1])
            elif action[0] == "delete":
                cell.set_display("", CellType.EMPTY)
            else:
                cell.assign(action[0])


def main(argv=None):
    """Run the interactive loop on standard input and output."""
    App().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())