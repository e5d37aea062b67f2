from __future__ import annotations

from cleo.commands.help_command import HelpCommand as _HelpCommand  # type: ignore[import]
from cleo.commands.list_command import ListCommand  # type: ignore[import]
from cleo.formatters.style import Style  # type: ignore[import]
from cleo.io.io import IO  # type: ignore[import]


def add_style(io: IO, name: str, style: Style) -> None:
    """Register *style* under *name* on both the standard and the error output of a Cleo IO."""

    io.output.formatter.set_style(name, style)
    io.error_output.formatter.set_style(name, style)


class HelpCommand(_HelpCommand, ListCommand):
    """Shows the list of commands when invoked without a command name, otherwise the help of that command."""

    arguments = ListCommand.arguments

    def handle(self) -> int:
        self.io.input._arguments["namespace"] = None
        if not self._command:
            return ListCommand.handle(self)
        return _HelpCommand.handle(self)
