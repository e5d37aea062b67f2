""" With the application object we manage the CLI commands, which are loaded as plugins, and access to the
documentation project that the commands operate on. """

from __future__ import annotations

import logging
import textwrap
import typing as t
from pathlib import Path

from cleo.application import Application as BaseCleoApplication  # type: ignore[import]
from cleo.commands.command import Command as _BaseCommand  # type: ignore[import]
from cleo.helpers import argument, option  # type: ignore[import]
from cleo.io.io import IO  # type: ignore[import]

from docpatch import __version__

if t.TYPE_CHECKING:
    from docpatch.project import Project

__all__ = ["Command", "argument", "option", "IO", "Application"]
logger = logging.getLogger(__name__)


class Command(_BaseCommand):
    help: str
    description: str

    def __init_subclass__(cls) -> None:
        if not cls.help:
            first_line, remainder = (cls.__doc__ or "").partition("\n")[::2]
            cls.help = (first_line.strip() + "\n" + textwrap.dedent(remainder)).strip()
        cls.description = cls.description or (cls.help.strip().splitlines()[0] if cls.help else None) or ""


class CleoApplication(BaseCleoApplication):
    from cleo.formatters.style import Style  # type: ignore[import]
    from cleo.io.inputs.input import Input  # type: ignore[import]
    from cleo.io.outputs.output import Output  # type: ignore[import]

    _styles: dict[str, Style]

    def __init__(self, init: t.Callable[[IO], t.Any], name: str = "console", version: str = "") -> None:
        super().__init__(name, version)
        self._init_callback = init
        self._styles = {}

        self._initialized = True
        from docpatch.util.cleo import HelpCommand

        self.add(HelpCommand())
        self._default_command = "help"

        self.add_style("code", "dark_gray")
        self.add_style("warning", "magenta")
        self.add_style("u", options=["underline"])
        self.add_style("i", options=["italic"])
        self.add_style("s", "yellow")
        self.add_style("opt", "cyan", options=["italic"])

    def add_style(self, name: str, fg: str | None = None, bg: str | None = None, options: list[str] | None = None):
        self._styles[name] = self.Style(fg, bg, options)

    def create_io(
        self, input: Input | None = None, output: Output | None = None, error_output: Output | None = None
    ) -> IO:
        from docpatch.util.cleo import add_style

        io = super().create_io(input, output, error_output)
        for style_name, style in self._styles.items():
            add_style(io, style_name, style)
        return io

    def _configure_io(self, io: IO) -> None:
        from docpatch.util.logging import TerminalColorFormatter

        fmt = "<fg=bright black>%(message)s</fg>"
        if io.input.has_parameter_option("-vvv"):
            fmt = "<fg=bright black>%(asctime)s | %(levelname)s | %(name)s | %(message)s</fg>"
            level = logging.DEBUG
        elif io.input.has_parameter_option("-vv"):
            level = logging.DEBUG
        elif io.input.has_parameter_option("-v"):
            level = logging.INFO
        elif io.input.has_parameter_option("-q"):
            level = logging.ERROR
        else:
            level = logging.WARNING

        logging.basicConfig(level=level)
        TerminalColorFormatter(fmt).install("tty")
        TerminalColorFormatter(fmt, colored=False).install("notty")

        super()._configure_io(io)
        self._init_callback(io)


class Application:
    """The application object is the main hub for command-line interactions. It is responsible for loading the
    documentation project that the commands operate on and provides the #cleo command-line application that
    #ApplicationPlugin#s register their commands to."""

    #: The cleo application to which new commands can be registered via #ApplicationPlugin#s.
    cleo: CleoApplication

    def __init__(self, directory: Path | None = None, name: str = "docpatch", version: str = __version__) -> None:
        self._directory = directory or Path.cwd()
        self._project: Project | None = None
        self._plugins_loaded = False
        self.cleo = CleoApplication(self._cleo_init, name, version)

    @property
    def project(self) -> Project:
        """Return the documentation project in the application directory. It is created lazily, so that commands
        that do not need it do not fail on a broken configuration."""

        from docpatch.project import Project

        if self._project is None:
            self._project = Project(self._directory)
        return self._project

    def load_plugins(self) -> None:
        """Loads all application plugins (see #ApplicationPlugin) from the `docpatch.plugins.application` entrypoint
        group and activates them."""

        from docpatch.plugins import ApplicationPlugin
        from docpatch.util.plugins import iter_entrypoints

        assert not self._plugins_loaded
        self._plugins_loaded = True

        logger.debug("Loading application plugins")

        for plugin_name, loader in iter_entrypoints(ApplicationPlugin):  # type: ignore[type-abstract]
            try:
                plugin = loader()(self)
            except Exception:
                logger.exception("Could not load plugin <subj>%s</subj> due to an exception", plugin_name)
            else:
                plugin_config = plugin.load_configuration(self)
                plugin.activate(self, plugin_config)

    def _cleo_init(self, io: IO) -> None:
        self.load_plugins()

    def run(self) -> None:
        """Loads and activates application plugins and then invokes the CLI."""

        self.cleo.run()
