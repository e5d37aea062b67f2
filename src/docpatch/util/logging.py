""" Provides a logging formatter that understands color hints in the message and decorates it with ANSI escapes. """

from __future__ import annotations

import logging

import typing_extensions as te

from docpatch.util.terminal import StyleManager


def get_default_styles() -> StyleManager:
    manager = StyleManager()
    manager.add_style("info", "blue")
    manager.add_style("warning", "magenta")
    manager.add_style("error", "red")
    manager.add_style("critical", "bright red", None, "bold,underline")
    manager.add_style("subj", "blue")
    manager.add_style("obj", "yellow")
    manager.add_style("val", "cyan")
    return manager


class TerminalColorFormatter(logging.Formatter):
    """A formatter that enhances text decorated with HTML-style tags with ANSI terminal colors. With *colored* set to
    `False`, the tags are removed instead."""

    def __init__(self, fmt: str, colored: bool = True, styles: StyleManager | None = None) -> None:
        super().__init__(fmt)
        self.colored = colored
        self.styles = styles or get_default_styles()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.colored:
            return StyleManager.strip_tags(message)
        return self.styles.format(message, True)

    def install(self, target: te.Literal["tty", "notty"]) -> None:
        """Install the formatter on the stream handlers of the root logger that are attached to a TTY, or on all
        that are not attached to a TTY, depending on *target*."""

        for handler in logging.root.handlers:
            if not isinstance(handler, logging.StreamHandler):
                continue
            isatty = getattr(handler.stream, "isatty", lambda: False)()
            if isatty == (target == "tty"):
                handler.setFormatter(self)
