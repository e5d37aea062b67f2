import logging

import pytest

from docpatch.util.logging import TerminalColorFormatter
from docpatch.util.terminal import SgrColor, SgrColorName, StyleManager, parse_color


def test__parse_color():
    assert parse_color("cyan") == SgrColor(SgrColorName.CYAN)
    assert parse_color("bright red") == SgrColor(SgrColorName.RED, True)
    assert parse_color("BRIGHT_BLACK") == SgrColor(SgrColorName.BLACK, True)
    with pytest.raises(ValueError):
        parse_color("no-such-color")


def test__StyleManager__format_replaces_nested_tags():
    manager = StyleManager()
    manager.add_style("subj", "blue")

    assert manager.format("<subj>a <fg=red>b</fg></subj>") == "\033[34ma \033[31mb\033[0m\033[0m"
    assert StyleManager.strip_tags("<subj>a <fg=red>b</fg></subj> c") == "a b c"


def test__TerminalColorFormatter__strips_tags_when_not_colored():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "Writing <subj>%s</subj>", ("config.toml",), None)

    assert TerminalColorFormatter("%(message)s", colored=False).format(record) == "Writing config.toml"
    assert TerminalColorFormatter("%(message)s").format(record) == "Writing \033[34mconfig.toml\033[0m"
