""" ANSI terminal styling for text decorated with HTML-style tags, e.g. `<fg=cyan>file</fg>` or `<subj>x</subj>`. """

from __future__ import annotations

import dataclasses
import enum
import re
import typing as t


class Attribute(enum.Enum):
    RESET = 0
    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4


class SgrColorName(enum.Enum):
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    GRAY = 8
    DEFAULT = 9


@dataclasses.dataclass(frozen=True)
class SgrColor:
    """Represents a color from the SGR space (see #SgrColorName)."""

    name: SgrColorName
    bright: bool = False

    def as_foreground(self) -> str:
        return str((90 if self.bright else 30) + self.name.value)

    def as_background(self) -> str:
        return str((100 if self.bright else 40) + self.name.value)


def parse_color(color_string: str) -> SgrColor:
    """Parses `<color_name>` or `bright <color_name>` (case insensitive, space or underline) into an #SgrColor."""

    name = color_string.strip().upper().replace(" ", "_")
    bright = name.startswith("BRIGHT_")
    if bright:
        name = name[7:]
    try:
        return SgrColor(SgrColorName[name], bright)
    except KeyError:
        raise ValueError(f"unrecognizable color string: {color_string!r}")


@dataclasses.dataclass
class Style:
    """A combination of foreground and background color and a list of attributes."""

    RESET: t.ClassVar[Style]

    fg: SgrColor | None = None
    bg: SgrColor | None = None
    attrs: list[Attribute] = dataclasses.field(default_factory=list)

    @classmethod
    def of(
        cls,
        fg: SgrColor | str | None = None,
        bg: SgrColor | str | None = None,
        attrs: t.Sequence[Attribute | str] | str | None = None,
    ) -> Style:
        """Create a style where all arguments may be given as strings. The *attrs* can be a comma-separated string."""

        if isinstance(fg, str):
            fg = parse_color(fg)
        if isinstance(bg, str):
            bg = parse_color(bg)
        if isinstance(attrs, str):
            attrs = [x.strip() for x in attrs.split(",") if x.strip()]
        return cls(fg, bg, [Attribute[a.upper()] if isinstance(a, str) else a for a in attrs or ()])

    def to_escape_sequence(self) -> str:
        seq = []
        if self.fg:
            seq.append(self.fg.as_foreground())
        if self.bg:
            seq.append(self.bg.as_background())
        seq.extend(str(attr.value) for attr in self.attrs)
        return "\033[" + ";".join(seq) + "m"


Style.RESET = Style.of(attrs="reset")


class StyleManager:
    """Registry of named styles that formats text containing HTML-style tags."""

    TAG_EXPR = r"<([^>=/]+)([^>]*)>(.*?)</\1>"

    def __init__(self) -> None:
        self._styles: dict[str, Style] = {}

    def add_style(
        self,
        name: str,
        fg: SgrColor | str | None = None,
        bg: SgrColor | str | None = None,
        attrs: list[Attribute | str] | str | None = None,
    ) -> None:
        self._styles[name] = Style.of(fg, bg, attrs)

    def parse_style(self, style_string: str, safe: bool = False) -> Style:
        """Parses the contents of an opening tag, e.g. `fg=bright red;attr=bold` or the name of a registered style."""

        style = Style()
        for part in style_string.split(";"):
            try:
                if part.startswith("fg="):
                    style = Style(parse_color(part[3:]), style.bg, style.attrs)
                elif part.startswith("bg="):
                    style = Style(style.fg, parse_color(part[3:]), style.attrs)
                elif part.startswith("attr="):
                    style = Style(style.fg, style.bg, style.attrs + [Attribute[part[5:].upper()]])
                else:
                    style = self._styles[part]
            except (ValueError, KeyError):
                if not safe:
                    raise
        return style

    def format(self, text: str, safe: bool = False, repl: t.Callable[[str, str], str] | None = None) -> str:
        """Replaces tags in *text* with terminal escape sequences. With *safe*, unknown styles are ignored. If *repl*
        is given, it is called with the style string and the tag contents instead."""

        def _regex_sub(m: re.Match) -> str:
            style_string = m.group(1) + m.group(2)
            content = m.group(3)
            if repl is not None:
                return repl(style_string, content)
            style = self.parse_style(style_string, safe)
            return style.to_escape_sequence() + content + Style.RESET.to_escape_sequence()

        # Nested tags are resolved from the inside out, one level per pass.
        for _ in range(15):
            new_text = re.sub(self.TAG_EXPR, _regex_sub, text, flags=re.S | re.M)
            if new_text == text:
                break
            text = new_text
        return text

    @classmethod
    def strip_tags(cls, text: str) -> str:
        return cls().format(text, True, lambda _, s: s)
