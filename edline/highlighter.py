"""Styled text and syntax highlighters for the edit buffer."""

from __future__ import annotations

import abc
import enum
import re
from dataclasses import dataclass, field
from typing import Optional

_RESET = "\x1b[0m"


class Color(enum.Enum):
    """Terminal colours, valued by their foreground SGR code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    PURPLE = 35
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    DEFAULT = 39
    DARK_GRAY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_PURPLE = 95
    LIGHT_MAGENTA = 95
    LIGHT_CYAN = 96
    LIGHT_GRAY = 97


@dataclass(frozen=True)
class Style:
    """Colours and text attributes applied when painting text."""

    foreground: Optional[Color] = None
    background: Optional[Color] = None
    bold: bool = False
    dimmed: bool = False
    italic: bool = False
    underline: bool = False
    reverse: bool = False
    strikethrough: bool = False

    def _codes(self) -> list[str]:
        flags = (
            (self.bold, "1"),
            (self.dimmed, "2"),
            (self.italic, "3"),
            (self.underline, "4"),
            (self.reverse, "7"),
            (self.strikethrough, "9"),
        )
        codes = [code for enabled, code in flags if enabled]
        if self.background is not None:
            codes.append(str(self.background.value + 10))
        if self.foreground is not None:
            codes.append(str(self.foreground.value))
        return codes

    def paint(self, text: str) -> str:
        """``text`` wrapped in the escape sequences for this style; plain styles add nothing."""
        codes = self._codes()
        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass
class StyledText:
    """A line as a sequence of styled pieces."""

    buffer: list[tuple[Style, str]] = field(default_factory=list)

    def push(self, style: Style, text: str) -> None:
        """Append a piece of text with its style."""
        self.buffer.append((style, text))

    def render_simple(self) -> str:
        """All pieces painted and joined, ignoring any cursor position."""
        return "".join(style.paint(text) for style, text in self.buffer)


class Highlighter(abc.ABC):
    """Turns the current buffer into styled text."""

    @abc.abstractmethod
    def highlight(self, line: str, cursor: int) -> StyledText:
        """Style ``line``; ``cursor`` is the insertion point."""


DEFAULT_BUFFER_MATCH_COLOR = Color.GREEN
DEFAULT_BUFFER_NEUTRAL_COLOR = Color.WHITE
DEFAULT_BUFFER_NOTMATCH_COLOR = Color.RED


class ExampleHighlighter(Highlighter):
    """Highlights the longest known command found in the line."""

    def __init__(self, external_commands: Optional[list[str]] = None) -> None:
        self.external_commands = list(external_commands or [])
        self.match_color = DEFAULT_BUFFER_MATCH_COLOR
        self.notmatch_color = DEFAULT_BUFFER_NOTMATCH_COLOR
        self.neutral_color = DEFAULT_BUFFER_NEUTRAL_COLOR

    def highlight(self, line: str, cursor: int = 0) -> StyledText:
        styled = StyledText()
        matches = [command for command in self.external_commands if command in line]
        if matches:
            longest = ""
            for item in matches:
                if len(item.encode()) > len(longest.encode()):
                    longest = item
            before, after = ("", line) if longest == "" else line.split(longest, 1)
            styled.push(Style(foreground=self.neutral_color), before)
            styled.push(Style(foreground=self.match_color), longest)
            styled.push(Style(foreground=self.neutral_color, bold=True), after)
        elif not self.external_commands:
            styled.push(Style(foreground=self.neutral_color), line)
        else:
            styled.push(Style(foreground=self.notmatch_color), line)
        return styled

    def change_colors(self, match_color: Color, notmatch_color: Color, neutral_color: Color) -> None:
        """Use different colours for matches, non-matches and neutral text."""
        self.match_color = match_color
        self.notmatch_color = notmatch_color
        self.neutral_color = neutral_color


class SimpleMatchHighlighter(Highlighter):
    """Highlights every exact match of a query; matches are green by default."""

    def __init__(self, query: str = "") -> None:
        self.query = query
        self.neutral_style = Style()
        self.match_style = Style(foreground=Color.GREEN)

    def highlight(self, line: str, cursor: int = 0) -> StyledText:
        styled = StyledText()
        if not self.query:
            styled.push(self.neutral_style, line)
            return styled
        next_idx = 0
        for found in re.finditer(re.escape(self.query), line):
            if found.start() != next_idx:
                styled.push(self.neutral_style, line[next_idx : found.start()])
            styled.push(self.match_style, found.group())
            next_idx = found.end()
        if next_idx != len(line):
            styled.push(self.neutral_style, line[next_idx:])
        return styled

    def with_query(self, query: str) -> SimpleMatchHighlighter:
        """Set the string to match."""
        self.query = query
        return self

    def with_match_style(self, match_style: Style) -> SimpleMatchHighlighter:
        """Set the style of matches."""
        self.match_style = match_style
        return self

    def with_neutral_style(self, neutral_style: Style) -> SimpleMatchHighlighter:
        """Set the style of text that does not match."""
        self.neutral_style = neutral_style
        return self