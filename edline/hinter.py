"""Inline hints taken from the history, shown after the cursor."""

from __future__ import annotations

import abc
from typing import Any, Optional, Protocol

from edline.enums import _is_whitespace
from edline.highlighter import Color, Style


class PrefixHistory(Protocol):
    """What the default hinter needs from a history."""

    def session(self) -> Any:
        """The current session id, or None."""

    def last_with_prefix(self, prefix: str, session: Any) -> Optional[str]:
        """The most recent command line starting with ``prefix``, or None."""


class Hinter(abc.ABC):
    """Produces the hint for the current line and position."""

    @abc.abstractmethod
    def handle(self, line: str, pos: int, history: PrefixHistory, use_ansi_coloring: bool) -> str:
        """Compute the hint and return it formatted for display."""

    @abc.abstractmethod
    def complete_hint(self) -> str:
        """The current hint without formatting."""

    @abc.abstractmethod
    def next_hint_token(self) -> str:
        """The first token of the hint, for completing it word by word."""


class DefaultHinter(Hinter):
    """Suggests the rest of the most recent history entry that starts with the line."""

    def __init__(self, style: Optional[Style] = None, min_chars: int = 1) -> None:
        self.style = style if style is not None else Style(foreground=Color.LIGHT_GRAY)
        self.min_chars = min_chars
        self.current_hint = ""

    def handle(self, line: str, pos: int, history: PrefixHistory, use_ansi_coloring: bool) -> str:
        self.current_hint = ""
        if len(line) >= self.min_chars:
            entry = history.last_with_prefix(line, history.session())
            if entry is not None:
                self.current_hint = _remainder(entry, line)
        if use_ansi_coloring and self.current_hint:
            return self.style.paint(self.current_hint)
        return self.current_hint

    def complete_hint(self) -> str:
        return self.current_hint

    def next_hint_token(self) -> str:
        token = []
        reached_content = False
        for char in self.current_hint:
            if _is_whitespace(char):
                if reached_content:
                    break
            else:
                reached_content = True
            token.append(char)
        return "".join(token)

    def with_style(self, style: Style) -> DefaultHinter:
        """Set the style the hint is painted with."""
        self.style = style
        return self

    def with_min_chars(self, min_chars: int) -> DefaultHinter:
        """Set how many characters the line needs before hints appear."""
        self.min_chars = min_chars
        return self


def _remainder(entry: str, line: str) -> str:
    """What follows ``line``'s byte length in ``entry``; empty if that splits a character."""
    encoded = entry.encode()
    start = len(line.encode())
    if start > len(encoded):
        return ""
    try:
        return encoded[start:].decode()
    except UnicodeDecodeError:
        return ""