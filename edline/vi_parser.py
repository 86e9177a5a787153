"""Parsing of vi normal-mode key sequences into editor events."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, Optional

from more_itertools import peekable

from edline.enums import EventKind, ReedlineEvent
from edline.vi_command import Command, CommandKind, parse_command
from edline.vi_motion import Motion, ParseResult, ParseStatus, ReedlineOption, parse_motion

_DIGITS = "0123456789"

_INSERT_WITHOUT_MOTION = frozenset(
    {
        CommandKind.ENTER_VI_INSERT,
        CommandKind.ENTER_VI_APPEND,
        CommandKind.CHANGE_TO_LINE_END,
        CommandKind.APPEND_TO_END,
        CommandKind.PREPEND_TO_START,
        CommandKind.REWRITE_CURRENT_LINE,
        CommandKind.SUBSTITUTE_CHAR_WITH_INSERT,
        CommandKind.HISTORY_SEARCH,
    }
)


def _none_event() -> ReedlineEvent:
    return ReedlineEvent(EventKind.NONE)


@dataclass(frozen=True)
class ParsedViSequence:
    """A vi sequence: ``[multiplier] [command] [count] motion``."""

    multiplier: Optional[int]
    command: Optional[Command]
    count: Optional[int]
    motion: ParseResult[Motion]

    def is_valid(self) -> bool:
        """Whether the sequence can still become a meaningful action."""
        return not self.motion.is_invalid()

    def is_complete(self) -> bool:
        """Whether the sequence is ready to be turned into an event."""
        status = self.motion.status
        command = self.command
        if command is None:
            return status is ParseStatus.VALID
        if command.kind is CommandKind.INCOMPLETE:
            return False
        if status is ParseStatus.VALID:
            return True
        if status is ParseStatus.INCOMPLETE:
            return not command.requires_motion()
        return False

    def _total_multiplier(self) -> int:
        # Vim only considers the product of multiplier and count.
        return (self.multiplier or 1) * (self.count or 1)

    def _apply_multiplier(self, raw: Optional[list[ReedlineOption]]) -> ReedlineEvent:
        if raw is None:
            return _none_event()
        repeated = itertools.chain.from_iterable(itertools.repeat(raw, self._total_multiplier()))
        events = [
            event
            for event in (option.into_reedline_event() for option in repeated)
            if event is not None
        ]
        if not events or _none_event() in events:
            return _none_event()
        return ReedlineEvent.multiple(events)

    def enters_insert_mode(self) -> bool:
        """Whether carrying out the sequence switches to insert mode."""
        if self.command is None:
            return False
        status = self.motion.status
        if status is ParseStatus.INCOMPLETE:
            return self.command.kind in _INSERT_WITHOUT_MOTION
        if status is ParseStatus.VALID:
            return self.command.kind is CommandKind.CHANGE
        return False

    def to_reedline_event(self, vi_state) -> ReedlineEvent:
        """The event for this sequence; commands are remembered on ``vi_state`` for ``.``."""
        command = self.command
        status = self.motion.status
        if command is not None and self.count is None and status is ParseStatus.INCOMPLETE:
            event = self._apply_multiplier(command.to_reedline(vi_state))
            self._remember(event, vi_state)
            return event
        if command is not None and status is ParseStatus.VALID:
            event = self._apply_multiplier(
                command.to_reedline_with_motion(self.motion.value, vi_state)
            )
            self._remember(event, vi_state)
            return event
        if command is None and status is ParseStatus.VALID:
            return self._apply_multiplier(self.motion.value.to_reedline(vi_state))
        return _none_event()

    @staticmethod
    def _remember(event: ReedlineEvent, vi_state) -> None:
        if event.kind is not EventKind.NONE:
            vi_state.previous = event


def _parse_number(stream: peekable) -> Optional[int]:
    first = stream.peek(None)
    if first is None or first == "0" or first not in _DIGITS:
        return None
    count = 0
    while (char := stream.peek(None)) is not None and char in _DIGITS:
        next(stream)
        count = count * 10 + int(char)
    return count


def parse(stream: Iterable[str]) -> ParsedViSequence:
    """Parse a vi sequence from a stream of characters, consuming what it uses."""
    if not isinstance(stream, peekable):
        stream = peekable(stream)
    multiplier = _parse_number(stream)
    command = parse_command(stream)
    count = _parse_number(stream)
    motion = parse_motion(stream, command.whole_line_char() if command is not None else None)
    return ParsedViSequence(multiplier, command, count, motion)


def parse_chars(chars: Iterable[str]) -> ParsedViSequence:
    """Parse a complete sequence of characters, such as ``"2dw"``."""
    return parse(peekable(iter(chars)))