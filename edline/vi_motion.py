"""Vi motions, character searches and the parse results they share with commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Optional, TypeVar

from more_itertools import peekable

from edline.enums import EditCommand, EditCommandKind, EventKind, ReedlineEvent

T = TypeVar("T")


class ParseStatus(enum.Enum):
    """How far parsing a part of a vi sequence got."""

    VALID = "Valid"
    INCOMPLETE = "Incomplete"
    INVALID = "Invalid"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """A parsed value, or the reason there is none yet."""

    status: ParseStatus
    value: Optional[T] = None

    INCOMPLETE: ClassVar[ParseResult]
    INVALID: ClassVar[ParseResult]

    def __post_init__(self) -> None:
        if self.status is ParseStatus.VALID:
            if self.value is None:
                raise ValueError("a valid parse result carries a value")
        elif self.value is not None:
            raise ValueError(f"{self.status.value} parse result carries no value")

    @classmethod
    def valid(cls, value: T) -> ParseResult[T]:
        """A successfully parsed ``value``."""
        return cls(ParseStatus.VALID, value)

    def is_invalid(self) -> bool:
        """Whether the input cannot be parsed at all."""
        return self.status is ParseStatus.INVALID


ParseResult.INCOMPLETE = ParseResult(ParseStatus.INCOMPLETE)
ParseResult.INVALID = ParseResult(ParseStatus.INVALID)


@dataclass(frozen=True)
class ReedlineOption:
    """One step produced by a vi sequence: an event, an edit, or a marker of incompleteness."""

    kind: str
    value: Any = None

    INCOMPLETE: ClassVar[ReedlineOption]

    def __post_init__(self) -> None:
        if self.kind == "event":
            if not isinstance(self.value, ReedlineEvent):
                raise TypeError(f"expected a ReedlineEvent, got {self.value!r}")
        elif self.kind == "edit":
            if not isinstance(self.value, EditCommand):
                raise TypeError(f"expected an EditCommand, got {self.value!r}")
        elif self.kind == "incomplete":
            if self.value is not None:
                raise ValueError("an incomplete option carries no value")
        else:
            raise ValueError(f"unknown option kind {self.kind!r}")

    @classmethod
    def event(cls, event: ReedlineEvent) -> ReedlineOption:
        """An option that emits ``event``."""
        return cls("event", event)

    @classmethod
    def edit(cls, command: EditCommand) -> ReedlineOption:
        """An option that runs ``command``."""
        return cls("edit", command)

    def into_reedline_event(self) -> Optional[ReedlineEvent]:
        """The event this option stands for, or None if it is incomplete."""
        if self.kind == "event":
            return self.value
        if self.kind == "edit":
            return ReedlineEvent.edit([self.value])
        return None


ReedlineOption.INCOMPLETE = ReedlineOption("incomplete")


class MotionKind(enum.Enum):
    """Vi cursor motions."""

    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    NEXT_WORD = "NextWord"
    NEXT_BIG_WORD = "NextBigWord"
    NEXT_WORD_END = "NextWordEnd"
    NEXT_BIG_WORD_END = "NextBigWordEnd"
    PREVIOUS_WORD = "PreviousWord"
    PREVIOUS_BIG_WORD = "PreviousBigWord"
    LINE = "Line"
    START = "Start"
    END = "End"
    RIGHT_UNTIL = "RightUntil"
    RIGHT_BEFORE = "RightBefore"
    LEFT_UNTIL = "LeftUntil"
    LEFT_BEFORE = "LeftBefore"
    REPLAY_CHAR_SEARCH = "ReplayCharSearch"
    REVERSE_CHAR_SEARCH = "ReverseCharSearch"


_CHAR_MOTION_KINDS = frozenset(
    {
        MotionKind.RIGHT_UNTIL,
        MotionKind.RIGHT_BEFORE,
        MotionKind.LEFT_UNTIL,
        MotionKind.LEFT_BEFORE,
    }
)


class _SearchKind(enum.Enum):
    TO_RIGHT = "ToRight"
    TO_LEFT = "ToLeft"
    TILL_RIGHT = "TillRight"
    TILL_LEFT = "TillLeft"


_REVERSED = {
    _SearchKind.TO_RIGHT: _SearchKind.TO_LEFT,
    _SearchKind.TO_LEFT: _SearchKind.TO_RIGHT,
    _SearchKind.TILL_RIGHT: _SearchKind.TILL_LEFT,
    _SearchKind.TILL_LEFT: _SearchKind.TILL_RIGHT,
}

_MOVES = {
    _SearchKind.TO_RIGHT: EditCommandKind.MOVE_RIGHT_UNTIL,
    _SearchKind.TO_LEFT: EditCommandKind.MOVE_LEFT_UNTIL,
    _SearchKind.TILL_RIGHT: EditCommandKind.MOVE_RIGHT_BEFORE,
    _SearchKind.TILL_LEFT: EditCommandKind.MOVE_LEFT_BEFORE,
}

_CUTS = {
    _SearchKind.TO_RIGHT: EditCommandKind.CUT_RIGHT_UNTIL,
    _SearchKind.TO_LEFT: EditCommandKind.CUT_LEFT_UNTIL,
    _SearchKind.TILL_RIGHT: EditCommandKind.CUT_RIGHT_BEFORE,
    _SearchKind.TILL_LEFT: EditCommandKind.CUT_LEFT_BEFORE,
}


@dataclass(frozen=True)
class ViCharSearch:
    """A left or right motion to (``f``/``F``) or till (``t``/``T``) a character."""

    kind: _SearchKind
    char: str

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise TypeError(f"expected a single character, got {self.char!r}")

    @classmethod
    def to_right(cls, char: str) -> ViCharSearch:
        """``f``: move right onto ``char``."""
        return cls(_SearchKind.TO_RIGHT, char)

    @classmethod
    def to_left(cls, char: str) -> ViCharSearch:
        """``F``: move left onto ``char``."""
        return cls(_SearchKind.TO_LEFT, char)

    @classmethod
    def till_right(cls, char: str) -> ViCharSearch:
        """``t``: move right to just before ``char``."""
        return cls(_SearchKind.TILL_RIGHT, char)

    @classmethod
    def till_left(cls, char: str) -> ViCharSearch:
        """``T``: move left to just after ``char``."""
        return cls(_SearchKind.TILL_LEFT, char)

    def reverse(self) -> ViCharSearch:
        """The same search in the opposite direction, as used by ``,``."""
        return ViCharSearch(_REVERSED[self.kind], self.char)

    def to_move(self) -> EditCommand:
        """The edit command that moves the cursor for this search."""
        return EditCommand(_MOVES[self.kind], self.char)

    def to_cut(self) -> EditCommand:
        """The edit command that cuts the text covered by this search."""
        return EditCommand(_CUTS[self.kind], self.char)


_CHAR_SEARCH_FOR_MOTION = {
    MotionKind.RIGHT_UNTIL: ViCharSearch.to_right,
    MotionKind.RIGHT_BEFORE: ViCharSearch.till_right,
    MotionKind.LEFT_UNTIL: ViCharSearch.to_left,
    MotionKind.LEFT_BEFORE: ViCharSearch.till_left,
}


def _event(kind: EventKind) -> ReedlineEvent:
    return ReedlineEvent(kind)


_MOTION_EVENTS = {
    MotionKind.LEFT: lambda: ReedlineEvent.until_found(
        [_event(EventKind.MENU_LEFT), _event(EventKind.LEFT)]
    ),
    MotionKind.RIGHT: lambda: ReedlineEvent.until_found(
        [
            _event(EventKind.HISTORY_HINT_COMPLETE),
            _event(EventKind.MENU_RIGHT),
            _event(EventKind.RIGHT),
        ]
    ),
    MotionKind.UP: lambda: ReedlineEvent.until_found(
        [_event(EventKind.MENU_UP), _event(EventKind.UP)]
    ),
    MotionKind.DOWN: lambda: ReedlineEvent.until_found(
        [_event(EventKind.MENU_DOWN), _event(EventKind.DOWN)]
    ),
}

_MOTION_EDITS = {
    MotionKind.NEXT_WORD: EditCommandKind.MOVE_WORD_RIGHT_START,
    MotionKind.NEXT_BIG_WORD: EditCommandKind.MOVE_BIG_WORD_RIGHT_START,
    MotionKind.NEXT_WORD_END: EditCommandKind.MOVE_WORD_RIGHT_END,
    MotionKind.NEXT_BIG_WORD_END: EditCommandKind.MOVE_BIG_WORD_RIGHT_END,
    MotionKind.PREVIOUS_WORD: EditCommandKind.MOVE_WORD_LEFT,
    MotionKind.PREVIOUS_BIG_WORD: EditCommandKind.MOVE_BIG_WORD_LEFT,
    MotionKind.START: EditCommandKind.MOVE_TO_LINE_START,
    MotionKind.END: EditCommandKind.MOVE_TO_LINE_END,
}


@dataclass(frozen=True)
class Motion:
    """A vi motion; character searches carry their target ``char``."""

    kind: MotionKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind in _CHAR_MOTION_KINDS:
            if not isinstance(self.char, str) or len(self.char) != 1:
                raise TypeError(f"{self.kind.value} needs a single character, got {self.char!r}")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} carries no character")

    def to_reedline(self, vi_state) -> list[ReedlineOption]:
        """The options this motion produces on its own; records character searches on ``vi_state``."""
        kind = self.kind
        if kind in _MOTION_EVENTS:
            return [ReedlineOption.event(_MOTION_EVENTS[kind]())]
        if kind in _MOTION_EDITS:
            return [ReedlineOption.edit(EditCommand(_MOTION_EDITS[kind]))]
        if kind in _CHAR_SEARCH_FOR_MOTION:
            search = _CHAR_SEARCH_FOR_MOTION[kind](self.char)
            vi_state.last_char_search = search
            return [ReedlineOption.edit(search.to_move())]
        if kind is MotionKind.REPLAY_CHAR_SEARCH:
            search = vi_state.last_char_search
            return [] if search is None else [ReedlineOption.edit(search.to_move())]
        if kind is MotionKind.REVERSE_CHAR_SEARCH:
            search = vi_state.last_char_search
            return [] if search is None else [ReedlineOption.edit(search.reverse().to_move())]
        # A whole-line motion only makes sense after a command.
        return []


_SIMPLE_MOTIONS = {
    "h": MotionKind.LEFT,
    "l": MotionKind.RIGHT,
    "j": MotionKind.DOWN,
    "k": MotionKind.UP,
    "b": MotionKind.PREVIOUS_WORD,
    "B": MotionKind.PREVIOUS_BIG_WORD,
    "w": MotionKind.NEXT_WORD,
    "W": MotionKind.NEXT_BIG_WORD,
    "e": MotionKind.NEXT_WORD_END,
    "E": MotionKind.NEXT_BIG_WORD_END,
    "0": MotionKind.START,
    "^": MotionKind.START,
    "$": MotionKind.END,
    ";": MotionKind.REPLAY_CHAR_SEARCH,
    ",": MotionKind.REVERSE_CHAR_SEARCH,
}

_SEARCH_MOTIONS = {
    "f": MotionKind.RIGHT_UNTIL,
    "t": MotionKind.RIGHT_BEFORE,
    "F": MotionKind.LEFT_UNTIL,
    "T": MotionKind.LEFT_BEFORE,
}


def parse_motion(stream: peekable, command_char: Optional[str] = None) -> ParseResult[Motion]:
    """Parse a motion from a peekable stream of characters, consuming what it uses.

    ``command_char`` is the character that, repeated after its command, means the whole line.
    """
    char = stream.peek(None)
    if char is None:
        return ParseResult.INCOMPLETE
    if char in _SIMPLE_MOTIONS:
        next(stream)
        return ParseResult.valid(Motion(_SIMPLE_MOTIONS[char]))
    if char in _SEARCH_MOTIONS:
        next(stream)
        target = next(stream, None)
        if target is None:
            return ParseResult.INCOMPLETE
        return ParseResult.valid(Motion(_SEARCH_MOTIONS[char], target))
    if command_char is not None and char == command_char:
        next(stream)
        return ParseResult.valid(Motion(MotionKind.LINE))
    return ParseResult.INVALID