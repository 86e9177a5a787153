"""Vi normal-mode commands and how they combine with motions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from more_itertools import peekable

from edline.enums import EditCommand, EditCommandKind, EventKind, ReedlineEvent
from edline.vi_motion import Motion, MotionKind, ReedlineOption, ViCharSearch


class CommandKind(enum.Enum):
    """Vi normal-mode commands."""

    INCOMPLETE = "Incomplete"
    DELETE = "Delete"
    DELETE_CHAR = "DeleteChar"
    REPLACE_CHAR = "ReplaceChar"
    SUBSTITUTE_CHAR_WITH_INSERT = "SubstituteCharWithInsert"
    PASTE_AFTER = "PasteAfter"
    PASTE_BEFORE = "PasteBefore"
    ENTER_VI_APPEND = "EnterViAppend"
    ENTER_VI_INSERT = "EnterViInsert"
    UNDO = "Undo"
    CHANGE_TO_LINE_END = "ChangeToLineEnd"
    DELETE_TO_END = "DeleteToEnd"
    APPEND_TO_END = "AppendToEnd"
    PREPEND_TO_START = "PrependToStart"
    REWRITE_CURRENT_LINE = "RewriteCurrentLine"
    CHANGE = "Change"
    HISTORY_SEARCH = "HistorySearch"
    SWITCHCASE = "Switchcase"
    REPEAT_LAST_ACTION = "RepeatLastAction"


_CK = CommandKind
_EK = EditCommandKind

_COMMAND_EDITS = {
    _CK.ENTER_VI_APPEND: _EK.MOVE_RIGHT,
    _CK.PASTE_AFTER: _EK.PASTE_CUT_BUFFER_AFTER,
    _CK.PASTE_BEFORE: _EK.PASTE_CUT_BUFFER_BEFORE,
    _CK.UNDO: _EK.UNDO,
    _CK.CHANGE_TO_LINE_END: _EK.CLEAR_TO_LINE_END,
    _CK.DELETE_TO_END: _EK.CUT_TO_LINE_END,
    _CK.APPEND_TO_END: _EK.MOVE_TO_LINE_END,
    _CK.PREPEND_TO_START: _EK.MOVE_TO_LINE_START,
    _CK.REWRITE_CURRENT_LINE: _EK.CUT_CURRENT_LINE,
    _CK.DELETE_CHAR: _EK.CUT_CHAR,
    _CK.SUBSTITUTE_CHAR_WITH_INSERT: _EK.CUT_CHAR,
    _CK.SWITCHCASE: _EK.SWITCHCASE_CHAR,
}

_COMMAND_EVENTS = {
    _CK.ENTER_VI_INSERT: EventKind.REPAINT,
    _CK.HISTORY_SEARCH: EventKind.SEARCH_HISTORY,
}

# Cuts shared by delete and change.
_MOTION_CUTS = {
    MotionKind.NEXT_WORD: _EK.CUT_WORD_RIGHT_TO_NEXT,
    MotionKind.NEXT_BIG_WORD: _EK.CUT_BIG_WORD_RIGHT_TO_NEXT,
    MotionKind.NEXT_WORD_END: _EK.CUT_WORD_RIGHT,
    MotionKind.NEXT_BIG_WORD_END: _EK.CUT_BIG_WORD_RIGHT,
    MotionKind.PREVIOUS_WORD: _EK.CUT_WORD_LEFT,
    MotionKind.PREVIOUS_BIG_WORD: _EK.CUT_BIG_WORD_LEFT,
    MotionKind.START: _EK.CUT_FROM_LINE_START,
    MotionKind.LEFT: _EK.BACKSPACE,
    MotionKind.RIGHT: _EK.DELETE,
}

_CHAR_SEARCHES = {
    MotionKind.RIGHT_UNTIL: ViCharSearch.to_right,
    MotionKind.RIGHT_BEFORE: ViCharSearch.till_right,
    MotionKind.LEFT_UNTIL: ViCharSearch.to_left,
    MotionKind.LEFT_BEFORE: ViCharSearch.till_left,
}

_SIMPLE_COMMANDS = {
    "d": _CK.DELETE,
    "p": _CK.PASTE_AFTER,
    "P": _CK.PASTE_BEFORE,
    "i": _CK.ENTER_VI_INSERT,
    "a": _CK.ENTER_VI_APPEND,
    "u": _CK.UNDO,
    "c": _CK.CHANGE,
    "x": _CK.DELETE_CHAR,
    "s": _CK.SUBSTITUTE_CHAR_WITH_INSERT,
    "?": _CK.HISTORY_SEARCH,
    "C": _CK.CHANGE_TO_LINE_END,
    "D": _CK.DELETE_TO_END,
    "I": _CK.PREPEND_TO_START,
    "A": _CK.APPEND_TO_END,
    "S": _CK.REWRITE_CURRENT_LINE,
    "~": _CK.SWITCHCASE,
    ".": _CK.REPEAT_LAST_ACTION,
}


def _edit(kind: EditCommandKind, *args) -> ReedlineOption:
    return ReedlineOption.edit(EditCommand(kind, *args))


@dataclass(frozen=True)
class Command:
    """A vi command; ``REPLACE_CHAR`` carries its replacement ``char``."""

    kind: CommandKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is CommandKind.REPLACE_CHAR:
            if not isinstance(self.char, str) or len(self.char) != 1:
                raise TypeError(f"ReplaceChar needs a single character, got {self.char!r}")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} carries no character")

    def whole_line_char(self) -> Optional[str]:
        """The character that, repeated, applies this command to the whole line."""
        if self.kind is CommandKind.DELETE:
            return "d"
        if self.kind is CommandKind.CHANGE:
            return "c"
        return None

    def requires_motion(self) -> bool:
        """Whether the command needs a motion to be complete."""
        return self.kind in (CommandKind.DELETE, CommandKind.CHANGE)

    def to_reedline(self, vi_state) -> list[ReedlineOption]:
        """The options this command produces without a motion."""
        kind = self.kind
        if kind in _COMMAND_EDITS:
            return [_edit(_COMMAND_EDITS[kind])]
        if kind in _COMMAND_EVENTS:
            return [ReedlineOption.event(ReedlineEvent(_COMMAND_EVENTS[kind]))]
        if kind is CommandKind.REPLACE_CHAR:
            return [_edit(_EK.REPLACE_CHAR, self.char)]
        if kind is CommandKind.REPEAT_LAST_ACTION:
            previous = vi_state.previous
            return [] if previous is None else [ReedlineOption.event(previous)]
        # Delete, Change and Incomplete need a motion to finish.
        return [ReedlineOption.INCOMPLETE]

    def to_reedline_with_motion(self, motion: Motion, vi_state) -> Optional[list[ReedlineOption]]:
        """The options for this command applied over ``motion``, or None if they do not combine."""
        if self.kind is CommandKind.DELETE:
            if motion.kind is MotionKind.END:
                return [_edit(_EK.CUT_TO_LINE_END)]
            if motion.kind is MotionKind.LINE:
                return [_edit(_EK.CUT_CURRENT_LINE)]
            return self._cut_over(motion, vi_state)
        if self.kind is CommandKind.CHANGE:
            if motion.kind is MotionKind.END:
                options = [_edit(_EK.CLEAR_TO_LINE_END)]
            elif motion.kind is MotionKind.LINE:
                options = [_edit(_EK.MOVE_TO_START), _edit(_EK.CLEAR_TO_LINE_END)]
            else:
                options = self._cut_over(motion, vi_state)
            if options is None:
                return None
            # Repaint so the switch to insert mode shows.
            return [*options, ReedlineOption.event(ReedlineEvent(EventKind.REPAINT))]
        return None

    @staticmethod
    def _cut_over(motion: Motion, vi_state) -> Optional[list[ReedlineOption]]:
        kind = motion.kind
        if kind in _MOTION_CUTS:
            return [_edit(_MOTION_CUTS[kind])]
        if kind in _CHAR_SEARCHES:
            search = _CHAR_SEARCHES[kind](motion.char)
            vi_state.last_char_search = search
            return [ReedlineOption.edit(search.to_cut())]
        if kind is MotionKind.REPLAY_CHAR_SEARCH:
            search = vi_state.last_char_search
            return None if search is None else [ReedlineOption.edit(search.to_cut())]
        if kind is MotionKind.REVERSE_CHAR_SEARCH:
            search = vi_state.last_char_search
            return None if search is None else [ReedlineOption.edit(search.reverse().to_cut())]
        # Up and Down do not combine with cutting commands.
        return None


def parse_command(stream: peekable) -> Optional[Command]:
    """Parse a command from a peekable stream of characters; None if the next one is no command."""
    char = stream.peek(None)
    if char is None:
        return None
    if char in _SIMPLE_COMMANDS:
        next(stream)
        return Command(_SIMPLE_COMMANDS[char])
    if char == "r":
        next(stream)
        replacement = next(stream, None)
        if replacement is None:
            return Command(CommandKind.INCOMPLETE)
        return Command(CommandKind.REPLACE_CHAR, replacement)
    return None