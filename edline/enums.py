"""Core value types: signals, edit commands, editor events and raw key events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Union

# Characters Unicode classes as White_Space.
_WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    + "".join(chr(code) for code in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000"
)


def _is_whitespace(char: str) -> bool:
    return char in _WHITESPACE


def _check_arg(spec: str, value: object) -> None:
    if spec == "char":
        if not isinstance(value, str) or len(value) != 1:
            raise TypeError(f"expected a single character, got {value!r}")
    elif spec == "str":
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {value!r}")
    elif spec == "int":
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"expected a non-negative integer, got {value}")
    elif spec == "u16":
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected an integer, got {value!r}")
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"value {value} does not fit in 16 bits")


def _check_args(kind: enum.Enum, args: tuple, specs: tuple[str, ...]) -> None:
    if len(args) != len(specs):
        raise TypeError(f"{kind.value} takes {len(specs)} argument(s), got {len(args)}")
    for spec, value in zip(specs, args):
        _check_arg(spec, value)


class _Tagged:
    """Immutable value made of a kind and its positional arguments."""

    __slots__ = ("kind", "args")

    def __init__(self, kind, *args) -> None:
        self._validate(kind, args)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "args", tuple(args))

    def _validate(self, kind, args: tuple) -> None:
        raise NotImplementedError

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.kind == other.kind and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.kind, self.args))

    def __repr__(self) -> str:
        inner = ", ".join([self.kind.name, *(repr(arg) for arg in self.args)])
        return f"{type(self).__name__}({inner})"


class SignalKind(enum.Enum):
    """Ways a line read can end."""

    SUCCESS = "Success"
    CTRL_C = "CtrlC"
    CTRL_D = "CtrlD"


@dataclass(frozen=True)
class Signal:
    """Result of reading a line; ``content`` is set only on success."""

    kind: SignalKind
    content: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is SignalKind.SUCCESS:
            if not isinstance(self.content, str):
                raise TypeError("a successful signal carries the entered text")
        elif self.content is not None:
            raise ValueError(f"{self.kind.value} carries no content")


class EditCommandKind(enum.Enum):
    """Editing actions that can be bound to keys."""

    MOVE_TO_START = "MoveToStart"
    MOVE_TO_LINE_START = "MoveToLineStart"
    MOVE_TO_END = "MoveToEnd"
    MOVE_TO_LINE_END = "MoveToLineEnd"
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    MOVE_WORD_LEFT = "MoveWordLeft"
    MOVE_BIG_WORD_LEFT = "MoveBigWordLeft"
    MOVE_WORD_RIGHT = "MoveWordRight"
    MOVE_WORD_RIGHT_START = "MoveWordRightStart"
    MOVE_BIG_WORD_RIGHT_START = "MoveBigWordRightStart"
    MOVE_WORD_RIGHT_END = "MoveWordRightEnd"
    MOVE_BIG_WORD_RIGHT_END = "MoveBigWordRightEnd"
    MOVE_TO_POSITION = "MoveToPosition"
    INSERT_CHAR = "InsertChar"
    INSERT_STRING = "InsertString"
    INSERT_NEWLINE = "InsertNewline"
    REPLACE_CHAR = "ReplaceChar"
    REPLACE_CHARS = "ReplaceChars"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    CUT_CHAR = "CutChar"
    BACKSPACE_WORD = "BackspaceWord"
    DELETE_WORD = "DeleteWord"
    CLEAR = "Clear"
    CLEAR_TO_LINE_END = "ClearToLineEnd"
    COMPLETE = "Complete"
    CUT_CURRENT_LINE = "CutCurrentLine"
    CUT_FROM_START = "CutFromStart"
    CUT_FROM_LINE_START = "CutFromLineStart"
    CUT_TO_END = "CutToEnd"
    CUT_TO_LINE_END = "CutToLineEnd"
    CUT_WORD_LEFT = "CutWordLeft"
    CUT_BIG_WORD_LEFT = "CutBigWordLeft"
    CUT_WORD_RIGHT = "CutWordRight"
    CUT_BIG_WORD_RIGHT = "CutBigWordRight"
    CUT_WORD_RIGHT_TO_NEXT = "CutWordRightToNext"
    CUT_BIG_WORD_RIGHT_TO_NEXT = "CutBigWordRightToNext"
    PASTE_CUT_BUFFER_BEFORE = "PasteCutBufferBefore"
    PASTE_CUT_BUFFER_AFTER = "PasteCutBufferAfter"
    UPPERCASE_WORD = "UppercaseWord"
    LOWERCASE_WORD = "LowercaseWord"
    CAPITALIZE_CHAR = "CapitalizeChar"
    SWITCHCASE_CHAR = "SwitchcaseChar"
    SWAP_WORDS = "SwapWords"
    SWAP_GRAPHEMES = "SwapGraphemes"
    UNDO = "Undo"
    REDO = "Redo"
    CUT_RIGHT_UNTIL = "CutRightUntil"
    CUT_RIGHT_BEFORE = "CutRightBefore"
    MOVE_RIGHT_UNTIL = "MoveRightUntil"
    MOVE_RIGHT_BEFORE = "MoveRightBefore"
    CUT_LEFT_UNTIL = "CutLeftUntil"
    CUT_LEFT_BEFORE = "CutLeftBefore"
    MOVE_LEFT_UNTIL = "MoveLeftUntil"
    MOVE_LEFT_BEFORE = "MoveLeftBefore"


class EditType(enum.Enum):
    """Groups of edit commands, used to decide undo behaviour."""

    MOVE_CURSOR = "MoveCursor"
    UNDO_REDO = "UndoRedo"
    EDIT_TEXT = "EditText"


_EK = EditCommandKind

_EDIT_ARGS: dict[EditCommandKind, tuple[str, ...]] = {
    _EK.MOVE_TO_POSITION: ("int",),
    _EK.INSERT_CHAR: ("char",),
    _EK.INSERT_STRING: ("str",),
    _EK.REPLACE_CHAR: ("char",),
    _EK.REPLACE_CHARS: ("int", "str"),
    _EK.CUT_RIGHT_UNTIL: ("char",),
    _EK.CUT_RIGHT_BEFORE: ("char",),
    _EK.MOVE_RIGHT_UNTIL: ("char",),
    _EK.MOVE_RIGHT_BEFORE: ("char",),
    _EK.CUT_LEFT_UNTIL: ("char",),
    _EK.CUT_LEFT_BEFORE: ("char",),
    _EK.MOVE_LEFT_UNTIL: ("char",),
    _EK.MOVE_LEFT_BEFORE: ("char",),
}

_EDIT_DISPLAY: dict[EditCommandKind, str] = {
    _EK.MOVE_TO_POSITION: "MoveToPosition  Value: <int>",
    _EK.INSERT_CHAR: "InsertChar  Value: <char>",
    _EK.INSERT_STRING: "InsertString Value: <string>",
    _EK.REPLACE_CHAR: "ReplaceChar <char>",
    _EK.REPLACE_CHARS: "ReplaceChars <int> <string>",
    _EK.CUT_RIGHT_UNTIL: "CutRightUntil Value: <char>",
    _EK.CUT_RIGHT_BEFORE: "CutRightBefore Value: <char>",
    _EK.MOVE_RIGHT_UNTIL: "MoveRightUntil Value: <char>",
    _EK.MOVE_RIGHT_BEFORE: "MoveRightBefore Value: <char>",
    _EK.CUT_LEFT_UNTIL: "CutLeftUntil Value: <char>",
    _EK.CUT_LEFT_BEFORE: "CutLeftBefore Value: <char>",
    _EK.MOVE_LEFT_UNTIL: "MoveLeftUntil Value: <char>",
    _EK.MOVE_LEFT_BEFORE: "MoveLeftBefore Value: <char>",
}

_MOVE_KINDS = frozenset(
    {
        _EK.MOVE_TO_START,
        _EK.MOVE_TO_END,
        _EK.MOVE_TO_LINE_START,
        _EK.MOVE_TO_LINE_END,
        _EK.MOVE_TO_POSITION,
        _EK.MOVE_LEFT,
        _EK.MOVE_RIGHT,
        _EK.MOVE_WORD_LEFT,
        _EK.MOVE_BIG_WORD_LEFT,
        _EK.MOVE_WORD_RIGHT,
        _EK.MOVE_WORD_RIGHT_START,
        _EK.MOVE_BIG_WORD_RIGHT_START,
        _EK.MOVE_WORD_RIGHT_END,
        _EK.MOVE_BIG_WORD_RIGHT_END,
        _EK.MOVE_RIGHT_UNTIL,
        _EK.MOVE_RIGHT_BEFORE,
        _EK.MOVE_LEFT_UNTIL,
        _EK.MOVE_LEFT_BEFORE,
    }
)

_UNDO_REDO_KINDS = frozenset({_EK.UNDO, _EK.REDO})


class EditCommand(_Tagged):
    """An editing action with its arguments, e.g. ``EditCommand(EditCommandKind.INSERT_CHAR, "a")``."""

    __slots__ = ()

    def _validate(self, kind, args: tuple) -> None:
        if not isinstance(kind, EditCommandKind):
            raise TypeError(f"expected an EditCommandKind, got {kind!r}")
        _check_args(kind, args, _EDIT_ARGS.get(kind, ()))

    def edit_type(self) -> EditType:
        """Classify the command for undo grouping."""
        if self.kind in _MOVE_KINDS:
            return EditType.MOVE_CURSOR
        if self.kind in _UNDO_REDO_KINDS:
            return EditType.UNDO_REDO
        return EditType.EDIT_TEXT

    def __str__(self) -> str:
        return _EDIT_DISPLAY.get(self.kind, self.kind.value)


class UndoKind(enum.Enum):
    """Kinds of line changes as seen by the undo stack."""

    INSERT_CHARACTER = "InsertCharacter"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    MOVE_CURSOR = "MoveCursor"
    HISTORY_NAVIGATION = "HistoryNavigation"
    CREATE_UNDO_POINT = "CreateUndoPoint"
    UNDO_REDO = "UndoRedo"


@dataclass(frozen=True)
class UndoBehavior:
    """Tag of a line change; ``char`` holds the inserted or deleted character."""

    kind: UndoKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is UndoKind.INSERT_CHARACTER:
            _check_arg("char", self.char)
        elif self.kind in (UndoKind.BACKSPACE, UndoKind.DELETE):
            if self.char is not None:
                _check_arg("char", self.char)
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} carries no character")

    def create_undo_point_after(self, previous: UndoBehavior) -> bool:
        """Whether this change starts a new undo set after ``previous``."""
        if self.kind is UndoKind.MOVE_CURSOR:
            return False
        if self.kind is previous.kind:
            kind = self.kind
            if kind is UndoKind.HISTORY_NAVIGATION:
                return False
            if kind is UndoKind.INSERT_CHARACTER:
                return previous.char in ("\n", "\r") or (
                    not _is_whitespace(previous.char) and _is_whitespace(self.char)
                )
            if kind in (UndoKind.BACKSPACE, UndoKind.DELETE):
                if previous.char is None or self.char is None:
                    return False
                return self.char in ("\n", "\r") or (
                    _is_whitespace(previous.char) and not _is_whitespace(self.char)
                )
        return True


class EventKind(enum.Enum):
    """Actions the line editor understands."""

    NONE = "None"
    HISTORY_HINT_COMPLETE = "HistoryHintComplete"
    HISTORY_HINT_WORD_COMPLETE = "HistoryHintWordComplete"
    CTRL_D = "CtrlD"
    CTRL_C = "CtrlC"
    CLEAR_SCREEN = "ClearScreen"
    CLEAR_SCROLLBACK = "ClearScrollback"
    ENTER = "Enter"
    SUBMIT = "Submit"
    SUBMIT_OR_NEWLINE = "SubmitOrNewline"
    ESC = "Esc"
    MOUSE = "Mouse"
    RESIZE = "Resize"
    EDIT = "Edit"
    REPAINT = "Repaint"
    PREVIOUS_HISTORY = "PreviousHistory"
    UP = "Up"
    DOWN = "Down"
    RIGHT = "Right"
    LEFT = "Left"
    NEXT_HISTORY = "NextHistory"
    SEARCH_HISTORY = "SearchHistory"
    MULTIPLE = "Multiple"
    UNTIL_FOUND = "UntilFound"
    MENU = "Menu"
    MENU_NEXT = "MenuNext"
    MENU_PREVIOUS = "MenuPrevious"
    MENU_UP = "MenuUp"
    MENU_DOWN = "MenuDown"
    MENU_LEFT = "MenuLeft"
    MENU_RIGHT = "MenuRight"
    MENU_PAGE_NEXT = "MenuPageNext"
    MENU_PAGE_PREVIOUS = "MenuPagePrevious"
    EXECUTE_HOST_COMMAND = "ExecuteHostCommand"
    OPEN_EDITOR = "OpenEditor"


_EVENT_ARGS: dict[EventKind, tuple[str, ...]] = {
    EventKind.RESIZE: ("u16", "u16"),
    EventKind.MENU: ("str",),
    EventKind.EXECUTE_HOST_COMMAND: ("str",),
}

_EVENT_DISPLAY: dict[EventKind, str] = {
    EventKind.RESIZE: "Resize <int> <int>",
    EventKind.EDIT: "Edit: <EditCommand> or Edit: <EditCommand> value: <string>",
    EventKind.MULTIPLE: "Multiple[ { ReedLineEvents, } ]",
    EventKind.UNTIL_FOUND: "UntilFound [ { ReedLineEvents, } ]",
    EventKind.MENU: "Menu Name: <string>",
    EventKind.EXECUTE_HOST_COMMAND: "ExecuteHostCommand",
}


class ReedlineEvent(_Tagged):
    """An editor action; list-carrying kinds take their items as arguments."""

    __slots__ = ()

    def _validate(self, kind, args: tuple) -> None:
        if not isinstance(kind, EventKind):
            raise TypeError(f"expected an EventKind, got {kind!r}")
        if kind is EventKind.EDIT:
            for arg in args:
                if not isinstance(arg, EditCommand):
                    raise TypeError(f"Edit takes EditCommand items, got {arg!r}")
        elif kind in (EventKind.MULTIPLE, EventKind.UNTIL_FOUND):
            for arg in args:
                if not isinstance(arg, ReedlineEvent):
                    raise TypeError(f"{kind.value} takes ReedlineEvent items, got {arg!r}")
        else:
            _check_args(kind, args, _EVENT_ARGS.get(kind, ()))

    @classmethod
    def edit(cls, commands: Iterable[EditCommand]) -> ReedlineEvent:
        """Run these commands in the editor."""
        return cls(EventKind.EDIT, *commands)

    @classmethod
    def multiple(cls, events: Iterable[ReedlineEvent]) -> ReedlineEvent:
        """Handle every event in turn."""
        return cls(EventKind.MULTIPLE, *events)

    @classmethod
    def until_found(cls, events: Iterable[ReedlineEvent]) -> ReedlineEvent:
        """Try the events in turn until one applies."""
        return cls(EventKind.UNTIL_FOUND, *events)

    @classmethod
    def resize(cls, width: int, height: int) -> ReedlineEvent:
        """Terminal resized to ``width`` by ``height``."""
        return cls(EventKind.RESIZE, width, height)

    @classmethod
    def menu(cls, name: str) -> ReedlineEvent:
        """Activate the menu called ``name``."""
        return cls(EventKind.MENU, name)

    @classmethod
    def host_command(cls, command: str) -> ReedlineEvent:
        """Return ``command`` straight to the host application."""
        return cls(EventKind.EXECUTE_HOST_COMMAND, command)

    def __str__(self) -> str:
        return _EVENT_DISPLAY.get(self.kind, self.kind.value)


@dataclass(frozen=True)
class EventStatus:
    """Outcome of handling an event: ``handled``, ``inapplicable`` or ``exits`` with a signal."""

    kind: str
    signal: Optional[Signal] = None

    HANDLED: ClassVar[EventStatus]
    INAPPLICABLE: ClassVar[EventStatus]

    def __post_init__(self) -> None:
        if self.kind == "exits":
            if not isinstance(self.signal, Signal):
                raise TypeError("an exiting status carries a Signal")
        elif self.kind in ("handled", "inapplicable"):
            if self.signal is not None:
                raise ValueError(f"status {self.kind!r} carries no signal")
        else:
            raise ValueError(f"unknown event status {self.kind!r}")


EventStatus.HANDLED = EventStatus("handled")
EventStatus.INAPPLICABLE = EventStatus("inapplicable")


_NAMED_KEYS = frozenset(
    {
        "Backspace",
        "Enter",
        "Left",
        "Right",
        "Up",
        "Down",
        "Home",
        "End",
        "PageUp",
        "PageDown",
        "Tab",
        "BackTab",
        "Delete",
        "Insert",
        "Null",
        "Esc",
    }
)


@dataclass(frozen=True)
class KeyCode:
    """A key: a named key such as ``KeyCode("Enter")`` or ``KeyCode("Char", "a")``."""

    name: str
    char: Optional[str] = None

    BACKSPACE: ClassVar[KeyCode]
    ENTER: ClassVar[KeyCode]
    LEFT: ClassVar[KeyCode]
    RIGHT: ClassVar[KeyCode]
    UP: ClassVar[KeyCode]
    DOWN: ClassVar[KeyCode]
    HOME: ClassVar[KeyCode]
    END: ClassVar[KeyCode]
    PAGE_UP: ClassVar[KeyCode]
    PAGE_DOWN: ClassVar[KeyCode]
    TAB: ClassVar[KeyCode]
    BACK_TAB: ClassVar[KeyCode]
    DELETE: ClassVar[KeyCode]
    INSERT: ClassVar[KeyCode]
    NULL: ClassVar[KeyCode]
    ESC: ClassVar[KeyCode]

    def __post_init__(self) -> None:
        if self.name == "Char":
            _check_arg("char", self.char)
        elif self.name in _NAMED_KEYS:
            if self.char is not None:
                raise ValueError(f"key {self.name!r} carries no character")
        else:
            raise ValueError(f"unknown key {self.name!r}")


KeyCode.BACKSPACE = KeyCode("Backspace")
KeyCode.ENTER = KeyCode("Enter")
KeyCode.LEFT = KeyCode("Left")
KeyCode.RIGHT = KeyCode("Right")
KeyCode.UP = KeyCode("Up")
KeyCode.DOWN = KeyCode("Down")
KeyCode.HOME = KeyCode("Home")
KeyCode.END = KeyCode("End")
KeyCode.PAGE_UP = KeyCode("PageUp")
KeyCode.PAGE_DOWN = KeyCode("PageDown")
KeyCode.TAB = KeyCode("Tab")
KeyCode.BACK_TAB = KeyCode("BackTab")
KeyCode.DELETE = KeyCode("Delete")
KeyCode.INSERT = KeyCode("Insert")
KeyCode.NULL = KeyCode("Null")
KeyCode.ESC = KeyCode("Esc")


class KeyModifiers(enum.Flag):
    """Modifier keys held during a key press."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8
    HYPER = 16
    META = 32


class KeyEventKind(enum.Enum):
    """Whether a key was pressed, repeated or released."""

    PRESS = "Press"
    REPEAT = "Repeat"
    RELEASE = "Release"


@dataclass(frozen=True)
class KeyEvent:
    """A key press with its modifiers."""

    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a terminal cell."""

    column: int = 0
    row: int = 0


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class FocusGained:
    """The terminal gained focus."""


@dataclass(frozen=True)
class FocusLost:
    """The terminal lost focus."""


@dataclass(frozen=True)
class PasteEvent:
    """Text pasted in bracketed-paste mode."""

    text: str


TerminalEvent = Union[KeyEvent, MouseEvent, ResizeEvent, FocusGained, FocusLost, PasteEvent]


@dataclass(frozen=True)
class ReedlineRawEvent:
    """A terminal event that is never a key release; repeats count as presses."""

    event: TerminalEvent

    @classmethod
    def convert_from(cls, event: TerminalEvent) -> Optional[ReedlineRawEvent]:
        """Wrap ``event``; return None for key releases."""
        if isinstance(event, KeyEvent):
            if event.kind is KeyEventKind.RELEASE:
                return None
            if event.kind is KeyEventKind.REPEAT:
                return cls(KeyEvent(event.code, event.modifiers, KeyEventKind.PRESS))
        return cls(event)