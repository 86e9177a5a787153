"""Key bindings, the edit-mode interface and cursor shape configuration."""

from __future__ import annotations

import abc
import enum
import types
from dataclasses import dataclass
from typing import Mapping, Optional

from edline.enums import (
    EditCommand,
    EditCommandKind,
    EventKind,
    KeyCode,
    KeyModifiers,
    ReedlineEvent,
    ReedlineRawEvent,
)


class PromptEditMode(enum.Enum):
    """Which edit mode the prompt indicator should show."""

    DEFAULT = "Default"
    EMACS = "Emacs"
    VI_NORMAL = "ViNormal"
    VI_INSERT = "ViInsert"


class EditMode(abc.ABC):
    """Style of turning raw terminal events into editor events."""

    @abc.abstractmethod
    def parse_event(self, event: ReedlineRawEvent) -> ReedlineEvent:
        """Translate a raw input event into an editor event."""

    @abc.abstractmethod
    def edit_mode(self) -> PromptEditMode:
        """What the prompt indicator should display."""


class CursorShape(enum.Enum):
    """Terminal cursor shapes, valued by the escape sequence that selects them."""

    DEFAULT_USER_SHAPE = "\x1b[0 q"
    BLINKING_BLOCK = "\x1b[1 q"
    STEADY_BLOCK = "\x1b[2 q"
    BLINKING_UNDERSCORE = "\x1b[3 q"
    STEADY_UNDERSCORE = "\x1b[4 q"
    BLINKING_BAR = "\x1b[5 q"
    STEADY_BAR = "\x1b[6 q"


@dataclass
class CursorConfig:
    """Cursor shape for each edit mode; None leaves the cursor unchanged."""

    vi_insert: Optional[CursorShape] = None
    vi_normal: Optional[CursorShape] = None
    emacs: Optional[CursorShape] = None


@dataclass(frozen=True)
class KeyCombination:
    """A key together with the modifiers held while pressing it."""

    modifier: KeyModifiers
    key_code: KeyCode


class Keybindings:
    """Mapping from key combinations to editor events."""

    def __init__(self, bindings: Optional[Mapping[KeyCombination, ReedlineEvent]] = None) -> None:
        self.bindings: dict[KeyCombination, ReedlineEvent] = dict(bindings or {})

    @classmethod
    def empty(cls) -> Keybindings:
        """A keybinding set with no bindings."""
        return cls()

    def add_binding(
        self, modifier: KeyModifiers, key_code: KeyCode, command: ReedlineEvent
    ) -> None:
        """Bind ``command`` to the key combination, replacing any earlier binding."""
        if command.kind is EventKind.UNTIL_FOUND and not command.args:
            raise ValueError("UntilFound should contain a series of potential events to handle")
        self.bindings[KeyCombination(modifier, key_code)] = command

    def find_binding(self, modifier: KeyModifiers, key_code: KeyCode) -> Optional[ReedlineEvent]:
        """The event bound to the key combination, or None."""
        return self.bindings.get(KeyCombination(modifier, key_code))

    def remove_binding(
        self, modifier: KeyModifiers, key_code: KeyCode
    ) -> Optional[ReedlineEvent]:
        """Remove a binding and return the event it was bound to, if any."""
        return self.bindings.pop(KeyCombination(modifier, key_code), None)

    def get_keybindings(self) -> Mapping[KeyCombination, ReedlineEvent]:
        """Read-only view of the assigned bindings."""
        return types.MappingProxyType(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __repr__(self) -> str:
        return f"Keybindings({len(self.bindings)} bindings)"


def _char(c: str) -> KeyCode:
    return KeyCode("Char", c)


def _cmd(kind: EditCommandKind) -> EditCommand:
    return EditCommand(kind)


def _event(kind: EventKind) -> ReedlineEvent:
    return ReedlineEvent(kind)


def edit_bind(command: EditCommand) -> ReedlineEvent:
    """An event that runs a single edit command."""
    return ReedlineEvent.edit([command])


def add_common_control_bindings(kb: Keybindings) -> None:
    """Esc, Ctrl-C, Ctrl-D, Ctrl-L, Ctrl-R and Ctrl-O."""
    km = KeyModifiers
    kb.add_binding(km.NONE, KeyCode.ESC, _event(EventKind.ESC))
    kb.add_binding(km.CONTROL, _char("c"), _event(EventKind.CTRL_C))
    kb.add_binding(km.CONTROL, _char("d"), _event(EventKind.CTRL_D))
    kb.add_binding(km.CONTROL, _char("l"), _event(EventKind.CLEAR_SCREEN))
    kb.add_binding(km.CONTROL, _char("r"), _event(EventKind.SEARCH_HISTORY))
    kb.add_binding(km.CONTROL, _char("o"), _event(EventKind.OPEN_EDITOR))


def add_common_navigation_bindings(kb: Keybindings) -> None:
    """Arrow keys, Home/End and their Ctrl variants."""
    km = KeyModifiers
    ek = EditCommandKind
    ev = EventKind
    up = ReedlineEvent.until_found([_event(ev.MENU_UP), _event(ev.UP)])
    down = ReedlineEvent.until_found([_event(ev.MENU_DOWN), _event(ev.DOWN)])
    left = ReedlineEvent.until_found([_event(ev.MENU_LEFT), _event(ev.LEFT)])
    right = ReedlineEvent.until_found(
        [_event(ev.HISTORY_HINT_COMPLETE), _event(ev.MENU_RIGHT), _event(ev.RIGHT)]
    )
    word_right = ReedlineEvent.until_found(
        [_event(ev.HISTORY_HINT_WORD_COMPLETE), edit_bind(_cmd(ek.MOVE_WORD_RIGHT))]
    )
    line_end = ReedlineEvent.until_found(
        [_event(ev.HISTORY_HINT_COMPLETE), edit_bind(_cmd(ek.MOVE_TO_LINE_END))]
    )

    kb.add_binding(km.NONE, KeyCode.UP, up)
    kb.add_binding(km.NONE, KeyCode.DOWN, down)
    kb.add_binding(km.NONE, KeyCode.LEFT, left)
    kb.add_binding(km.NONE, KeyCode.RIGHT, right)

    kb.add_binding(km.CONTROL, KeyCode.LEFT, edit_bind(_cmd(ek.MOVE_WORD_LEFT)))
    kb.add_binding(km.CONTROL, KeyCode.RIGHT, word_right)

    kb.add_binding(km.NONE, KeyCode.HOME, edit_bind(_cmd(ek.MOVE_TO_LINE_START)))
    kb.add_binding(km.CONTROL, _char("a"), edit_bind(_cmd(ek.MOVE_TO_LINE_START)))
    kb.add_binding(km.NONE, KeyCode.END, line_end)
    kb.add_binding(km.CONTROL, _char("e"), line_end)

    kb.add_binding(km.CONTROL, KeyCode.HOME, edit_bind(_cmd(ek.MOVE_TO_START)))
    kb.add_binding(km.CONTROL, KeyCode.END, edit_bind(_cmd(ek.MOVE_TO_END)))

    kb.add_binding(km.CONTROL, _char("p"), up)
    kb.add_binding(km.CONTROL, _char("n"), down)


def add_common_edit_bindings(kb: Keybindings) -> None:
    """Delete, Backspace and their word-deleting variants."""
    km = KeyModifiers
    ek = EditCommandKind
    kb.add_binding(km.NONE, KeyCode.BACKSPACE, edit_bind(_cmd(ek.BACKSPACE)))
    kb.add_binding(km.NONE, KeyCode.DELETE, edit_bind(_cmd(ek.DELETE)))
    kb.add_binding(km.CONTROL, KeyCode.BACKSPACE, edit_bind(_cmd(ek.BACKSPACE_WORD)))
    kb.add_binding(km.CONTROL, KeyCode.DELETE, edit_bind(_cmd(ek.DELETE_WORD)))
    # Base commands should not affect the cut buffer.
    kb.add_binding(km.CONTROL, _char("h"), edit_bind(_cmd(ek.BACKSPACE)))
    kb.add_binding(km.CONTROL, _char("w"), edit_bind(_cmd(ek.BACKSPACE_WORD)))


def default_vi_normal_keybindings() -> Keybindings:
    """Default bindings for vi normal mode."""
    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    # Replicate vi's behaviour for Backspace and Delete.
    kb.add_binding(KeyModifiers.NONE, KeyCode.BACKSPACE, edit_bind(_cmd(EditCommandKind.MOVE_LEFT)))
    kb.add_binding(KeyModifiers.NONE, KeyCode.DELETE, edit_bind(_cmd(EditCommandKind.DELETE)))
    return kb


def default_vi_insert_keybindings() -> Keybindings:
    """Default bindings for vi insert mode."""
    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    add_common_edit_bindings(kb)
    return kb