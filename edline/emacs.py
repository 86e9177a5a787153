"""Emacs-style parsing of terminal input."""

from __future__ import annotations

from typing import Optional

from edline.enums import (
    EditCommand,
    EditCommandKind,
    EventKind,
    FocusGained,
    FocusLost,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    MouseEvent,
    PasteEvent,
    ReedlineEvent,
    ReedlineRawEvent,
    ResizeEvent,
)
from edline.keybindings import (
    EditMode,
    Keybindings,
    PromptEditMode,
    add_common_control_bindings,
    add_common_edit_bindings,
    add_common_navigation_bindings,
    edit_bind,
)

# Modifier combinations that still insert the typed character ("AltGr" layouts
# report Control+Alt).
_INSERTING_MODIFIERS = (
    KeyModifiers.NONE,
    KeyModifiers.SHIFT,
    KeyModifiers.CONTROL | KeyModifiers.ALT,
    KeyModifiers.CONTROL | KeyModifiers.ALT | KeyModifiers.SHIFT,
)


def _ascii_lower(c: str) -> str:
    return c.lower() if "A" <= c <= "Z" else c


def _ascii_upper(c: str) -> str:
    return c.upper() if "a" <= c <= "z" else c


def default_emacs_keybindings() -> Keybindings:
    """The default emacs key bindings."""
    km = KeyModifiers
    ek = EditCommandKind
    ev = EventKind

    def cmd(kind):
        return edit_bind(EditCommand(kind))

    def char(c):
        return KeyCode("Char", c)

    kb = Keybindings()
    add_common_control_bindings(kb)
    add_common_navigation_bindings(kb)
    add_common_edit_bindings(kb)

    kb.add_binding(km.NONE, KeyCode.ENTER, ReedlineEvent(ev.ENTER))

    # Ctrl moves
    kb.add_binding(
        km.CONTROL,
        char("b"),
        ReedlineEvent.until_found([ReedlineEvent(ev.MENU_LEFT), ReedlineEvent(ev.LEFT)]),
    )
    kb.add_binding(
        km.CONTROL,
        char("f"),
        ReedlineEvent.until_found(
            [
                ReedlineEvent(ev.HISTORY_HINT_COMPLETE),
                ReedlineEvent(ev.MENU_RIGHT),
                ReedlineEvent(ev.RIGHT),
            ]
        ),
    )
    # Undo/redo
    kb.add_binding(km.CONTROL, char("g"), cmd(ek.REDO))
    kb.add_binding(km.CONTROL, char("z"), cmd(ek.UNDO))
    # Cutting
    kb.add_binding(km.CONTROL, char("y"), cmd(ek.PASTE_CUT_BUFFER_BEFORE))
    kb.add_binding(km.CONTROL, char("w"), cmd(ek.CUT_WORD_LEFT))
    kb.add_binding(km.CONTROL, char("k"), cmd(ek.CUT_TO_END))
    kb.add_binding(km.CONTROL, char("u"), cmd(ek.CUT_FROM_START))
    # Edits
    kb.add_binding(km.CONTROL, char("t"), cmd(ek.SWAP_GRAPHEMES))

    word_right = ReedlineEvent.until_found(
        [ReedlineEvent(ev.HISTORY_HINT_WORD_COMPLETE), cmd(ek.MOVE_WORD_RIGHT)]
    )
    # Alt moves
    kb.add_binding(km.ALT, KeyCode.LEFT, cmd(ek.MOVE_WORD_LEFT))
    kb.add_binding(km.ALT, KeyCode.RIGHT, word_right)
    kb.add_binding(km.ALT, char("b"), cmd(ek.MOVE_WORD_LEFT))
    kb.add_binding(km.ALT, char("f"), word_right)
    # Alt edits
    kb.add_binding(km.ALT, KeyCode.DELETE, cmd(ek.DELETE_WORD))
    kb.add_binding(km.ALT, KeyCode.BACKSPACE, cmd(ek.BACKSPACE_WORD))
    kb.add_binding(km.ALT, char("m"), cmd(ek.BACKSPACE_WORD))
    # Alt cutting
    kb.add_binding(km.ALT, char("d"), cmd(ek.CUT_WORD_RIGHT))
    # Case changes
    kb.add_binding(km.ALT, char("u"), cmd(ek.UPPERCASE_WORD))
    kb.add_binding(km.ALT, char("l"), cmd(ek.LOWERCASE_WORD))
    kb.add_binding(km.ALT, char("c"), cmd(ek.CAPITALIZE_CHAR))

    return kb


class Emacs(EditMode):
    """Parses input events like an emacs-style editor."""

    def __init__(self, keybindings: Optional[Keybindings] = None) -> None:
        self.keybindings = keybindings if keybindings is not None else default_emacs_keybindings()

    def parse_event(self, event: ReedlineRawEvent) -> ReedlineEvent:
        inner = event.event
        if isinstance(inner, KeyEvent):
            return self._parse_key(inner)
        if isinstance(inner, MouseEvent):
            return ReedlineEvent(EventKind.MOUSE)
        if isinstance(inner, ResizeEvent):
            return ReedlineEvent.resize(inner.width, inner.height)
        if isinstance(inner, (FocusGained, FocusLost)):
            return ReedlineEvent(EventKind.NONE)
        if isinstance(inner, PasteEvent):
            text = inner.text.replace("\r\n", "\n").replace("\r", "\n")
            return ReedlineEvent.edit([EditCommand(EditCommandKind.INSERT_STRING, text)])
        raise TypeError(f"unsupported terminal event {inner!r}")

    def _parse_key(self, key: KeyEvent) -> ReedlineEvent:
        modifiers, code = key.modifiers, key.code
        if code.name != "Char":
            found = self.keybindings.find_binding(modifiers, code)
            return found if found is not None else ReedlineEvent(EventKind.NONE)

        c = code.char if modifiers == KeyModifiers.NONE else _ascii_lower(code.char)
        found = self.keybindings.find_binding(modifiers, KeyCode("Char", c))
        if found is not None:
            return found
        if modifiers in _INSERTING_MODIFIERS:
            typed = _ascii_upper(c) if modifiers == KeyModifiers.SHIFT else c
            return ReedlineEvent.edit([EditCommand(EditCommandKind.INSERT_CHAR, typed)])
        return ReedlineEvent(EventKind.NONE)

    def edit_mode(self) -> PromptEditMode:
        return PromptEditMode.EMACS