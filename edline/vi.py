"""Vi-style parsing of terminal input."""

from __future__ import annotations

import enum
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
    default_vi_insert_keybindings,
    default_vi_normal_keybindings,
)
from edline.vi_motion import ViCharSearch
from edline.vi_parser import parse_chars

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


def _none() -> ReedlineEvent:
    return ReedlineEvent(EventKind.NONE)


class ViMode(enum.Enum):
    """The two vi modes."""

    NORMAL = "Normal"
    INSERT = "Insert"


class Vi(EditMode):
    """Parses input events like a vi-style editor."""

    def __init__(
        self,
        insert_keybindings: Optional[Keybindings] = None,
        normal_keybindings: Optional[Keybindings] = None,
        mode: ViMode = ViMode.INSERT,
    ) -> None:
        self.insert_keybindings = (
            insert_keybindings if insert_keybindings is not None else default_vi_insert_keybindings()
        )
        self.normal_keybindings = (
            normal_keybindings if normal_keybindings is not None else default_vi_normal_keybindings()
        )
        self.mode = mode
        self.cache: list[str] = []
        self.previous: Optional[ReedlineEvent] = None
        # Last f, F, t or T motion, replayed by ; and ,
        self.last_char_search: Optional[ViCharSearch] = None

    def parse_event(self, event: ReedlineRawEvent) -> ReedlineEvent:
        inner = event.event
        if isinstance(inner, KeyEvent):
            return self._parse_key(inner)
        if isinstance(inner, MouseEvent):
            return ReedlineEvent(EventKind.MOUSE)
        if isinstance(inner, ResizeEvent):
            return ReedlineEvent.resize(inner.width, inner.height)
        if isinstance(inner, (FocusGained, FocusLost)):
            return _none()
        if isinstance(inner, PasteEvent):
            text = inner.text.replace("\r\n", "\n").replace("\r", "\n")
            return ReedlineEvent.edit([EditCommand(EditCommandKind.INSERT_STRING, text)])
        raise TypeError(f"unsupported terminal event {inner!r}")

    def _parse_key(self, key: KeyEvent) -> ReedlineEvent:
        modifiers, code = key.modifiers, key.code
        if code.name == "Char":
            if self.mode is ViMode.NORMAL:
                return self._parse_normal_char(modifiers, code.char)
            return self._parse_insert_char(modifiers, code.char)
        if modifiers == KeyModifiers.NONE and code == KeyCode.ESC:
            self.cache.clear()
            self.mode = ViMode.NORMAL
            return ReedlineEvent.multiple(
                [ReedlineEvent(EventKind.ESC), ReedlineEvent(EventKind.REPAINT)]
            )
        if modifiers == KeyModifiers.NONE and code == KeyCode.ENTER:
            self.mode = ViMode.INSERT
            return ReedlineEvent(EventKind.ENTER)
        bindings = (
            self.normal_keybindings if self.mode is ViMode.NORMAL else self.insert_keybindings
        )
        found = bindings.find_binding(modifiers, code)
        return found if found is not None else _none()

    def _parse_normal_char(self, modifiers: KeyModifiers, char: str) -> ReedlineEvent:
        c = _ascii_lower(char)
        found = self.normal_keybindings.find_binding(modifiers, KeyCode("Char", c))
        if found is not None:
            return found
        if modifiers not in (KeyModifiers.NONE, KeyModifiers.SHIFT):
            return _none()

        self.cache.append(_ascii_upper(c) if modifiers == KeyModifiers.SHIFT else c)
        sequence = parse_chars(self.cache)
        if not sequence.is_valid():
            self.cache.clear()
            return _none()
        if not sequence.is_complete():
            return _none()
        if sequence.enters_insert_mode():
            self.mode = ViMode.INSERT
        result = sequence.to_reedline_event(self)
        self.cache.clear()
        return result

    def _parse_insert_char(self, modifiers: KeyModifiers, char: str) -> ReedlineEvent:
        c = char if modifiers == KeyModifiers.NONE else _ascii_lower(char)
        found = self.insert_keybindings.find_binding(modifiers, KeyCode("Char", c))
        if found is not None:
            return found
        if modifiers in _INSERTING_MODIFIERS:
            typed = _ascii_upper(c) if modifiers == KeyModifiers.SHIFT else c
            return ReedlineEvent.edit([EditCommand(EditCommandKind.INSERT_CHAR, typed)])
        return _none()

    def edit_mode(self) -> PromptEditMode:
        if self.mode is ViMode.NORMAL:
            return PromptEditMode.VI_NORMAL
        return PromptEditMode.VI_INSERT