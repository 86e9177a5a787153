import pytest

from edline.enums import (
    EditCommand,
    EditCommandKind,
    EditType,
    EventKind,
    EventStatus,
    FocusGained,
    KeyCode,
    KeyEvent,
    KeyEventKind,
    KeyModifiers,
    PasteEvent,
    ReedlineEvent,
    ReedlineRawEvent,
    ResizeEvent,
    Signal,
    SignalKind,
    UndoBehavior,
    UndoKind,
)

EK = EditCommandKind


def test_signal_success_keeps_content():
    signal = Signal(SignalKind.SUCCESS, "ls -la")
    assert signal.content == "ls -la"


def test_signal_success_requires_content():
    with pytest.raises(TypeError):
        Signal(SignalKind.SUCCESS)


def test_signal_ctrl_c_rejects_content():
    with pytest.raises(ValueError):
        Signal(SignalKind.CTRL_C, "text")


def test_edit_command_equality_and_hash():
    first = EditCommand(EK.INSERT_CHAR, "a")
    second = EditCommand(EK.INSERT_CHAR, "a")
    assert first == second
    assert hash(first) == hash(second)
    assert first != EditCommand(EK.INSERT_CHAR, "b")
    assert EditCommand(EK.MOVE_LEFT).args == ()


def test_edit_command_replace_chars_args():
    command = EditCommand(EK.REPLACE_CHARS, 3, "echo")
    assert command.args == (3, "echo")
    assert command.kind is EK.REPLACE_CHARS


def test_edit_command_wrong_arity():
    with pytest.raises(TypeError):
        EditCommand(EK.INSERT_CHAR)
    with pytest.raises(TypeError):
        EditCommand(EK.UNDO, "x")


def test_edit_command_char_must_be_single():
    with pytest.raises(TypeError):
        EditCommand(EK.INSERT_CHAR, "ab")


def test_edit_command_position_non_negative():
    with pytest.raises(ValueError):
        EditCommand(EK.MOVE_TO_POSITION, -1)


def test_edit_command_is_immutable():
    command = EditCommand(EK.CLEAR)
    with pytest.raises(AttributeError):
        command.kind = EK.UNDO
    assert command.kind is EK.CLEAR
    assert command == EditCommand(EK.CLEAR)


@pytest.mark.parametrize(
    "command, text",
    [
        (EditCommand(EK.MOVE_TO_POSITION, 2), "MoveToPosition  Value: <int>"),
        (EditCommand(EK.INSERT_CHAR, "x"), "InsertChar  Value: <char>"),
        (EditCommand(EK.INSERT_STRING, "hi"), "InsertString Value: <string>"),
        (EditCommand(EK.REPLACE_CHAR, "x"), "ReplaceChar <char>"),
        (EditCommand(EK.REPLACE_CHARS, 1, "y"), "ReplaceChars <int> <string>"),
        (EditCommand(EK.CUT_LEFT_BEFORE, "q"), "CutLeftBefore Value: <char>"),
        (EditCommand(EK.SWAP_GRAPHEMES), "SwapGraphemes"),
    ],
)
def test_edit_command_display(command, text):
    assert str(command) == text


@pytest.mark.parametrize(
    "command, expected",
    [
        (EditCommand(EK.MOVE_WORD_LEFT), EditType.MOVE_CURSOR),
        (EditCommand(EK.MOVE_RIGHT_UNTIL, "x"), EditType.MOVE_CURSOR),
        (EditCommand(EK.MOVE_TO_POSITION, 0), EditType.MOVE_CURSOR),
        (EditCommand(EK.INSERT_CHAR, "x"), EditType.EDIT_TEXT),
        (EditCommand(EK.CUT_LEFT_UNTIL, "x"), EditType.EDIT_TEXT),
        (EditCommand(EK.COMPLETE), EditType.EDIT_TEXT),
        (EditCommand(EK.UNDO), EditType.UNDO_REDO),
        (EditCommand(EK.REDO), EditType.UNDO_REDO),
    ],
)
def test_edit_type(command, expected):
    assert command.edit_type() is expected


def test_move_named_kinds_are_cursor_moves():
    for kind in EK:
        if kind.value.startswith("Move") and not kind.value.startswith("MoveTo") or kind is EK.MOVE_TO_START:
            args = ("x",) if kind.value.endswith(("Until", "Before")) else ()
            assert EditCommand(kind, *args).edit_type() is EditType.MOVE_CURSOR


def test_undo_cursor_move_never_starts_set():
    previous = UndoBehavior(UndoKind.INSERT_CHARACTER, "a")
    assert not UndoBehavior(UndoKind.MOVE_CURSOR).create_undo_point_after(previous)


def test_undo_history_navigation_grouped():
    nav = UndoBehavior(UndoKind.HISTORY_NAVIGATION)
    assert not nav.create_undo_point_after(nav)


def test_undo_insert_word_boundary():
    letter = UndoBehavior(UndoKind.INSERT_CHARACTER, "a")
    space = UndoBehavior(UndoKind.INSERT_CHARACTER, " ")
    assert space.create_undo_point_after(letter)
    assert not letter.create_undo_point_after(letter)
    assert not letter.create_undo_point_after(space)


def test_undo_insert_after_newline():
    newline = UndoBehavior(UndoKind.INSERT_CHARACTER, "\n")
    letter = UndoBehavior(UndoKind.INSERT_CHARACTER, "a")
    assert letter.create_undo_point_after(newline)


def test_undo_backspace_rules():
    space = UndoBehavior(UndoKind.BACKSPACE, " ")
    letter = UndoBehavior(UndoKind.BACKSPACE, "a")
    unknown = UndoBehavior(UndoKind.BACKSPACE)
    assert letter.create_undo_point_after(space)
    assert not space.create_undo_point_after(letter)
    assert UndoBehavior(UndoKind.BACKSPACE, "\r").create_undo_point_after(letter)
    assert not unknown.create_undo_point_after(letter)


def test_undo_delete_rules():
    space = UndoBehavior(UndoKind.DELETE, " ")
    letter = UndoBehavior(UndoKind.DELETE, "a")
    assert letter.create_undo_point_after(space)
    assert not letter.create_undo_point_after(letter)
    assert not UndoBehavior(UndoKind.DELETE).create_undo_point_after(space)


def test_undo_different_kinds_start_set():
    insert = UndoBehavior(UndoKind.INSERT_CHARACTER, "a")
    delete = UndoBehavior(UndoKind.DELETE, "a")
    assert delete.create_undo_point_after(insert)
    point = UndoBehavior(UndoKind.CREATE_UNDO_POINT)
    assert point.create_undo_point_after(point)


def test_undo_insert_requires_char():
    with pytest.raises(TypeError):
        UndoBehavior(UndoKind.INSERT_CHARACTER)
    with pytest.raises(ValueError):
        UndoBehavior(UndoKind.MOVE_CURSOR, "a")


def test_event_constructors():
    commands = [EditCommand(EK.MOVE_LEFT), EditCommand(EK.INSERT_CHAR, "z")]
    event = ReedlineEvent.edit(commands)
    assert event.kind is EventKind.EDIT
    assert list(event.args) == commands
    assert ReedlineEvent.resize(80, 24).args == (80, 24)
    assert ReedlineEvent.menu("completion_menu").args == ("completion_menu",)
    assert ReedlineEvent.host_command("clear").kind is EventKind.EXECUTE_HOST_COMMAND


def test_event_nested_equality():
    build = lambda: ReedlineEvent.until_found(
        [ReedlineEvent(EventKind.MENU_UP), ReedlineEvent(EventKind.UP)]
    )
    assert build() == build()
    assert hash(build()) == hash(build())
    assert build() != ReedlineEvent.multiple(build().args)


def test_event_rejects_bad_payload():
    with pytest.raises(TypeError):
        ReedlineEvent.edit([ReedlineEvent(EventKind.ENTER)])
    with pytest.raises(TypeError):
        ReedlineEvent.multiple([EditCommand(EK.CLEAR)])
    with pytest.raises(ValueError):
        ReedlineEvent.resize(70000, 10)
    with pytest.raises(TypeError):
        ReedlineEvent(EventKind.ENTER, "extra")


@pytest.mark.parametrize(
    "event, text",
    [
        (ReedlineEvent.resize(1, 2), "Resize <int> <int>"),
        (ReedlineEvent.edit([]), "Edit: <EditCommand> or Edit: <EditCommand> value: <string>"),
        (ReedlineEvent.multiple([]), "Multiple[ { ReedLineEvents, } ]"),
        (ReedlineEvent.until_found([]), "UntilFound [ { ReedLineEvents, } ]"),
        (ReedlineEvent.menu("m"), "Menu Name: <string>"),
        (ReedlineEvent.host_command("x"), "ExecuteHostCommand"),
        (ReedlineEvent(EventKind.NONE), "None"),
        (ReedlineEvent(EventKind.MENU_PAGE_PREVIOUS), "MenuPagePrevious"),
    ],
)
def test_event_display(event, text):
    assert str(event) == text


def test_event_status():
    assert EventStatus.HANDLED.kind == "handled"
    assert EventStatus.INAPPLICABLE != EventStatus.HANDLED
    signal = Signal(SignalKind.CTRL_D)
    assert EventStatus("exits", signal).signal == signal
    with pytest.raises(TypeError):
        EventStatus("exits")
    with pytest.raises(ValueError):
        EventStatus("bogus")


def test_key_code_validation():
    assert KeyCode("Char", "l").char == "l"
    assert KeyCode.ENTER == KeyCode("Enter")
    with pytest.raises(TypeError):
        KeyCode("Char")
    with pytest.raises(ValueError):
        KeyCode("Enter", "x")
    with pytest.raises(ValueError):
        KeyCode("Nope")


def test_key_modifiers_combine():
    combo = KeyModifiers.CONTROL | KeyModifiers.ALT
    assert KeyModifiers.CONTROL in combo
    assert KeyModifiers.SHIFT not in combo
    event = KeyEvent(KeyCode("Char", "a"), combo, KeyEventKind.REPEAT)
    raw = ReedlineRawEvent.convert_from(event)
    assert raw.event == KeyEvent(KeyCode("Char", "a"), combo, KeyEventKind.PRESS)
    assert raw.event != KeyEvent(KeyCode("Char", "a"), KeyModifiers.CONTROL, KeyEventKind.PRESS)


def test_raw_event_drops_release():
    event = KeyEvent(KeyCode("Char", "a"), KeyModifiers.NONE, KeyEventKind.RELEASE)
    assert ReedlineRawEvent.convert_from(event) is None


def test_raw_event_repeat_becomes_press():
    event = KeyEvent(KeyCode("Char", "a"), KeyModifiers.SHIFT, KeyEventKind.REPEAT)
    raw = ReedlineRawEvent.convert_from(event)
    assert raw.event == KeyEvent(KeyCode("Char", "a"), KeyModifiers.SHIFT, KeyEventKind.PRESS)


@pytest.mark.parametrize(
    "event",
    [
        KeyEvent(KeyCode.ENTER),
        ResizeEvent(80, 24),
        FocusGained(),
        PasteEvent("text"),
    ],
)
def test_raw_event_passes_others_through(event):
    assert ReedlineRawEvent.convert_from(event).event == event