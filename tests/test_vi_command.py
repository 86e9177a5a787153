from types import SimpleNamespace

import pytest
from more_itertools import peekable

from edline.enums import EditCommand, EditCommandKind, EventKind, ReedlineEvent
from edline.vi_command import Command, CommandKind, parse_command
from edline.vi_motion import Motion, MotionKind, ReedlineOption, ViCharSearch


def _state(previous=None, last_char_search=None):
    return SimpleNamespace(previous=previous, last_char_search=last_char_search)


def _edit(kind, *args):
    return ReedlineOption.edit(EditCommand(kind, *args))


REPAINT = ReedlineOption.event(ReedlineEvent(EventKind.REPAINT))


@pytest.mark.parametrize(
    "text, kind",
    [
        ("d", CommandKind.DELETE),
        ("p", CommandKind.PASTE_AFTER),
        ("P", CommandKind.PASTE_BEFORE),
        ("i", CommandKind.ENTER_VI_INSERT),
        ("a", CommandKind.ENTER_VI_APPEND),
        ("u", CommandKind.UNDO),
        ("c", CommandKind.CHANGE),
        ("x", CommandKind.DELETE_CHAR),
        ("s", CommandKind.SUBSTITUTE_CHAR_WITH_INSERT),
        ("?", CommandKind.HISTORY_SEARCH),
        ("C", CommandKind.CHANGE_TO_LINE_END),
        ("D", CommandKind.DELETE_TO_END),
        ("I", CommandKind.PREPEND_TO_START),
        ("A", CommandKind.APPEND_TO_END),
        ("S", CommandKind.REWRITE_CURRENT_LINE),
        ("~", CommandKind.SWITCHCASE),
        (".", CommandKind.REPEAT_LAST_ACTION),
    ],
)
def test_parse_simple_commands(text, kind):
    assert parse_command(peekable(text)) == Command(kind)


def test_replace_takes_next_char():
    assert parse_command(peekable("rk")) == Command(CommandKind.REPLACE_CHAR, "k")


def test_replace_without_char_is_incomplete():
    assert parse_command(peekable("r")) == Command(CommandKind.INCOMPLETE)


def test_non_command_is_not_consumed():
    stream = peekable("w")
    assert parse_command(stream) is None
    assert list(stream) == ["w"]
    assert parse_command(peekable("")) is None


def test_whole_line_char_and_requires_motion():
    assert Command(CommandKind.DELETE).whole_line_char() == "d"
    assert Command(CommandKind.CHANGE).whole_line_char() == "c"
    assert Command(CommandKind.UNDO).whole_line_char() is None
    assert Command(CommandKind.CHANGE).requires_motion()
    assert not Command(CommandKind.PASTE_AFTER).requires_motion()


def test_replace_char_needs_char():
    with pytest.raises(TypeError):
        Command(CommandKind.REPLACE_CHAR)


def test_to_reedline_simple():
    state = _state()
    assert Command(CommandKind.PASTE_AFTER).to_reedline(state) == [
        _edit(EditCommandKind.PASTE_CUT_BUFFER_AFTER)
    ]
    assert Command(CommandKind.ENTER_VI_INSERT).to_reedline(state) == [REPAINT]
    assert Command(CommandKind.REPLACE_CHAR, "z").to_reedline(state) == [
        _edit(EditCommandKind.REPLACE_CHAR, "z")
    ]


def test_commands_needing_motion_are_incomplete():
    for kind in (CommandKind.DELETE, CommandKind.CHANGE, CommandKind.INCOMPLETE):
        assert Command(kind).to_reedline(_state()) == [ReedlineOption.INCOMPLETE]


def test_repeat_last_action():
    assert Command(CommandKind.REPEAT_LAST_ACTION).to_reedline(_state()) == []
    previous = ReedlineEvent.edit([EditCommand(EditCommandKind.UNDO)])
    assert Command(CommandKind.REPEAT_LAST_ACTION).to_reedline(_state(previous)) == [
        ReedlineOption.event(previous)
    ]


def test_delete_with_motions():
    delete = Command(CommandKind.DELETE)
    state = _state()
    assert delete.to_reedline_with_motion(Motion(MotionKind.LINE), state) == [
        _edit(EditCommandKind.CUT_CURRENT_LINE)
    ]
    assert delete.to_reedline_with_motion(Motion(MotionKind.NEXT_WORD), state) == [
        _edit(EditCommandKind.CUT_WORD_RIGHT_TO_NEXT)
    ]
    assert delete.to_reedline_with_motion(Motion(MotionKind.UP), state) is None


def test_change_appends_repaint():
    change = Command(CommandKind.CHANGE)
    assert change.to_reedline_with_motion(Motion(MotionKind.LINE), _state()) == [
        _edit(EditCommandKind.MOVE_TO_START),
        _edit(EditCommandKind.CLEAR_TO_LINE_END),
        REPAINT,
    ]
    assert change.to_reedline_with_motion(Motion(MotionKind.END), _state()) == [
        _edit(EditCommandKind.CLEAR_TO_LINE_END),
        REPAINT,
    ]
    assert change.to_reedline_with_motion(Motion(MotionKind.DOWN), _state()) is None


def test_char_search_cut_records_search():
    state = _state()
    options = Command(CommandKind.DELETE).to_reedline_with_motion(
        Motion(MotionKind.LEFT_UNTIL, "x"), state
    )
    assert options == [_edit(EditCommandKind.CUT_LEFT_UNTIL, "x")]
    assert state.last_char_search == ViCharSearch.to_left("x")


def test_replay_cut_needs_previous_search():
    delete = Command(CommandKind.DELETE)
    assert delete.to_reedline_with_motion(Motion(MotionKind.REPLAY_CHAR_SEARCH), _state()) is None
    state = _state(last_char_search=ViCharSearch.till_right("y"))
    assert delete.to_reedline_with_motion(Motion(MotionKind.REVERSE_CHAR_SEARCH), state) == [
        _edit(EditCommandKind.CUT_LEFT_BEFORE, "y")
    ]


def test_other_commands_do_not_take_motions():
    assert (
        Command(CommandKind.UNDO).to_reedline_with_motion(Motion(MotionKind.LEFT), _state())
        is None
    )