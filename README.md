# edline

The building blocks of a line editor, without any terminal code. The package turns
raw key events into editor actions, following Emacs or Vi conventions.

It provides:

- **Events and commands** (`edline.enums`). `ReedlineEvent` and `EditCommand`
  describe what the editor should do. `ReedlineEvent` has the constructors `edit`,
  `multiple`, `until_found`, `resize`, `menu` and `host_command`.
  `EditCommand.edit_type()` sorts a command into an `EditType`.
  `UndoBehavior.create_undo_point_after()` decides how edits are grouped for undo.
  `Signal` and `EventStatus` describe how a read ends and what happened to an event.
  Terminal input is modelled by `KeyEvent`, `KeyCode`, `KeyModifiers`,
  `KeyEventKind`, `MouseEvent`, `ResizeEvent`, `FocusGained`, `FocusLost` and
  `PasteEvent`. `ReedlineRawEvent.convert_from()` drops key releases and treats key
  repeats as presses.
- **Keybindings** (`edline.keybindings`). `Keybindings` maps a `KeyCombination` to
  an event, through `add_binding`, `find_binding`, `remove_binding` and
  `get_keybindings`. Adding an empty `UntilFound` event raises `ValueError`.
  `add_common_control_bindings`, `add_common_navigation_bindings`,
  `add_common_edit_bindings`, `default_vi_normal_keybindings` and
  `default_vi_insert_keybindings` fill in the usual bindings. The module also
  defines the `EditMode` base class, `PromptEditMode`, `CursorShape` and
  `CursorConfig`.
- **Edit modes**. `edline.emacs.Emacs` (defaults from
  `default_emacs_keybindings()`) and `edline.vi.Vi` take a `ReedlineRawEvent` and
  return a `ReedlineEvent`. `Vi` starts in insert mode and keeps its own state. It
  parses normal-mode sequences with counts, motions, `f`/`t`/`F`/`T` character
  searches, `;`/`,` replay and `.` repeat. The parsing lives in `edline.vi_parser`
  (`parse`, `parse_chars`, `ParsedViSequence`). Commands are in `edline.vi_command`
  and motions in `edline.vi_motion`.
- **Highlighters** (`edline.highlighter`). `ExampleHighlighter` colours the longest
  known command found in the line. `SimpleMatchHighlighter` colours every exact
  match of a query. Both return `StyledText`, a list of `(Style, text)` pieces that
  `render_simple()` joins with ANSI escapes.
- **Hints** (`edline.hinter`). `DefaultHinter` suggests the rest of the most recent
  history entry that starts with the line, in the style of fish.
  `complete_hint()` returns the whole hint and `next_hint_token()` returns only its
  first word.
- **External printer** (`edline.external_printer`). `ExternalPrinter` is a bounded,
  thread-safe queue. `print` blocks while the queue is full. `get_line` and `drain`
  never wait.

## Install

```
pip install edline
```

## Example

```python
from edline.emacs import Emacs
from edline.enums import KeyCode, KeyEvent, KeyModifiers, ReedlineRawEvent

emacs = Emacs()
raw = ReedlineRawEvent.convert_from(KeyEvent(KeyCode("Char", "l"), KeyModifiers.CONTROL))
print(emacs.parse_event(raw))   # ClearScreen
```

To parse a Vi sequence directly:

```python
from edline.vi import Vi
from edline.vi_parser import parse_chars

seq = parse_chars("2dw")
print(seq.is_complete())                 # True
print(seq.to_reedline_event(Vi()))       # Multiple[ { ReedLineEvents, } ]
```

To get a hint, pass `DefaultHinter.handle()` any object that has a `session()`
method and a `last_with_prefix(prefix, session)` method. The second method returns
a command line, or `None`.

## What it does not do

- It does not read from the terminal and it does not paint.
- It has no line buffer and does not carry out edit commands.
- It has no menus, no completer and no validator.
- It does not store history. The hinter only asks an object that you supply.

Use these pieces to build such an editor. They describe and translate what the
user typed. They do not edit anything.

## Tests

```
pip install -e .[test]
pytest
```