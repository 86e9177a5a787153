"""Line-editing core: events, edit commands, keybindings, Emacs and Vi modes, highlighters, hints and an external printer."""

__version__ = "0.19.0"

__all__ = [
    "enums",
    "keybindings",
    "emacs",
    "external_printer",
    "vi_motion",
    "vi_command",
    "vi_parser",
    "vi",
    "highlighter",
    "hinter",
]