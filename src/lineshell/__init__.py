"""lineshell: interactive command line with inline directory suggestions."""

from lineshell.config import Config
from lineshell.errors import (
    CommandNotExecutable,
    DirectoryListingError,
    LineshellError,
    OutputDecodeError,
    TerminalIOError,
)
from lineshell.keys import KeyEvent, parse_key
from lineshell.loop import RunLoop
from lineshell.readline import (
    CursorPosition,
    Editor,
    Readline,
    ReadlineTheme,
    plain_theme,
    render,
    update,
)
from lineshell.runner import CommandOutput, ProcessRunner, Runner, decode_output
from lineshell.stdin_buffer import StdinBuffer
from lineshell.suggestions import SuggestionIndex, list_entries
from lineshell.terminal import ProcessTerminal, Terminal
from lineshell.utils import visible_width

__all__ = [
    # Config
    "Config",
    # Errors
    "CommandNotExecutable",
    "DirectoryListingError",
    "LineshellError",
    "OutputDecodeError",
    "TerminalIOError",
    # Keys
    "KeyEvent",
    "parse_key",
    # Editor
    "CursorPosition",
    "Editor",
    "Readline",
    "ReadlineTheme",
    "plain_theme",
    "render",
    "update",
    # Run loop
    "RunLoop",
    # Runner
    "CommandOutput",
    "ProcessRunner",
    "Runner",
    "decode_output",
    # Input buffering
    "StdinBuffer",
    # Suggestions
    "SuggestionIndex",
    "list_entries",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "visible_width",
]
