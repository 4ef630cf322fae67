# ergowhat/keymap/__init__.py
"""TMK/ErgoDox keymap extraction.

This package provides:
- Model types for keys and actions (frozen dataclasses)
- A tolerant recursive-descent parser that locates the `keymaps[]` and
  `fn_actions[]` sections inside arbitrary C source
- The error taxonomy raised on malformed input (all `SyntaxError` subclasses)
"""

from .ast import (
    Named, Functional, Key,
    Function, FunctionTap, LayerMomentary, LayerSet, LayerSetClear,
    LayerToggle, LayerTapToggle, DefaultLayerSet, LayerTapKey,
    ModsKey, ModsTapKey, Action,
    KeyMap, KeyMapVec, ActionMap, describe_action,
)
from .errors import (
    KeymapSyntaxError, InvalidInteger, UnknownAction,
    UnterminatedComment, SectionNotFound,
)
from .parser import (
    parse_string, parse_keymaps, parse_actions, parse_keymap, parse_action,
    KEYMAPS_HEADER, ACTIONS_HEADER,
)
from .loader import load_keymap_text


def parse_file(path: str):
    """파일 하나를 읽어 (KeyMapVec, ActionMap)을 돌려준다."""
    return parse_string(load_keymap_text(path))
