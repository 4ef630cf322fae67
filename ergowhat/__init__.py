# ergowhat/__init__.py
"""ergowhat: TMK/ErgoDox keymap extraction and SVG rendering.

- `parse_string` / `parse_file` return `(KeyMapVec, ActionMap)`
- `to_svg` renders a keymap source straight to an SVG document
"""

from .keymap import parse_string, parse_file
from .render.emit_svg import emit_svg_to_string


def to_svg(src: str) -> str:
    keymaps, actions = parse_string(src)
    return emit_svg_to_string(keymaps, actions)
