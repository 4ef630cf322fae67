"""SVG Emit (단일 .svg 문서 생성; 스타일/스크립트 포함).

개요
----
- (KeyMapVec, ActionMap)을 받아 ErgoDox 그림을 **문자열로** 생성한다.
- 방출되는 SVG 문서는:
  * 인라인 CSS(라벨/키캡 스타일)
  * 인라인 스크립트(레이어 전환: onlylayer / templayeron / templayeroff / layertoggle)
  * 그라디언트 정의
  * 레이어마다 `<g id="layer{n}">` 하나, 레이어 0만 보이게 시작

FN 키 처리
----------
- FN<n>은 ActionMap[n]으로 해석해서 라벨/이벤트를 붙인다.
- ActionMap에 n이 없으면 실패하지 않고 `BROKEN` 표식(class="broken")을 그린다.
- 레이어의 키 개수가 슬롯보다 적으면 남는 슬롯은 빈 키, 많으면 넘치는 키는 무시.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from ..keymap.ast import (
    Action, ActionMap, Functional, Key, KeyMap, Named,
    Function, FunctionTap,
    LayerMomentary, LayerSet, LayerSetClear, LayerToggle, LayerTapToggle,
    DefaultLayerSet, LayerTapKey,
    ModsKey, ModsTapKey,
)
from .labels import key_label
from .layout import ERGODOX, SHAPE_SIZE, VIEWBOX, KeyBlock, KeySlot

BROKEN = "BROKEN"

_CSS = """
text { font-family: sans-serif; text-anchor: middle; dominant-baseline: middle; }
text.normal { font-size: 24px; fill: #333333; }
text.shifted { font-size: 18px; fill: #777777; }
g.broken text.normal { fill: #CC0000; font-weight: bold; }
g.broken rect.outside { stroke: #CC0000; }
g.layer-key { cursor: pointer; }
""".strip("\n")

_JS = """
function setlayer(layer, vis) {
  var elem = document.getElementById("layer" + layer);
  if (elem) { elem.setAttribute('visibility', vis); }
}
function onlylayer(layer) {
  var layers = document.querySelectorAll('g.layer');
  for (var i = 0; i < layers.length; i++) {
    layers[i].setAttribute('visibility', layers[i].id == "layer" + layer ? 'visible' : 'hidden');
  }
}
function templayeron(layer) { setlayer(layer, 'visible'); }
function templayeroff(layer) { setlayer(layer, 'hidden'); }
function layertoggle(layer) {
  var elem = document.getElementById("layer" + layer);
  if (elem) {
    setlayer(layer, elem.getAttribute('visibility') == 'visible' ? 'hidden' : 'visible');
  }
}
""".strip("\n")

_DEFS = """
<defs>
<linearGradient id="keyoutside" x1="0%" x2="0%" y1="0%" y2="100%">
<stop offset="0%" stop-color="#E1E1E1"/>
<stop offset="100%" stop-color="#B2B2B2"/>
</linearGradient>
<linearGradient id="keyinside" x1="0%" x2="100%" y1="0%" y2="0%">
<stop offset="0%" stop-color="#D6D6D6"/>
<stop offset="50%" stop-color="#EBEBEB"/>
<stop offset="100%" stop-color="#D6D6D6"/>
</linearGradient>
</defs>
""".strip("\n")


# ---------- 유틸 ----------

def _num(v: float) -> str:
    """100.0 → '100', 62.5 → '62.5'"""
    return f"{v:g}"

def _escape_xml(s: str) -> str:
    """SVG 텍스트/속성값 이스케이프."""
    return (s.replace("&", "&amp;").replace("<", "&lt;")
             .replace(">", "&gt;").replace('"', "&quot;"))


def _preflight_check(blocks: Sequence[KeyBlock]) -> None:
    """슬롯 번호가 0..N-1을 정확히 한 번씩 덮는지 조기 검증."""
    seen = sorted(s.index for b in blocks for s in b.slots)
    if seen != list(range(len(seen))):
        raise ValueError(f"emit_svg: slot indices must cover 0..{len(seen)-1} exactly once")
    for b in blocks:
        for s in b.slots:
            if s.shape not in SHAPE_SIZE:
                raise ValueError(f"emit_svg: unknown shape {s.shape!r} (slot {s.index})")


def _key_frame(w: float, h: float) -> str:
    """키캡 테두리 3겹(배경/바깥/안쪽)."""
    return (
        f'<rect x="1" y="1" width="{_num(w-2)}" height="{_num(h-2)}" rx="15" ry="15" '
        f'stroke="white" fill="white"/>'
        f'<rect class="outside" x="1" y="1" width="{_num(w-2)}" height="{_num(h-2)}" rx="15" ry="15" '
        f'stroke="#A5A5A5" fill="url(#keyoutside)"/>'
        f'<rect x="10" y="7" width="{_num(w-20)}" height="{_num(h-20)}" rx="10" ry="10" '
        f'stroke="#F9F9F9" fill="url(#keyinside)"/>'
    )

def _key_text(name: str, cx: float, offset: float = 25.0) -> str:
    """shifted 라벨은 offset, normal 라벨은 offset+25 위치."""
    normal, shifted = key_label(name)
    return (
        f'<text x="{_num(cx)}" y="{_num(offset)}" class="shifted">{_escape_xml(shifted)}</text>'
        f'<text x="{_num(cx)}" y="{_num(offset + 25.0)}" class="normal">{_escape_xml(normal)}</text>'
    )

def _momentary(layer: int) -> Dict[str, str]:
    return {"onmousedown": f"templayeron({layer})", "onmouseup": f"templayeroff({layer})"}


def _resolve(key: Key, actions: ActionMap, cx: float) -> Tuple[List[str], str, Dict[str, str]]:
    """키 하나 → (텍스트 조각들, 추가 class, 이벤트 속성)."""
    if isinstance(key, Named):
        return [_key_text(key.name, cx)], "", {}

    if not isinstance(key, Functional):
        raise AssertionError(f"unknown key: {key!r}")

    act: Optional[Action] = actions.get(key.index)
    if act is None:
        return [_key_text(BROKEN, cx, 0.0)], "broken", {}

    if isinstance(act, LayerSet):
        return [_key_text(f"#{act.layer}", cx)], "layer-key", {"onclick": f"onlylayer({act.layer})"}
    if isinstance(act, LayerSetClear):
        return [_key_text(f"#{act.layer}", cx)], "layer-key", {"onclick": f"onlylayer({act.layer})"}
    if isinstance(act, DefaultLayerSet):
        return [_key_text(f"DF{act.layer}", cx)], "layer-key", {"onclick": f"onlylayer({act.layer})"}
    if isinstance(act, LayerMomentary):
        return [_key_text(f"~{act.layer}", cx)], "layer-key", _momentary(act.layer)
    if isinstance(act, LayerToggle):
        return [_key_text(f"TG{act.layer}", cx)], "layer-key", {"onclick": f"layertoggle({act.layer})"}
    if isinstance(act, LayerTapToggle):
        return [_key_text(f"TT{act.layer}", cx)], "layer-key", {"onclick": f"layertoggle({act.layer})"}
    if isinstance(act, LayerTapKey):
        return ([_key_text(str(act.key), cx), _key_text(f"~L{act.layer}", cx, 50.0)],
                "layer-key", _momentary(act.layer))
    if isinstance(act, (ModsTapKey, ModsKey)):
        return [_key_text(str(act.mods), cx, 0.0), _key_text(str(act.key), cx, 50.0)], "", {}
    if isinstance(act, (Function, FunctionTap)):
        return [_key_text(str(act.key), cx)], "", {}
    raise AssertionError(f"unknown action: {act!r}")


def _key_node(slot: KeySlot, key: Optional[Key], actions: ActionMap) -> str:
    w, h = SHAPE_SIZE[slot.shape]
    if key is None:
        texts, extra, events = [], "empty", {}
    else:
        texts, extra, events = _resolve(key, actions, w / 2)
    cls = "key" if not extra else f"key {extra}"
    attrs = [f'class="{cls}"', f'transform="translate({_num(slot.x)},{_num(slot.y)})"']
    if key is not None:
        attrs.append(f'data-key="{_escape_xml(str(key))}"')
    attrs.extend(f'{k}="{v}"' for k, v in events.items())
    return f"<g {' '.join(attrs)}>{_key_frame(w, h)}{''.join(texts)}</g>"


def _layer(n: int, keymap: KeyMap, actions: ActionMap) -> str:
    vis = "visible" if n == 0 else "hidden"
    out = [f'<g id="layer{n}" class="layer" visibility="{vis}">']
    for b in ERGODOX:
        out.append(f'<g class="{b.name}" transform="translate({_num(b.dx)},{_num(b.dy)})">')
        for s in b.slots:
            key = keymap[s.index] if s.index < len(keymap) else None
            out.append(_key_node(s, key, actions))
        out.append("</g>")
    out.append("</g>")
    return "\n".join(out)


def emit_svg_to_string(keymaps: Sequence[KeyMap], actions: ActionMap) -> str:
    """
    (KeyMapVec, ActionMap) → SVG 문서 문자열.
    같은 입력이면 항상 같은 출력(결정적).
    """
    _preflight_check(ERGODOX)

    vb = " ".join(str(v) for v in VIEWBOX)
    header = f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{vb}">'
    style = f"<style><![CDATA[\n{_CSS}\n]]></style>"
    script = f'<script type="application/ecmascript"><![CDATA[\n{_JS}\n]]></script>'
    layers = [_layer(n, km, actions) for n, km in enumerate(keymaps)]

    return "\n".join([header, style, script, _DEFS, *layers, "</svg>"]) + "\n"
