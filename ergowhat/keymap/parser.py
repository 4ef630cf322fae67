# ergowhat/keymap/parser.py
"""TMK 키맵 DSL 파서 (재귀 하강)

C 소스 전체에서 두 섹션만 찾아 읽는다. 나머지 텍스트는 전부 잡음으로 취급.

    keymaps   := HEADER_KEYMAPS "=" "{" (keymap ("," keymap)* ","?)? "}"
    keymap    := "KEYMAP" "(" (key ("," key)* ","?)? ")"
    actions   := HEADER_ACTIONS "=" "{" (entry ("," entry)* ","?)? "}"
    entry     := "[" integer "]" "=" action
    action    := "ACTION_" SUFFIX "(" args ")"

- 헤더 탐색: 공백/주석을 건너뛰고, 헤더가 아니면 한 글자 밀고 재시도.
  주석 안의 헤더는 무시되지만 문자열 리터럴이나 #if 0 블록 안의 헤더는
  매치될 수 있다(알려진 한계).
- 섹션 내부는 토큰 사이 어디든 공백/주석 허용.
- 실패는 전부 치명적: 부분 결과 없음.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Tuple

from .ast import (
    Action, ActionMap, KeyMap, KeyMapVec,
    Function, FunctionTap,
    LayerMomentary, LayerSet, LayerSetClear, LayerToggle, LayerTapToggle,
    DefaultLayerSet, LayerTapKey,
    ModsKey, ModsTapKey,
)
from .errors import SectionNotFound, UnknownAction
from .scanner import _TS

KEYMAPS_HEADER = "keymaps[][MATRIX_ROWS][MATRIX_COLS]"
ACTIONS_HEADER = "fn_actions[]"
ACTION_PREFIX = "ACTION_"


class _KeymapParser(_TS):

    # ---- Section Locator ----

    def _seek(self, header: str) -> None:
        """header 다음 위치로 커서 이동. 못 찾으면 SectionNotFound."""
        while True:
            self._skip_ws()
            if self._eof():
                raise SectionNotFound(f"section header {header!r} not found", self.s, self.n)
            if self._starts(header):
                self._bump(len(header))
                return
            self._bump(1)

    def _braced_list(self, item: Callable[[], None]) -> None:
        """'{' item (',' item)*  ','? '}'. 빈 목록 허용."""
        self._eat("{")
        while not self._try_eat("}"):
            item()
            if self._try_eat(","):
                continue
            if not self._at("}"):
                raise self._err("expected ',' or '}'")

    def parse_keymaps(self) -> KeyMapVec:
        self._seek(KEYMAPS_HEADER)
        self._eat("=")
        layers: List[KeyMap] = []
        self._braced_list(lambda: layers.append(self._parse_keymap()))
        return tuple(layers)

    def parse_actions(self) -> ActionMap:
        self._seek(ACTIONS_HEADER)
        self._eat("=")
        amap: ActionMap = {}

        def _entry() -> None:
            idx = self._index()
            self._eat("=")
            # 같은 인덱스가 다시 나오면 덮어쓴다 (배열 initializer와 동일)
            amap[idx] = self._parse_action()

        self._braced_list(_entry)
        return amap

    # ---- Keymap Parser ----

    def _parse_keymap(self) -> KeyMap:
        self._skip_ws()
        start = self.i
        if self._ident() != "KEYMAP":
            raise self._err("expected 'KEYMAP'", start)
        self._eat("(")
        keys = []
        while not self._try_eat(")"):
            keys.append(self._key())
            if self._try_eat(","):
                continue
            if not self._at(")"):
                raise self._err("expected ',' or ')'")
        return tuple(keys)

    # ---- Action Parser ----

    def _parse_action(self) -> Action:
        self._skip_ws()
        start = self.i
        name = self._ident()
        suffix = name[len(ACTION_PREFIX):] if name.startswith(ACTION_PREFIX) else None
        build = _ACTION_TABLE.get(suffix) if suffix else None
        if build is None:
            raise UnknownAction(f"unknown action {name!r}", self.s, start)
        self._eat("(")
        act = build(self)
        self._eat(")")
        return act

    # 인자 모양별 헬퍼: key / layer / layer,ident / layer,key / key,key

    def _args_key(self):
        return self._key()

    def _args_layer(self) -> int:
        return self._integer()

    def _args_layer_ident(self) -> Tuple[int, str]:
        layer = self._integer()
        self._eat(",")
        return layer, self._ident()

    def _args_layer_key(self):
        layer = self._integer()
        self._eat(",")
        return layer, self._key()

    def _args_key_key(self):
        first = self._key()
        self._eat(",")
        return first, self._key()


# 접미사는 식별자 전체(최장일치)로 읽고 나서 표로 분기한다.
# 그래서 FUNCTION / FUNCTION_TAP 같은 접두 관계가 순서에 영향을 주지 않는다.
_ACTION_TABLE: Dict[str, Callable[[_KeymapParser], Action]] = {
    "FUNCTION":          lambda p: Function(p._args_key()),
    "FUNCTION_TAP":      lambda p: FunctionTap(p._args_key()),
    "LAYER_MOMENTARY":   lambda p: LayerMomentary(p._args_layer()),
    "LAYER_SET":         lambda p: LayerSet(*p._args_layer_ident()),
    "LAYER_SET_CLEAR":   lambda p: LayerSetClear(p._args_layer()),
    "LAYER_TOGGLE":      lambda p: LayerToggle(p._args_layer()),
    "LAYER_TAP_TOGGLE":  lambda p: LayerTapToggle(p._args_layer()),
    "DEFAULT_LAYER_SET": lambda p: DefaultLayerSet(p._args_layer()),
    "LAYER_TAP_KEY":     lambda p: LayerTapKey(*p._args_layer_key()),
    "MODS_KEY":          lambda p: ModsKey(*p._args_key_key()),
    "MODS_TAP_KEY":      lambda p: ModsTapKey(*p._args_key_key()),
}

def parse_keymap(src: str) -> KeyMap:
    """단독 `KEYMAP(...)` 호출 하나를 파싱한다. 뒤에 남는 토큰이 있으면 오류."""
    ts = _KeymapParser(src)
    km = ts._parse_keymap()
    ts._skip_ws()
    if not ts._eof():
        raise ts._err("unexpected trailing input")
    return km

def parse_action(src: str) -> Action:
    """단독 `ACTION_*(...)` 호출 하나를 파싱한다."""
    ts = _KeymapParser(src)
    act = ts._parse_action()
    ts._skip_ws()
    if not ts._eof():
        raise ts._err("unexpected trailing input")
    return act

def parse_keymaps(src: str) -> KeyMapVec:
    return _KeymapParser(src).parse_keymaps()

def parse_actions(src: str) -> ActionMap:
    return _KeymapParser(src).parse_actions()

def parse_string(src: str) -> Tuple[KeyMapVec, ActionMap]:
    """펌웨어 소스 전체 → (KeyMapVec, ActionMap).

    두 섹션은 각각 입력 처음부터 독립적으로 찾는다(순서 무관).
    FN<n> 참조가 ActionMap에 있는지는 검사하지 않는다. 그건 렌더러 몫.
    """
    keymaps = parse_keymaps(src)
    actions = parse_actions(src)
    return keymaps, actions
