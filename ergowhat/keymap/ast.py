# ergowhat/keymap/ast.py
"""키맵 모델(AST)

- Key    : Named(이름 키) | Functional(FN<n>, fn_actions 인덱스 참조)
- Action : ACTION_* 매크로 한 개 = 불변 dataclass 한 개
- KeyMap / KeyMapVec / ActionMap : 파서가 돌려주는 최종 결과 타입
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple, Union

# ---- Key ----

@dataclass(frozen=True)
class Named:
    name: str   # 펌웨어 토큰 그대로 (TRNS, NO 등도 특별 취급하지 않음)

    def __str__(self) -> str:
        return self.name

@dataclass(frozen=True)
class Functional:
    index: int  # fn_actions[] 인덱스

    def __str__(self) -> str:
        return f"FN{self.index}"

Key = Union[Named, Functional]

# ---- Action ----

@dataclass(frozen=True)
class Function:
    key: Key

@dataclass(frozen=True)
class FunctionTap:
    key: Key

@dataclass(frozen=True)
class LayerMomentary:
    layer: int

@dataclass(frozen=True)
class LayerSet:
    layer: int
    on: str     # ON_PRESS / ON_RELEASE / ON_BOTH ... (식별자 원문)

@dataclass(frozen=True)
class LayerSetClear:
    layer: int

@dataclass(frozen=True)
class LayerToggle:
    layer: int

@dataclass(frozen=True)
class LayerTapToggle:
    layer: int

@dataclass(frozen=True)
class DefaultLayerSet:
    layer: int

@dataclass(frozen=True)
class LayerTapKey:
    layer: int
    key: Key

@dataclass(frozen=True)
class ModsKey:
    mods: Key
    key: Key

@dataclass(frozen=True)
class ModsTapKey:
    mods: Key
    key: Key

Action = Union[
    Function, FunctionTap,
    LayerMomentary, LayerSet, LayerSetClear, LayerToggle, LayerTapToggle,
    DefaultLayerSet, LayerTapKey,
    ModsKey, ModsTapKey,
]

# ---- 결과 컨테이너 ----

KeyMap = Tuple[Key, ...]            # 한 레이어, 소스에 적힌 순서 그대로
KeyMapVec = Tuple[KeyMap, ...]      # 레이어 0부터 선언 순서
ActionMap = Dict[int, Action]       # 중복 인덱스는 나중 것이 이김


def describe_action(act: Action) -> str:
    """디버그/덤프용 한 줄 표현. 소스 표기(ACTION_*)에 가깝게 돌려준다."""
    if isinstance(act, Function):
        return f"ACTION_FUNCTION({act.key})"
    if isinstance(act, FunctionTap):
        return f"ACTION_FUNCTION_TAP({act.key})"
    if isinstance(act, LayerMomentary):
        return f"ACTION_LAYER_MOMENTARY({act.layer})"
    if isinstance(act, LayerSet):
        return f"ACTION_LAYER_SET({act.layer}, {act.on})"
    if isinstance(act, LayerSetClear):
        return f"ACTION_LAYER_SET_CLEAR({act.layer})"
    if isinstance(act, LayerToggle):
        return f"ACTION_LAYER_TOGGLE({act.layer})"
    if isinstance(act, LayerTapToggle):
        return f"ACTION_LAYER_TAP_TOGGLE({act.layer})"
    if isinstance(act, DefaultLayerSet):
        return f"ACTION_DEFAULT_LAYER_SET({act.layer})"
    if isinstance(act, LayerTapKey):
        return f"ACTION_LAYER_TAP_KEY({act.layer}, {act.key})"
    if isinstance(act, ModsKey):
        return f"ACTION_MODS_KEY({act.mods}, {act.key})"
    if isinstance(act, ModsTapKey):
        return f"ACTION_MODS_TAP_KEY({act.mods}, {act.key})"
    raise AssertionError(f"unknown action: {act!r}")
