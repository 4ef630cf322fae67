"""
ErgoDox 배치 IR
=======

렌더러(emit_svg)가 소비하는 **고정 좌표 테이블**.

설계 포인트
-----------
- 레이어 하나 = 76개 슬롯. 슬롯 번호는 KEYMAP(...) 인자 순서와 같다.
- 슬롯은 네 블록(left main / left thumb / right main / right thumb)에 속하고,
  블록마다 평행이동(dx, dy)이 있다. 슬롯 좌표는 블록 기준 상대값.
- 단위 100 = 1u.

주의
----
- 왼손 엄지 블록은 슬롯 32..37, 오른손 메인이 38..69, 오른손 엄지가 70..75.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

# 모양 → (width, height)
K10U = "1u"     # 100 x 100
K15H = "1.5h"   # 150 x 100
K15V = "1.5v"   # 100 x 150
K20V = "2v"     # 100 x 200

SHAPE_SIZE: Dict[str, Tuple[float, float]] = {
    K10U: (100.0, 100.0),
    K15H: (150.0, 100.0),
    K15V: (100.0, 150.0),
    K20V: (100.0, 200.0),
}

VIEWBOX = (0, 0, 2000, 625)

@dataclass(frozen=True)
class KeySlot:
    index: int      # KEYMAP 인자 위치
    x: float
    y: float
    shape: str

@dataclass(frozen=True)
class KeyBlock:
    name: str
    dx: float
    dy: float
    slots: Tuple[KeySlot, ...]


def _row(start: int, y: float, cells: List[Tuple[float, str]]) -> List[KeySlot]:
    return [KeySlot(start + i, x, y, shape) for i, (x, shape) in enumerate(cells)]

def _u(xs: List[float], shape: str = K10U) -> List[Tuple[float, str]]:
    return [(x, shape) for x in xs]


_LEFT_MAIN = (
    _row(0, 0.0, [(0.0, K15H)] + _u([150.0, 250.0, 350.0, 450.0, 550.0, 650.0]))
    + _row(7, 100.0, [(0.0, K15H)] + _u([150.0, 250.0, 350.0, 450.0, 550.0]) + [(650.0, K15V)])
    + _row(14, 200.0, [(0.0, K15H)] + _u([150.0, 250.0, 350.0, 450.0, 550.0]))
    + _row(20, 300.0, [(0.0, K15H)] + _u([150.0, 250.0, 350.0, 450.0, 550.0]))
    + [KeySlot(26, 650.0, 250.0, K15V)]
    + _row(27, 400.0, _u([50.0, 150.0, 250.0, 350.0, 450.0]))
)

_LEFT_THUMB = [
    KeySlot(32, 100.0, 0.0, K10U),
    KeySlot(33, 200.0, 0.0, K10U),
    KeySlot(34, 200.0, 100.0, K10U),
    KeySlot(35, 0.0, 100.0, K20V),
    KeySlot(36, 100.0, 100.0, K20V),
    KeySlot(37, 200.0, 200.0, K10U),
]

_RIGHT_MAIN = (
    _row(38, 0.0, _u([0.0, 100.0, 200.0, 300.0, 400.0, 500.0]) + [(600.0, K15H)])
    + _row(45, 100.0, [(0.0, K15V)] + _u([100.0, 200.0, 300.0, 400.0, 500.0]) + [(600.0, K15H)])
    + _row(52, 200.0, _u([100.0, 200.0, 300.0, 400.0, 500.0]) + [(600.0, K15H)])
    + [KeySlot(58, 0.0, 250.0, K15V)]
    + _row(59, 300.0, _u([100.0, 200.0, 300.0, 400.0, 500.0]) + [(600.0, K15H)])
    + _row(65, 400.0, _u([200.0, 300.0, 400.0, 500.0, 600.0]))
)

_RIGHT_THUMB = [
    KeySlot(70, 0.0, 0.0, K10U),
    KeySlot(71, 100.0, 0.0, K10U),
    KeySlot(72, 0.0, 100.0, K10U),
    KeySlot(73, 0.0, 200.0, K10U),
    KeySlot(74, 100.0, 100.0, K20V),
    KeySlot(75, 200.0, 100.0, K20V),
]

ERGODOX: Tuple[KeyBlock, ...] = (
    KeyBlock("left-main", 0.0, 0.0, tuple(_LEFT_MAIN)),
    KeyBlock("left-thumb", 675.0, 325.0, tuple(_LEFT_THUMB)),
    KeyBlock("right-main", 1250.0, 0.0, tuple(_RIGHT_MAIN)),
    KeyBlock("right-thumb", 1000.0, 325.0, tuple(_RIGHT_THUMB)),
)

SLOT_COUNT = sum(len(b.slots) for b in ERGODOX)
