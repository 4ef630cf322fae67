"""키 이름 → 키캡 라벨(normal, shifted) 변환표."""

from __future__ import annotations
from typing import Dict, Tuple

_PREFIXES = ("KC_", "MOD_")

# 이름: (normal, shifted)
_LABELS: Dict[str, Tuple[str, str]] = {
    "NO":   ("", ""),
    "EQL":  ("=", "+"),
    "RGHT": ("→", ""),
    "LEFT": ("←", ""),
    "UP":   ("↑", ""),
    "DOWN": ("↓", ""),
    "COMM": (",", "<"),
    "DOT":  (".", ">"),
    "QUOT": ("'", "\""),
    "MINS": ("-", "_"),
    "BSLS": ("\\", "|"),
    "SLSH": ("/", "?"),
    "GRV":  ("`", "~"),
    "SCLN": (";", ":"),
    "ENT":  ("⏎", ""),
    "PENT": ("⏎", ""),
    "LBRC": ("[", "{"),
    "RBRC": ("]", "}"),
    "SPC":  ("␣", ""),
}
_LABELS.update({str(d): (str(d), s) for d, s in zip(range(10), ")!@#$%^&*(")})


def key_label(name: str) -> Tuple[str, str]:
    """`KC_`/`MOD_` 접두사를 떼고 표에 있으면 기호로, 없으면 이름 그대로."""
    for p in _PREFIXES:
        name = name.replace(p, "")
    return _LABELS.get(name, (name, ""))
