"""키맵 소스 파일 로더"""

from __future__ import annotations
from pathlib    import Path


def load_keymap_text(path: str) -> str:
    """
    Load keymap source text.
    주석 안의 비 UTF-8 바이트는 surrogateescape로 보존(파싱에는 영향 없음).
    """
    text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    return text.replace("\r\n", "\n").replace("\r", "\n")
