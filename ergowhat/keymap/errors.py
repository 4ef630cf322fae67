# ergowhat/keymap/errors.py
"""파싱 오류 분류 + 캐럿 스니펫 유틸.

모든 오류는 내장 `SyntaxError`의 하위 클래스다.
부분 결과는 없다: 어느 하나라도 던져지면 파싱 전체가 실패한다.
"""

from __future__ import annotations
from typing import Optional, Tuple


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [start, end) 범위를 반환."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end

def line_col(src: str, pos: int) -> Tuple[int, int]:
    """절대 오프셋 → (line, col), 둘 다 1-based."""
    start, _ = _line_bounds(src, pos)
    return src.count("\n", 0, pos) + 1, (pos - start) + 1

def caret_snippet(src: str, pos: int) -> str:
    """해당 절대 오프셋 pos에 캐럿(^)을 찍은 스니펫을 생성."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    col = (pos - start) + 1
    caret = " " * (col - 1) + "^"
    return f"{line}\n{caret}"


class KeymapSyntaxError(SyntaxError):
    """기대한 대안이 하나도 맞지 않을 때."""
    kind = "SyntaxError"

    def __init__(self, message: str, src: Optional[str] = None, pos: int = 0):
        self.pos = pos
        self.line, self.col = line_col(src, pos) if src is not None else (0, 0)
        self.reason = message
        if src is not None:
            message = f"{message} at {self.line}:{self.col}\n{caret_snippet(src, pos)}"
        super().__init__(message)

class InvalidInteger(KeymapSyntaxError):
    """앞자리 0 (예: 0123) 처럼 정수 문법을 어긴 경우."""
    kind = "InvalidInteger"

class UnknownAction(KeymapSyntaxError):
    kind = "UnknownAction"

class UnterminatedComment(KeymapSyntaxError):
    kind = "UnterminatedComment"

class SectionNotFound(KeymapSyntaxError):
    """keymaps[]... / fn_actions[] 헤더를 끝까지 못 찾은 경우."""
    kind = "SectionNotFound"
