# ergowhat/keymap/scanner.py
"""문자 단위 커서 + 토큰 파서.

어휘 규칙(모든 토큰 앞에서 insignificant 텍스트를 먼저 건너뛴다):
    ws       := [ \t\r\n]
    comment  := "//" ... (개행 포함 또는 EOF)  |  "/*" ... "*/"
    integer  := "0" | [1-9][0-9]*            (0123 → InvalidInteger)
    ident    := [A-Za-z0-9_]+                (최장일치)
    fn_key   := "FN" integer                 (식별자 전체가 이 모양일 때만)
    key      := fn_key | ident
    index    := "[" integer "]"
"""

from __future__ import annotations
import regex as re
from typing import Optional

from .ast import Functional, Key, Named
from .errors import InvalidInteger, KeymapSyntaxError, UnterminatedComment

_IDENT_RE = re.compile(r"[A-Za-z0-9_]+")
_DIGITS_RE = re.compile(r"[0-9]+")
_FN_KEY_RE = re.compile(r"FN([0-9]+)")


def _to_int(digits: str, src: str, pos: int) -> int:
    """숫자열 검증: '0' 또는 0으로 시작하지 않는 숫자열만 허용."""
    if len(digits) > 1 and digits[0] == "0":
        raise InvalidInteger(f"leading zero in integer {digits!r}", src, pos)
    return int(digits)


class _TS:
    """불변 입력 위의 단조 증가 커서. 파싱 1회당 하나."""

    def __init__(self, src: str, pos: int = 0):
        self.s = src
        self.i = pos
        self.n = len(src)

    def _peek(self, k: int = 0) -> Optional[str]:
        j = self.i + k
        if j >= self.n:
            return None
        return self.s[j]

    def _starts(self, lit: str) -> bool:
        return self.s.startswith(lit, self.i)

    def _bump(self, n: int = 1) -> None:
        self.i += n

    def _eof(self) -> bool:
        return self.i >= self.n

    def _err(self, msg: str, pos: Optional[int] = None) -> KeymapSyntaxError:
        return KeymapSyntaxError(msg, self.s, self.i if pos is None else pos)

    # ---- Lexical Skipper ----

    def _skip_ws(self) -> None:
        while not self._eof():
            ch = self._peek()
            if ch in " \t\r\n":
                self._bump(1)
                continue
            if self._starts("/*"):
                j = self.s.find("*/", self.i + 2)
                if j == -1:
                    raise UnterminatedComment("unclosed block comment", self.s, self.i)
                self.i = j + 2
                continue
            if self._starts("//"):
                j = self.s.find("\n", self.i + 2)
                self.i = self.n if j == -1 else j + 1
                continue
            break

    # ---- lexeme 조합자: 공백/주석 스킵 후 리터럴 매칭 ----

    def _eat(self, lit: str) -> None:
        self._skip_ws()
        if not self._starts(lit):
            raise self._err(f"expected {lit!r}")
        self._bump(len(lit))

    def _try_eat(self, lit: str) -> bool:
        self._skip_ws()
        if self._starts(lit):
            self._bump(len(lit))
            return True
        return False

    def _at(self, lit: str) -> bool:
        """소비 없이 다음 토큰이 lit로 시작하는지."""
        self._skip_ws()
        return self._starts(lit)

    # ---- Token Parsers ----

    def _integer(self) -> int:
        self._skip_ws()
        m = _DIGITS_RE.match(self.s, self.i)
        if not m:
            raise self._err("expected integer")
        val = _to_int(m.group(0), self.s, self.i)
        self.i = m.end()
        return val

    def _ident(self) -> str:
        self._skip_ws()
        m = _IDENT_RE.match(self.s, self.i)
        if not m:
            raise self._err("expected identifier")
        self.i = m.end()
        return m.group(0)

    def _key(self) -> Key:
        """fn_key를 먼저 시도하고, 아니면 named key.
        식별자 전체를 먼저 읽으므로 FNORD 같은 이름은 입력을 잘라먹지 않는다."""
        self._skip_ws()
        start = self.i
        name = self._ident()
        m = _FN_KEY_RE.fullmatch(name)
        if m:
            return Functional(_to_int(m.group(1), self.s, start + 2))
        return Named(name)

    def _index(self) -> int:
        self._eat("[")
        idx = self._integer()
        self._eat("]")
        return idx
