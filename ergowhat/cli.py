# ergowhat/cli.py
"""ergowhat – TMK/ErgoDox keymap CLI

사용 예)
    $ python -m ergowhat.cli check keymap.c -D
    $ python -m ergowhat.cli build keymap.c -o out/keymap.svg
    $ python -m ergowhat.cli dump  keymap.c

기능
----
- check : 키맵 소스를 파싱해 레이어/액션 요약 출력, 끊어진 FN 참조는 경고
- build : 파싱 결과를 ErgoDox SVG 그림으로 방출
- dump  : 레이어별 키, 액션 테이블을 한 줄씩 출력

디버그 모드(-D/--debug)를 켜면 모델 전체와 단계별 진행을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import List, Optional, Tuple

from .keymap.ast import ActionMap, Functional, KeyMapVec, describe_action

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _dangling_refs(keymaps: KeyMapVec, actions: ActionMap) -> List[Tuple[int, int, int]]:
    """ActionMap에 없는 FN<n> 참조 목록: (layer, slot, n)"""
    out = []
    for layer, km in enumerate(keymaps):
        for slot, key in enumerate(km):
            if isinstance(key, Functional) and key.index not in actions:
                out.append((layer, slot, key.index))
    return out

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_model(path: str, debug: bool) -> Tuple[KeyMapVec, ActionMap]:
    from .keymap.loader import load_keymap_text
    from .keymap.parser import parse_keymaps, parse_actions

    src = load_keymap_text(path)
    if debug: _eprint("[DEBUG] source loaded | chars=%d lines=%d" % (len(src), src.count("\n") + 1))

    keymaps = parse_keymaps(src)
    if debug: _eprint("[DEBUG] keymaps parsed | layers=%d" % len(keymaps))

    actions = parse_actions(src)
    if debug: _eprint("[DEBUG] fn_actions parsed | actions=%d" % len(actions))

    return keymaps, actions

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_model(keymaps: KeyMapVec, actions: ActionMap, out=_eprint) -> None:
    out("\n[KEYMAPS]")
    for n, km in enumerate(keymaps):
        out(f"layer {n:>2} ({len(km)} keys): " + ", ".join(str(k) for k in km))
    out("\n[ACTIONS]")
    for idx in sorted(actions):
        out(f"[{idx}] = {describe_action(actions[idx])}")


def _run(args, body, *, print_model: bool = True) -> int:
    """공통 오류 처리: 파싱 오류/입출력 오류 → 종료코드 2."""
    try:
        keymaps, actions = _load_model(args.file, debug=args.debug)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug and print_model:
        _print_model(keymaps, actions)
    try:
        return body(keymaps, actions)
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    def body(keymaps: KeyMapVec, actions: ActionMap) -> int:
        broken = _dangling_refs(keymaps, actions)
        for layer, slot, idx in broken:
            _eprint(f"[WARN] layer {layer} slot {slot}: FN{idx} has no fn_actions entry")
        sizes = ",".join(str(len(km)) for km in keymaps)
        print(f"[CHECK OK] layers={len(keymaps)} keys=[{sizes}] actions={len(actions)} broken={len(broken)}")
        return 0
    return _run(args, body)


def cmd_build(args) -> int:
    def body(keymaps: KeyMapVec, actions: ActionMap) -> int:
        from .render.emit_svg import emit_svg_to_string

        for layer, slot, idx in _dangling_refs(keymaps, actions):
            _eprint(f"[WARN] layer {layer} slot {slot}: FN{idx} will be drawn as BROKEN")

        out_path = pathlib.Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        src = emit_svg_to_string(keymaps, actions)
        out_path.write_text(src, encoding="utf-8")
        print(f"[EMIT] layers={len(keymaps)} -> {out_path}")
        if args.debug:
            _eprint(f"[DEBUG] bytes={len(src)}")
        return 0
    return _run(args, body)


def cmd_dump(args) -> int:
    def body(keymaps: KeyMapVec, actions: ActionMap) -> int:
        _print_model(keymaps, actions, out=print)
        return 0
    return _run(args, body, print_model=False)

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="ergowhat", description="Prints out TMK/Ergodox layouts")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="키맵 소스를 파싱하고 요약/경고를 출력합니다")
    p_check.add_argument("file", help="키맵 C 소스 파일")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="키맵을 SVG 그림으로 생성합니다")
    p_build.add_argument("file", help="키맵 C 소스 파일")
    p_build.add_argument("-o", "--output", default="keymap.svg", help="출력 파일 경로 (기본: keymap.svg)")
    p_build.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_build.set_defaults(func=cmd_build)

    p_dump = sub.add_parser("dump", help="파싱된 레이어/액션을 한 줄씩 출력합니다")
    p_dump.add_argument("file", help="키맵 C 소스 파일")
    p_dump.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_dump.set_defaults(func=cmd_dump)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
