import pytest

from ergowhat.keymap import (
    ACTIONS_HEADER, KEYMAPS_HEADER,
    DefaultLayerSet, Function, FunctionTap, Functional,
    InvalidInteger, KeymapSyntaxError, LayerMomentary, LayerSet, LayerSetClear,
    LayerTapKey, LayerTapToggle, LayerToggle, ModsKey, ModsTapKey, Named,
    SectionNotFound, UnknownAction, UnterminatedComment,
    load_keymap_text, parse_action, parse_actions, parse_file, parse_keymap,
    parse_keymaps, parse_string,
)

KEYMAPS_SRC = "keymaps[][MATRIX_ROWS][MATRIX_COLS] = { KEYMAP(F11), KEYMAP(KC_11)};"
ACTIONS_SRC = "fn_actions[] = { [1] = ACTION_LAYER_MOMENTARY(2), [3] = ACTION_LAYER_SET(88, ON_BOTH) };"


# ---- Keymap Parser ----

def test_empty_keymap():
    assert parse_keymap("KEYMAP()") == ()


def test_keymap_mixed_keys():
    assert parse_keymap("KEYMAP(FN10,F10)") == (Functional(10), Named("F10"))


def test_keymap_with_comments_and_trailing_comma():
    km = parse_keymap("KEYMAP( /* layer 8*/ TRNS, NO, // row end\n 7, FN14, )")
    assert km == (Named("TRNS"), Named("NO"), Named("7"), Functional(14))


def test_keymap_missing_comma():
    with pytest.raises(KeymapSyntaxError):
        parse_keymap("KEYMAP(A B)")


def test_keymap_unbalanced_paren():
    with pytest.raises(KeymapSyntaxError):
        parse_keymap("KEYMAP(A, B")


def test_keymap_wrong_macro_name():
    with pytest.raises(KeymapSyntaxError):
        parse_keymap("LAYOUT(A, B)")


# ---- Action Parser ----

@pytest.mark.parametrize("src, action", [
    ("ACTION_FUNCTION(TRNS)", Function(Named("TRNS"))),
    ("ACTION_FUNCTION_TAP(FN11)", FunctionTap(Functional(11))),
    ("ACTION_LAYER_MOMENTARY( /* temp layer */ 2 )", LayerMomentary(2)),
    ("ACTION_LAYER_SET(13, ON_BOTH /*comment*/)", LayerSet(13, "ON_BOTH")),
    ("ACTION_LAYER_SET_CLEAR(4)", LayerSetClear(4)),
    ("ACTION_LAYER_TOGGLE(5)", LayerToggle(5)),
    ("ACTION_LAYER_TAP_TOGGLE(6)", LayerTapToggle(6)),
    ("ACTION_DEFAULT_LAYER_SET(0)", DefaultLayerSet(0)),
    ("ACTION_LAYER_TAP_KEY(28, SPC)", LayerTapKey(28, Named("SPC"))),
    ("ACTION_MODS_KEY(LGUI, BSLS)", ModsKey(Named("LGUI"), Named("BSLS"))),
    ("ACTION_MODS_TAP_KEY( RGUI /* or left? */, F11)", ModsTapKey(Named("RGUI"), Named("F11"))),
    ("ACTION_MODS_KEY\n  (MOD_LSFT , KC_DOT)", ModsKey(Named("MOD_LSFT"), Named("KC_DOT"))),
])
def test_action_forms(src, action):
    assert parse_action(src) == action


def test_function_tap_not_confused_with_function():
    assert isinstance(parse_action("ACTION_FUNCTION_TAP(X)"), FunctionTap)
    assert isinstance(parse_action("ACTION_FUNCTION(X)"), Function)


def test_unknown_action_suffix():
    with pytest.raises(UnknownAction) as ei:
        parse_action("ACTION_MACRO(HELLO)")
    assert ei.value.pos == 0


def test_non_action_identifier():
    with pytest.raises(UnknownAction):
        parse_action("MACRO(HELLO)")


def test_action_wrong_arity():
    with pytest.raises(KeymapSyntaxError):
        parse_action("ACTION_LAYER_SET(1)")
    with pytest.raises(KeymapSyntaxError):
        parse_action("ACTION_LAYER_MOMENTARY(1, 2)")


def test_action_layer_leading_zero():
    with pytest.raises(InvalidInteger):
        parse_action("ACTION_LAYER_MOMENTARY(01)")


# ---- Section Locator ----

def test_keymap_section():
    assert parse_keymaps(KEYMAPS_SRC) == ((Named("F11"),), (Named("KC_11"),))


def test_action_section():
    assert parse_actions(ACTIONS_SRC) == {1: LayerMomentary(2), 3: LayerSet(88, "ON_BOTH")}


def test_keymap_section_with_surrounding_junk():
    src = """extra beginging junk
keymaps[][MATRIX_ROWS][MATRIX_COLS]
=
{

  KEYMAP(A,B,C,D),
  KEYMAP(X,Y,Z),
  KEYMAP(F11, F12, FN8, FN12)
}
"""
    assert parse_keymaps(src) == (
        (Named("A"), Named("B"), Named("C"), Named("D")),
        (Named("X"), Named("Y"), Named("Z")),
        (Named("F11"), Named("F12"), Functional(8), Functional(12)),
    )


def test_empty_sections():
    assert parse_keymaps(KEYMAPS_HEADER + " = { }") == ()
    assert parse_actions(ACTIONS_HEADER + " = {}") == {}


def test_duplicate_action_index_last_write_wins():
    src = "fn_actions[] = { [2] = ACTION_LAYER_TOGGLE(1), [2] = ACTION_LAYER_TOGGLE(7), }"
    assert parse_actions(src) == {2: LayerToggle(7)}


def test_comment_between_header_tokens():
    src = "fn_actions[] /* c */ = // d\n { [ 0 ] /* index */ = ACTION_MODS_TAP_KEY( RGUI /* or left? */, F11) }"
    assert parse_actions(src) == {0: ModsTapKey(Named("RGUI"), Named("F11"))}


def test_missing_keymap_header():
    with pytest.raises(SectionNotFound):
        parse_keymaps(ACTIONS_SRC)


def test_missing_actions_header():
    with pytest.raises(SectionNotFound):
        parse_actions(KEYMAPS_SRC)


def test_missing_closing_brace():
    with pytest.raises(KeymapSyntaxError):
        parse_keymaps("keymaps[][MATRIX_ROWS][MATRIX_COLS] = { KEYMAP(A), KEYMAP(B)")


def test_missing_comma_between_layers():
    with pytest.raises(KeymapSyntaxError):
        parse_keymaps("keymaps[][MATRIX_ROWS][MATRIX_COLS] = { KEYMAP(A) KEYMAP(B) }")


def test_header_inside_comment_is_skipped():
    src = ("/* keymaps[][MATRIX_ROWS][MATRIX_COLS] */\n"
           "// the fn_actions[] table lives below\n"
           "/* see fn_actions[] below */\n"
           + KEYMAPS_SRC + "\n" + ACTIONS_SRC)
    assert parse_string(src) == parse_string(KEYMAPS_SRC + ACTIONS_SRC)


def test_header_inside_string_literal_matches_first():
    # 문자열 리터럴은 잡음 취급이라 그 안의 헤더가 먼저 매치되고 파싱이 실패한다
    src = 'const char *s = "keymaps[][MATRIX_ROWS][MATRIX_COLS]";\n' + KEYMAPS_SRC
    with pytest.raises(KeymapSyntaxError):
        parse_keymaps(src)


def test_unterminated_comment_before_header():
    with pytest.raises(UnterminatedComment):
        parse_keymaps("/* never closed\n" + KEYMAPS_SRC)
    with pytest.raises(UnterminatedComment):
        parse_actions("/* never closed\n" + ACTIONS_SRC)


# ---- Document Assembler ----

def test_parse_string_both_sections_any_order():
    expected = (((Named("F11"),), (Named("KC_11"),)),
                {1: LayerMomentary(2), 3: LayerSet(88, "ON_BOTH")})
    assert parse_string(KEYMAPS_SRC + "\n" + ACTIONS_SRC) == expected
    assert parse_string(ACTIONS_SRC + "\n" + KEYMAPS_SRC) == expected


def test_unrelated_c_text_does_not_change_result():
    plain = parse_string(KEYMAPS_SRC + ACTIONS_SRC)
    noisy = parse_string(
        '#include "keymap_common.h"\n#define FOO(x) ((x) + 1)\nint x = 3;\n'
        + KEYMAPS_SRC
        + "\nstatic void f(void) { if (a < b) { return; } }\n/* noise */\n"
        + ACTIONS_SRC
        + "\nvoid action_function(keyrecord_t *record, uint8_t id, uint8_t opt) {}\n"
    )
    assert noisy == plain


def test_functional_without_action_is_not_an_error():
    keymaps, actions = parse_string(
        "keymaps[][MATRIX_ROWS][MATRIX_COLS] = { KEYMAP(FN7) }; fn_actions[] = { };"
    )
    assert keymaps == ((Functional(7),),)
    assert actions == {}


def test_malformed_input_fails_totally():
    for src in (
        KEYMAPS_SRC + "fn_actions[] = { [0] = ACTION_BOGUS(1) };",
        KEYMAPS_SRC + "fn_actions[] = { [0] = ACTION_LAYER_TOGGLE(1) /* open",
        KEYMAPS_SRC + "fn_actions[] = { [0] = ACTION_LAYER_TOGGLE(1)",
    ):
        with pytest.raises(SyntaxError):
            parse_string(src)


def test_unterminated_comment_in_section():
    with pytest.raises(UnterminatedComment):
        parse_keymaps("keymaps[][MATRIX_ROWS][MATRIX_COLS] = { /* KEYMAP(A) }")


def test_parse_is_idempotent(ergodox_source):
    assert parse_string(ergodox_source) == parse_string(ergodox_source)


def test_full_ergodox_file(ergodox_source):
    keymaps, actions = parse_string(ergodox_source)
    assert [len(km) for km in keymaps] == [76, 76]
    assert keymaps[0][0] == Named("GRV")
    assert keymaps[0][14] == Functional(3)
    assert keymaps[0][75] == Named("SPC")
    assert keymaps[1][64] == Functional(9)
    assert actions == {
        0: Function(Named("TEENSY_KEY")),
        1: LayerMomentary(1),
        2: LayerSet(1, "ON_PRESS"),
        3: ModsTapKey(Named("MOD_LSFT"), Named("KC_TAB")),
    }


def test_parse_file(ergodox_source_path, ergodox_source):
    assert parse_file(str(ergodox_source_path)) == parse_string(ergodox_source)


def test_loader_normalises_line_endings(tmp_path):
    path = tmp_path / "crlf.c"
    path.write_bytes(b"/* \xff stray byte */\r\n" + KEYMAPS_SRC.encode() + b"\r\n" + ACTIONS_SRC.encode())
    text = load_keymap_text(str(path))
    assert "\r" not in text
    assert parse_string(text) == parse_string(KEYMAPS_SRC + ACTIONS_SRC)
