import re

from translation_assistant.math_translator import (
    detect_closed_interval,
    detect_coordinates,
    get_separator,
    normalize_translated_math,
    ordered_pair_regex,
    translate_indian_digit_grouping,
    translate_math,
    wrap_parens,
)
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules

RULES = DEFAULT_NOTATION_RULES

# Pashto as it would be set up once Perso-Arabic digits are enabled
PASHTO_RULES = NotationRules(
    no_thousand_sep=frozenset({"ps"}),
    arabic_comma=frozenset({"ps"}),
    perso_arabic_numerals=frozenset({"ps"}),
)

THOUSANDS_SAMPLE = r"1{,}000{,}000 + 9{,}000"
COLORED_DECIMALS_SAMPLE = r"\blue{13}.\tealE{3} \tealE{9}.\blue{4} \redA{0}.\red{33}"


def test_en_is_returned_unchanged():
    math = r"1{,}000{,}000 \times 9{,}000.400 \div 2 = \sin (1,2)"
    assert translate_math(math, None, "en") == math
    assert translate_math(math, "]1;2[", "en") == math


def test_unknown_locale_only_gets_template_free_rules():
    math = r"1{,}000.5 \times 2"
    assert translate_math(math, None, "xx") == math


def test_thousand_separator_as_thin_space():
    for locale in RULES.thousand_sep_as_thin_space:
        assert translate_math(THOUSANDS_SAMPLE, None, locale) == r"1\,000\,000 + 9\,000", locale


def test_thousand_separator_as_dot():
    for locale in RULES.thousand_sep_as_dot:
        assert translate_math(THOUSANDS_SAMPLE, None, locale) == "1.000.000 + 9.000", locale


def test_thousand_separator_dropped():
    for locale in RULES.no_thousand_sep:
        assert translate_math(THOUSANDS_SAMPLE, None, locale) == "1000000 + 9000", locale


def test_decimal_point_to_decimal_comma():
    for locale in RULES.decimal_comma:
        assert translate_math("1000.000 + 9.4 + 45.0", None, locale) == "1000{,}000 + 9{,}4 + 45{,}0", locale


def test_thousand_separator_and_decimal_comma_together():
    assert translate_math(r"1{,}000{,}000.700 + 9{,}000.000", None, "cs") == r"1\,000\,000{,}700 + 9\,000{,}000"
    assert translate_math(r"3{,}000.540 \times x", None, "pt") == r"3.000{,}540 \times x"
    assert translate_math(r"3{,}000.500 \times x = 3{,}300{,}000", None, "ko") == r"3000.500 \times x = 3300000"


def test_japanese_keeps_us_numbers():
    math = r"3{,}000.5 \times x = 9.9 \div 3{,}300{,}000"
    assert translate_math(math, None, "ja") == math


def test_division_equation_is_not_a_decimal():
    assert translate_math(r"50 \div 10=5", None, "cs") == r"50 \mathbin{:} 10=5"


def test_multiplication_notation():
    for locale in RULES.times_as_cdot:
        assert translate_math(r"2 \times 2 = 4", None, locale) == r"2 \cdot 2 = 4", locale
    for locale in RULES.cdot_as_times:
        assert translate_math(r"2 \cdot 2 = 4", None, locale) == r"2 \times 2 = 4", locale


def test_division_notation():
    for locale in RULES.div_as_colon:
        assert translate_math(r"8 \div 2 = 4", None, locale) == r"8 \mathbin{:} 2 = 4", locale


def test_several_notations_at_once():
    math = r"8\div 2=2 \times 2, 1{,}000{,}000.874"
    assert translate_math(math, None, "cs") == r"8\mathbin{:} 2=2 \cdot 2, 1\,000\,000{,}874"


def test_doubly_escaped_commands():
    math = r"3 \\times x = 9.9 \\div 3"
    assert translate_math(math, None, "cs") == r"3 \\cdot x = 9{,}9 \\mathbin{:} 3"


def test_sine_as_sen():
    for locale in RULES.sin_as_sen:
        assert translate_math(r"\sin \theta", None, locale) == r"\operatorname{sen} \theta", locale
    assert translate_math(r"\arcsin x", None, "pt") == r"\operatorname{arcsen} x"


def test_trig_functions():
    math = r"\sin\cos\tan\cot\csc\sec"
    assert translate_math(math, None, "pt-pt") == (
        r"\operatorname{sen}\cos\operatorname{tg}\operatorname{cotg}\operatorname{cossec}\sec"
    )
    assert translate_math(r"\cot x + \arctan y", None, "ru") == r"\operatorname{ctg} x + \operatorname{arctg} y"
    assert translate_math(r"\csc x", None, "nl") == r"\operatorname{cosec} x"


def test_repeating_decimals_with_decimal_comma():
    math = r"1.\overline{3} + 9.\overline{44}"
    for locale in ("cs", "de", "fr"):
        assert translate_math(math, None, locale) == r"1{,}\overline{3} + 9{,}\overline{44}", locale


def test_repeating_decimals_as_parens():
    assert translate_math(r"0.\overline{3} + 0.\overline{142857}", None, "ru") == "0{,}(3) + 0{,}(142857)"


def test_repeating_decimals_as_dots():
    math = r"0.\overline{3} + 0.\overline{142857}"
    assert translate_math(math, None, "ja") == r"0.\dot{3} + 0.\dot{1}4285\dot{7}"
    assert translate_math(math, None, "hu") == r"0{,}\dot{3} + 0{,}\dot{1}4285\dot{7}"


def test_decimals_wrapped_in_color_commands():
    expected = r"\blue{13}{,}\tealE{3} \tealE{9}{,}\blue{4} \redA{0}{,}\red{33}"
    for locale in RULES.decimal_comma:
        assert translate_math(COLORED_DECIMALS_SAMPLE, None, locale) == expected, locale


def test_decimals_wrapped_in_other_commands_are_kept():
    math = r"\hat{1}.\tealE{3} \tealE{9}.\hat{4}"
    for locale in RULES.decimal_comma:
        assert translate_math(math, None, locale) == math, locale
    assert translate_math(math, None, "ps", PASHTO_RULES) == r"\hat{۱}.\tealE{۳} \tealE{۹}.\hat{۴}"


def test_perso_arabic_numerals():
    assert translate_math("1234567890", None, "ps", PASHTO_RULES) == "۱۲۳۴۵۶۷۸۹۰"


def test_pashto_numbers():
    assert translate_math(r"1{,}234{,}567.890", None, "ps", PASHTO_RULES) == "۱۲۳۴۵۶۷{،}۸۹۰"
    assert translate_math(r"1.\overline{3} + 9.\overline{44}", None, "ps", PASHTO_RULES) == (
        r"۱{،}\overline{۳} + ۹{،}\overline{۴۴}"
    )
    assert translate_math(COLORED_DECIMALS_SAMPLE, None, "ps", PASHTO_RULES) == (
        r"\blue{۱۳}{،}\tealE{۳} \tealE{۹}{،}\blue{۴} \redA{۰}{،}\red{۳۳}"
    )


def test_pashto_is_western_by_default():
    assert translate_math("1234567890", None, "ps") == "1234567890"


def test_indian_digit_grouping():
    assert translate_math(r"100{,}000{,}000", None, "hi") == r"10{,}00{,}00{,}000"
    assert translate_math(r"12{,}345{,}678 + 1{,}000", None, "hi") == r"1{,}23{,}45{,}678 + 1{,}000"
    assert translate_indian_digit_grouping(r"123{,}456") == r"1{,}23{,}456"


def test_detect_closed_interval():
    assert detect_closed_interval("[0,1]")
    assert detect_closed_interval("[0,1)")
    assert detect_closed_interval(r"(\frac{1}{2}, x]")
    assert not detect_closed_interval("(0,1)")
    assert not detect_closed_interval("x + 1")


def test_detect_coordinates():
    assert detect_coordinates("(3,1)")
    assert detect_coordinates("(-1,-1)")
    assert detect_coordinates(r"(\blue{5}, 2)")
    assert not detect_coordinates("(1,3)")
    assert not detect_coordinates("(x,y)")
    assert not detect_coordinates(r"(-\pi, \pi)")


def test_closed_and_half_closed_intervals():
    assert translate_math("(1,2) [2,b] [a,c) (1.2,5]", None, "fr") == "]1;2[ [2;b] [a;c[ ]1{,}2;5]"
    assert translate_math("[0,3) (-5,\\red3]", "(-1;3)", "cs") == "⟨0;3) (-5;\\red3⟩"
    assert translate_math("[0, 1] (2, 5)", None, "de") == "[0;1] (2;5)"


def test_interval_separator_from_hint():
    assert translate_math("[0,1] (2,5)", "[0~;~3]", "fr") == "[0~;~1] ]2~;~5["


def test_coordinates():
    assert translate_math(r"(2,1) (x,y) (\green4,1.5)", None, "cs") == r"[2;1] [x;y] [\green4;1{,}5]"
    assert translate_math("( 2, 1)", "[0;1]", "cs") == "[2;1]"
    assert translate_math("(2,1)", "[0; 1 ]", "cs") == "[2; 1]"
    assert translate_math(r"\left(3,1\right)", None, "cs") == r"\left[3;1\right]"
    assert translate_math("(3,1)", None, "de") == "(3;1)"


def test_ambiguous_pair_follows_hint():
    assert translate_math("(a, b) (1,2)", "]1,2[", "fr") == "]a,b[ ]1,2["
    assert translate_math(r"(0,3) (\blueD{-1},0)", r"]0~;3[ ]\blueD{-1}~;0[", "fr") == (
        r"]0~;3[ ]\blueD{-1}~;0["
    )
    assert translate_math(r"(0,3.\overline{3})", r"[0;3{,}\overline{3}]", "cs") == r"[0;3{,}\overline{3}]"
    assert translate_math("(a,b)", "(1|2)", "de") == "(a|b)"


def test_ambiguous_pair_without_usable_hint_is_kept():
    assert translate_math("(0,3)", None, "fr") == "(0,3)"
    assert translate_math("(0,3)", "", "cs") == "(0,3)"
    # French never writes points in square brackets
    assert translate_math("(0,3)", "[0;3]", "fr") == "(0,3)"
    # Czech never writes open intervals with reversed brackets
    assert translate_math("(0,3)", "]0;3[", "cs") == "(0,3)"


def test_template_dependent_operators():
    hint = r"$2 \cdot 2 \mathbin{:} 2$"
    assert translate_math(r"$4 \div 1 \times 5$", hint, "id") == r"$4 \mathbin{:} 1 \cdot 5$"
    assert translate_math(r"$4 \div 1 \times 5$", r"$2 \times 2 \mathbin{:} 2$", "id") == r"$4 \mathbin{:} 1 \times 5$"
    assert translate_math(r"$3 \times y$", None, "bn") == r"$3 \times y$"
    # Mixed notation in the translation tells nothing
    assert translate_math(r"$3 \times y$", r"$3 \cdot x \times y$", "bn") == r"$3 \times y$"


def test_template_dependent_operators_need_listed_locale():
    assert translate_math(r"$6 \div y$", r"$6 \mathbin{:} 3$", "fr") == r"$6 \div y$"


def test_get_separator_defaults():
    regex = re.compile(wrap_parens(ordered_pair_regex("cs"), "[", "]"))
    assert get_separator(None, regex, "cs") == ";"
    assert get_separator("", regex, "ja") == ","
    assert get_separator("[1 ; 2]", regex, "cs") == " ; "


def test_normalize_braced_thin_space():
    for locale in RULES.thousand_sep_as_thin_space:
        assert normalize_translated_math(r"1{\,}000{\,}000 + 9\,000", locale) == r"1\,000\,000 + 9\,000", locale


def test_normalize_braced_dot():
    for locale in RULES.thousand_sep_as_dot:
        assert normalize_translated_math("1{.}000{.}000 + 9.000 + 1{,}2", locale) == "1.000.000 + 9.000 + 1{,}2", locale


def test_normalize_tilde_as_thin_space():
    for locale in RULES.thousand_sep_as_thin_space:
        assert normalize_translated_math("1~000~000 + 9~000", locale) == r"1\,000\,000 + 9\,000", locale
        assert normalize_translated_math("1{~}000{~}000 + 9{~}000", locale) == r"1\,000\,000 + 9\,000", locale


def test_normalize_leaves_en_alone():
    assert normalize_translated_math(r"1{\,}000{\,}000 + 9\,000", "en") == r"1{\,}000{\,}000 + 9\,000"
    assert normalize_translated_math("1~000~000 + 9~000", "en") == "1~000~000 + 9~000"


def test_normalize_trig_abbreviations():
    assert normalize_translated_math(r"\tg x + \cotg y", "cs") == r"\operatorname{tg} x + \operatorname{cotg} y"
    assert normalize_translated_math(r"\tg x", "fr") == r"\tg x"


def test_normalize_spacing_inside_pairs():
    assert normalize_translated_math("[0; 1 ]", "cs") == "[0; 1]"
    assert normalize_translated_math("] 0;3 [", "fr") == "]0;3["
