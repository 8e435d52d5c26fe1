from translation_assistant.enums import PlaceholderKind
from translation_assistant.group_key import GroupKey, normalize_skeleton, string_to_group_key


def test_group_key_json():
    assert string_to_group_key(r"simplify ${\text{red} = 5$").to_json() == (
        '{"str":"simplify __MATH__","texts":[["red"]]}'
    )
    assert string_to_group_key(r"simplify ${\textbf{red} = 5$").to_json() == (
        '{"str":"simplify __MATH__","texts":[["red"]]}'
    )
    assert string_to_group_key(r"${\text{red}, \textbf{green}, \text{blue}$").to_json() == (
        '{"str":"__MATH__","texts":[["blue","green","red"]]}'
    )
    assert string_to_group_key(r"${\text{red}$ and $\textbf{blue}$").to_json() == (
        '{"str":"__MATH__ and __MATH__","texts":[["red"],["blue"]]}'
    )
    assert string_to_group_key(r"${\text {red} + \textbf {blue}$ and $1 + 2$").to_json() == (
        '{"str":"__MATH__ and __MATH__","texts":[["blue","red"],[]]}'
    )


def test_group_key_keeps_non_ascii():
    key = string_to_group_key(r"Řešte $\text{červená} = 5$")
    assert key.to_json() == '{"str":"Řešte __MATH__","texts":[["červená"]]}'


def test_group_key_json_round_trip():
    key = string_to_group_key(r"$\text{red}$ and $x$")
    assert GroupKey.from_json(key.to_json()) == key
    assert str(key) == key.to_json()


def test_strings_differing_only_in_math_share_a_key():
    assert string_to_group_key("simplify $2x = 4$") == string_to_group_key("simplify $3x + 1 = 9$")
    assert string_to_group_key("simplify $2x = 4$") != string_to_group_key("simplify $2x = 4$ twice")


def test_math_text_splits_groups():
    assert string_to_group_key(r"$\text{red} = 5$") != string_to_group_key(r"$\text{blue} = 5$")


def test_bold_markup_is_ignored():
    assert string_to_group_key("**Solve** $2x = 5$") == string_to_group_key("Solve $2x - 5 = 10$")


def test_trailing_punctuation_is_ignored():
    assert string_to_group_key("Simplify $x$.") == string_to_group_key("Simplify $y$")
    assert string_to_group_key("Simplify $x$:\n\n$x = 1$;") == string_to_group_key("Simplify $y$\n\n$y = 2$")
    assert string_to_group_key("Simplify $x$?") != string_to_group_key("Simplify $y$")


def test_math_before_widget_spacing_is_ignored():
    assert normalize_skeleton("__MATH__   __WIDGET__") == "__MATH__ __WIDGET__"
    assert normalize_skeleton("__MATH____WIDGET__") == "__MATH__ __WIDGET__"
    assert string_to_group_key("$x =$ [[☃ numeric-input 1]]") == string_to_group_key("$y =$[[☃ numeric-input 2]]")


def test_paragraphs_are_stripped():
    assert normalize_skeleton("  Solve __MATH__  \n\n  Check ") == "Solve __MATH__\n\nCheck"


def test_single_marker_kind():
    assert string_to_group_key("$x + 1$").single_marker_kind == PlaceholderKind.MATH
    assert string_to_group_key("[[☃ radio 1]]").single_marker_kind == PlaceholderKind.WIDGET
    assert string_to_group_key(
        "https://ka-perseus-graphie.s3.amazonaws.com/2001.png"
    ).single_marker_kind == PlaceholderKind.IMAGE
    assert string_to_group_key("Solve $x$").single_marker_kind is None
