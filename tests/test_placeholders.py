import pytest

from translation_assistant.enums import PlaceholderKind
from translation_assistant.placeholders import (
    extract_runs,
    find_all,
    mark_placeholders,
    rtrim,
    text_fragments,
)

GRAPHIE = "![](web+graphie://ka-perseus-graphie.s3.amazonaws.com/1001)"
GRAPHIE_LINK = "web+graphie://ka-perseus-graphie.s3.amazonaws.com/3001"
IMAGE = "https://ka-perseus-graphie.s3.amazonaws.com/2001.png"
WIDGET = "[[☃ numeric-input 1]]"


def test_find_all_math():
    text = r"Simplify $2x = 4$ and $\text{cost} = \$5$."
    assert find_all(text, PlaceholderKind.MATH) == ["$2x = 4$", r"$\text{cost} = \$5$"]


def test_escaped_dollar_does_not_open_math():
    text = r"It costs \$5 and $x$ more, or $\$3$"
    assert find_all(text, PlaceholderKind.MATH) == ["$x$", r"$\$3$"]
    assert mark_placeholders(text).skeleton == r"It costs \$5 and __MATH__ more, or __MATH__"


def test_find_all_other_kinds():
    text = f"{GRAPHIE}\n\nSee {IMAGE}, then {GRAPHIE_LINK} and {WIDGET}"
    assert find_all(text, PlaceholderKind.GRAPHIE) == [GRAPHIE]
    assert find_all(text, PlaceholderKind.IMAGE) == [IMAGE, GRAPHIE_LINK]
    assert find_all(text, PlaceholderKind.WIDGET) == [WIDGET]


def test_graphie_link_is_not_counted_twice():
    assert find_all(GRAPHIE, PlaceholderKind.IMAGE) == []
    assert find_all(GRAPHIE_LINK, PlaceholderKind.IMAGE) == [GRAPHIE_LINK]


def test_find_all_rejects_text():
    with pytest.raises(ValueError):
        find_all("plain", PlaceholderKind.TEXT)


def test_mark_placeholders():
    marked = mark_placeholders(f"Solve $x + 1 = 2$\n\n{WIDGET} {GRAPHIE}")
    assert marked.skeleton == "Solve __MATH__\n\n__WIDGET__ __GRAPHIE__"
    assert marked.lines == ["Solve __MATH__", "__WIDGET__ __GRAPHIE__"]
    assert marked.find_all(PlaceholderKind.MATH) == ["$x + 1 = 2$"]
    assert marked.find_all(PlaceholderKind.IMAGE) == []


def test_extract_runs():
    text = f"Solve $x = 1$ using {IMAGE}"
    runs = extract_runs(text)
    assert [run.kind for run in runs] == [
        PlaceholderKind.TEXT,
        PlaceholderKind.MATH,
        PlaceholderKind.TEXT,
        PlaceholderKind.IMAGE,
    ]
    assert [run.is_placeholder for run in runs] == [False, True, False, True]
    assert "".join(run.text for run in runs) == text


def test_runs_and_marked_string_agree():
    text = f"{GRAPHIE} shows $y = 2x$\n\nsee {GRAPHIE_LINK} and {WIDGET}"
    runs = extract_runs(text)
    marked = mark_placeholders(text)

    assert [run.kind for run in runs if run.is_placeholder] == [
        PlaceholderKind.GRAPHIE,
        PlaceholderKind.MATH,
        PlaceholderKind.IMAGE,
        PlaceholderKind.WIDGET,
    ]
    assert marked.skeleton == "__GRAPHIE__ shows __MATH__\n\nsee __IMAGE__ and __WIDGET__"
    for kind in (PlaceholderKind.MATH, PlaceholderKind.GRAPHIE, PlaceholderKind.IMAGE):
        assert marked.find_all(kind) == [run.text for run in runs if run.kind == kind]


def test_extract_runs_keeps_spelled_out_markers_as_text():
    text = "The __MATH__ marker"
    runs = extract_runs(text)
    assert "".join(run.text for run in runs) == text
    assert all(not run.is_placeholder for run in runs)


def test_extract_runs_of_empty_string():
    assert extract_runs("") == []


def test_text_fragments():
    math = r"$\text{red} + \textbf{blue} = \text {green}$"
    assert text_fragments(math) == ["red", "blue", "green"]
    assert text_fragments("$x$") == []


def test_rtrim():
    assert rtrim("  Solve $x$ \n\n ") == "  Solve $x$"
