import re
from collections import Counter
from dataclasses import dataclass, field

from loguru import logger

from translation_assistant.enums import PLACEHOLDER_KINDS, PlaceholderKind
from translation_assistant.errors import MISMATCH_BY_KIND, TemplateError
from translation_assistant.math_translator import (
    SOURCE_LOCALE,
    normalize_translated_math,
    translate_math,
)
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules
from translation_assistant.placeholders import (
    LINE_BREAK,
    TEXT_REGEX,
    TEXTBF_REGEX,
    find_all,
    mark_placeholders,
    rtrim,
    text_fragments,
)

TEXT_MARKER = "__TEXT__"
TEXTBF_MARKER = "__TEXTBF__"

_ANY_MARKER_REGEX = re.compile("|".join(re.escape(kind.marker) for kind in PLACEHOLDER_KINDS))


@dataclass(frozen=True)
class MathMapping:
    english_to_translated: list[int] = field(default_factory=list)
    # English string mapped onto itself, only used to check that another
    # string repeats its math in the same positions
    english_to_english: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Template:
    """
    What one translated string teaches about the strings of its group.

    `lines` are the translated paragraphs with markers in place of math,
    graphies, images and widgets. Each mapping gives, for the n-th marker of
    its kind in the translation, the index of the English occurrence that goes
    there.
    """
    lines: list[str]
    math_mapping: MathMapping
    graphie_mapping: list[int] = field(default_factory=list)
    image_mapping: list[int] = field(default_factory=list)
    widget_mapping: list[int] = field(default_factory=list)
    # English \text{} fragment -> translated fragment
    math_dictionary: dict[str, str] = field(default_factory=dict)
    # Translated math, used to settle notation the English math leaves open
    hint: str = ""

    def mapping_for(self, kind: PlaceholderKind) -> list[int]:
        match kind:
            case PlaceholderKind.MATH:
                return self.math_mapping.english_to_translated
            case PlaceholderKind.GRAPHIE:
                return self.graphie_mapping
            case PlaceholderKind.IMAGE:
                return self.image_mapping
            case PlaceholderKind.WIDGET:
                return self.widget_mapping
            case _:
                raise ValueError(f"No mapping for {kind} runs")


def replace_text_in_math(math: str, dictionary: dict[str, str]) -> str:
    """
    Translates the natural language of \\text{} and \\textbf{} blocks found in
    `dictionary`. Spacing between the command and its brace is kept.
    """
    if not dictionary:
        return math
    fragments = "|".join(re.escape(fragment) for fragment in sorted(dictionary, key=len, reverse=True))
    regex = re.compile(r"\\(text|textbf)(\s*)\{(" + fragments + r")\}")
    return regex.sub(
        lambda match: "\\" + match.group(1) + match.group(2) + "{" + dictionary[match.group(3)] + "}",
        math,
    )


def _math_shape(math: str) -> str:
    math = TEXT_REGEX.sub(TEXT_MARKER, math)
    return TEXTBF_REGEX.sub(TEXTBF_MARKER, math)


def _group_by_shape(maths: list[str]) -> dict[str, list[str]]:
    shapes: dict[str, list[str]] = {}
    for math in maths:
        shapes.setdefault(_math_shape(math), []).append(math)
    return shapes


def _unique_fragments(regex: re.Pattern, maths: list[str]) -> list[str]:
    fragments = [match.group(1) for math in maths for match in regex.finditer(math)]
    return list(dict.fromkeys(fragments))


def get_math_dictionary(
    english: str,
    translated: str,
    locale: str,
    hint: str | None = None,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> dict[str, str]:
    """
    Pairs the natural language of English \\text{} / \\textbf{} blocks with
    the translated one.

    Math spans are matched by shape, i.e. with every text block blanked out,
    and the blocks of matching spans are assumed to keep their order:
    "$\\text{red}$" and "$\\text{roja}$" give {"red": "roja"}.
    """
    inputs = _group_by_shape([
        translate_math(math, hint, locale, rules)
        for math in find_all(english, PlaceholderKind.MATH)
    ])
    outputs = _group_by_shape([
        normalize_translated_math(math, locale, rules)
        for math in find_all(translated, PlaceholderKind.MATH)
    ])

    dictionary: dict[str, str] = {}
    for shape, english_maths in inputs.items():
        # A shape missing from the translation makes the math mapping fail
        if shape not in outputs:
            continue
        for marker, regex in ((TEXT_MARKER, TEXT_REGEX), (TEXTBF_MARKER, TEXTBF_REGEX)):
            if marker not in shape:
                continue
            english_fragments = _unique_fragments(regex, english_maths)
            translated_fragments = _unique_fragments(regex, outputs[shape])
            dictionary.update(zip(english_fragments, translated_fragments))
    return dictionary


def get_mapping(
    english: str,
    translated: str,
    locale: str,
    kind: PlaceholderKind,
    math_dictionary: dict[str, str] | None = None,
    hint: str | None = None,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> list[int]:
    """
    For each occurrence of `kind` in `translated`, the index of the English
    occurrence it is a translation of.

    English math is run through the notation rules and the text dictionary,
    translated math through `normalize_translated_math`, before comparing.
    Raises the TemplateError subclass for `kind` when an occurrence has no
    English counterpart.
    """
    inputs = find_all(english, kind)
    outputs = find_all(translated, kind)
    if kind == PlaceholderKind.MATH:
        inputs = [
            replace_text_in_math(translate_math(math, hint, locale, rules), math_dictionary or {})
            for math in inputs
        ]

    mapping: list[int] = []
    for output in outputs:
        if kind == PlaceholderKind.MATH:
            output = normalize_translated_math(output, locale, rules)
        if output not in inputs:
            raise MISMATCH_BY_KIND[kind](output)
        mapping.append(inputs.index(output))
    return mapping


def _self_math_mapping(english: str, rules: NotationRules) -> list[int]:
    dictionary = get_math_dictionary(english, english, SOURCE_LOCALE, rules=rules)
    return get_mapping(english, english, SOURCE_LOCALE, PlaceholderKind.MATH, dictionary, rules=rules)


def build_template(
    english: str,
    translated: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> Template:
    """
    Builds the template taught by a translated string.
    Raises TemplateError when the translation's placeholders do not line up
    with the English ones.
    """
    english = rtrim(english)
    translated = rtrim(translated)
    marked = mark_placeholders(translated)
    hint = " ".join(marked.find_all(PlaceholderKind.MATH))

    math_dictionary = get_math_dictionary(english, translated, locale, hint, rules)
    return Template(
        lines=marked.lines,
        math_mapping=MathMapping(
            english_to_translated=get_mapping(
                english, translated, locale, PlaceholderKind.MATH, math_dictionary, hint, rules),
            english_to_english=_self_math_mapping(english, rules),
        ),
        graphie_mapping=get_mapping(english, translated, locale, PlaceholderKind.GRAPHIE, rules=rules),
        image_mapping=get_mapping(english, translated, locale, PlaceholderKind.IMAGE, rules=rules),
        widget_mapping=get_mapping(english, translated, locale, PlaceholderKind.WIDGET, rules=rules),
        math_dictionary=math_dictionary,
        hint=hint,
    )


def create_template(
    english: str,
    translated: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> Template | TemplateError:
    """Same as `build_template` but hands the TemplateError back instead of raising it."""
    try:
        return build_template(english, translated, locale, rules)
    except TemplateError as e:
        return e


def populate_template(
    template: Template,
    english: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str | None:
    """
    Translates `english` by replaying `template` on it.
    Returns None when the template cannot be trusted for this string.
    """
    english = rtrim(english)
    if len(template.lines) != len(english.split(LINE_BREAK)):
        logger.trace(f"Line count differs from the template: {english!r}")
        return None

    # A template built from '$4$ x $4$ y $5$' maps its math as [0, 0, 2];
    # replaying it on '$3$ x $8$ y $3$' would print '$3$ x $3$ y $3$'.
    if template.math_mapping.english_to_translated:
        try:
            self_mapping = _self_math_mapping(english, rules)
        except TemplateError:
            return None
        if self_mapping != template.math_mapping.english_to_english:
            logger.trace(f"Math repeats differently than in the template: {english!r}")
            return None

    # Markers spelled out in the translated text itself stand for nothing
    marker_counts = Counter(_ANY_MARKER_REGEX.findall(LINE_BREAK.join(template.lines)))
    marked = mark_placeholders(english)
    for kind in PLACEHOLDER_KINDS:
        mapping = template.mapping_for(kind)
        if marker_counts[kind.marker] != len(mapping):
            logger.trace(f"Template has {kind} markers without a mapping: {english!r}")
            return None
        if mapping and max(mapping) >= len(marked.find_all(kind)):
            logger.trace(f"Not enough {kind} occurrences for the template: {english!r}")
            return None

    # Dictionary keys come from math already run through the notation rules
    rewritten_maths = [
        translate_math(math, template.hint, locale, rules)
        for math in marked.find_all(PlaceholderKind.MATH)
    ]
    for index in template.math_mapping.english_to_translated:
        missing = [
            fragment for fragment in text_fragments(rewritten_maths[index])
            if fragment not in template.math_dictionary
        ]
        if missing:
            logger.trace(f"No translation for math text {missing}: {english!r}")
            return None

    occurrences = {
        kind: marked.find_all(kind) for kind in PLACEHOLDER_KINDS
    }
    occurrences[PlaceholderKind.MATH] = [
        replace_text_in_math(math, template.math_dictionary) for math in rewritten_maths
    ]

    # Counters run across lines: the n-th marker of a kind in the whole
    # template takes the n-th entry of its mapping.
    counters = {kind: 0 for kind in PLACEHOLDER_KINDS}

    def _fill(match: re.Match) -> str:
        kind = PlaceholderKind.from_marker(match.group(0))
        position = counters[kind]
        counters[kind] += 1
        return occurrences[kind][template.mapping_for(kind)[position]]

    return LINE_BREAK.join(_ANY_MARKER_REGEX.sub(_fill, line) for line in template.lines)
