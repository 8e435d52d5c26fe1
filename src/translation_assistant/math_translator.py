import re
from typing import Callable

from translation_assistant.enums import NotationRule
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules

# Strings are authored in US English, its math is never rewritten.
SOURCE_LOCALE = "en"

KATEX_BASE_COLORS = [
    "blue", "gold", "gray", "mint", "green", "red", "maroon",
    "orange", "pink", "purple", "teal", "kaBlue", "kaGreen",
]
COLOR_MACROS = "|".join(KATEX_BASE_COLORS)

PERSO_ARABIC_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_TO_PERSO_ARABIC = str.maketrans("0123456789", PERSO_ARABIC_DIGITS)

# Stands in for a thousand separator between the two number passes
THOUSAND_SEP_PLACEHOLDER = "THSEP"

_US_THOUSAND_SEP_REGEX = re.compile(r"([0-9])\{,\}([0-9])(?=[0-9]{2})")
_PLACEHOLDER_THOUSAND_SEP_REGEX = re.compile(
    r"([0-9])" + THOUSAND_SEP_PLACEHOLDER + r"([0-9])(?=[0-9]{2})")
_US_GROUPED_NUMBER_REGEX = re.compile(r"[0-9]+(?:\{,\}[0-9]{3})+")

_NOT_NUMERIC_REGEX = re.compile(r"[a-zA-Z]|\{|\}|\\")
_FLOAT_PREFIX_REGEX = re.compile(r"\s*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+))")

# (rule, pattern, template)
_OPERATOR_RULES: list[tuple[NotationRule, re.Pattern, str]] = [
    (NotationRule.DIV_AS_COLON, re.compile(r"\\div"), r"\\mathbin{:}"),
    (NotationRule.TIMES_AS_CDOT, re.compile(r"\\times"), r"\\cdot"),
    (NotationRule.CDOT_AS_TIMES, re.compile(r"\\cdot"), r"\\times"),
    (NotationRule.SIN_AS_SEN, re.compile(r"\\(arc)?sin"), r"\\operatorname{\1sen}"),
    (NotationRule.TAN_AS_TG, re.compile(r"\\(arc)?tan"), r"\\operatorname{\1tg}"),
    (NotationRule.COT_AS_COTG, re.compile(r"\\(arc)?cot"), r"\\operatorname{\1cotg}"),
    (NotationRule.COT_AS_CTG, re.compile(r"\\(arc)?cot"), r"\\operatorname{\1ctg}"),
    (NotationRule.CSC_AS_COSEC, re.compile(r"\\(arc)?csc"), r"\\operatorname{\1cosec}"),
    (NotationRule.CSC_AS_COSSEC, re.compile(r"\\(arc)?csc"), r"\\operatorname{\1cossec}"),
]

# (rule, pattern, replacement) applied only when the template hint
# already uses `replacement` and never the notation it replaces.
_TEMPLATE_DEPENDENT_RULES: list[tuple[NotationRule, re.Pattern, str]] = [
    (NotationRule.MAYBE_TIMES_AS_CDOT, re.compile(r"\\times"), r"\cdot"),
    (NotationRule.MAYBE_CDOT_AS_TIMES, re.compile(r"\\cdot"), r"\times"),
    (NotationRule.MAYBE_DIV_AS_COLON, re.compile(r"\\div"), r"\mathbin{:}"),
]


def _digit_regex(locale: str, rules: NotationRules) -> str:
    if rules.applies(NotationRule.PERSO_ARABIC_NUMERALS, locale):
        return f"[{PERSO_ARABIC_DIGITS}]"
    return "[0-9]"


def _decimal_separator_regex(locale: str, rules: NotationRules) -> str:
    if rules.applies(NotationRule.DECIMAL_COMMA, locale):
        return r"\{,\}"
    if rules.applies(NotationRule.ARABIC_COMMA, locale):
        return r"\{،\}"
    return r"\."


def _color_macro_regex() -> str:
    return r"\\(?:" + COLOR_MACROS + r")[A-Z]?"


def decimal_number_regex(
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
    capture: bool = True,
) -> str:
    """
    Regex source for a decimal number as written in `locale`.

    Matches plain decimals (`1.5`), colored integer parts (`\\blue{1}.5`),
    colored or overlined decimal parts and fully colored decimals
    (`\\red{1.5}`). With `capture` only the first two forms are matched and
    the integer and decimal parts are captured as groups 1 and 2.
    """
    digit = _digit_regex(locale, rules)
    separator = _decimal_separator_regex(locale, rules)
    color = _color_macro_regex()

    integer_part = "-?" + digit + "+|-?" + color + r"\{-?" + digit + r"+\}"
    decimal_part = (
        digit + r"+|\\(?:overline|" + COLOR_MACROS + r")[A-Z]?\{" + digit + r"+\}"
    )
    if capture:
        return "(" + integer_part + ")" + separator + "(" + decimal_part + ")"

    colored_decimal = color + r"\{-?" + digit + "+" + separator + digit + r"+\}"
    return (
        "(?:(?:" + integer_part + ")" + separator + "(?:" + decimal_part + "))"
        + "|(?:" + colored_decimal + ")"
    )


def ordered_pair_regex(locale: str, rules: NotationRules = DEFAULT_NOTATION_RULES) -> str:
    """
    Regex source for an ordered pair without its brackets, e.g. `1{,}5; -x`.
    Groups: 1 first element, 2 separator with its spacing, 3 second element.
    """
    digit = _digit_regex(locale, rules)
    color = _color_macro_regex()

    integer = "-?(?:" + digit + "+|" + color + r"\{-?" + digit + r"+\}|" + color + digit + ")"
    variable = r"-?(?:\\pi|[a-z]|" + color + r"\{[a-z]\})"
    decimal = decimal_number_regex(locale, rules, capture=False)
    fraction_argument = "(?:" + variable + "|(?:" + integer + ")(?:" + variable + ")?)"
    fraction = (
        r"-?\\d?frac\{" + fraction_argument + r"\}\{" + fraction_argument + r"\}"
        + fraction_argument + "?"
    )
    number_and_or_letter = (
        fraction + "|" + variable + "|(?:" + decimal + "|" + integer + ")(?:" + variable + ")?"
    )

    separators = ",;"
    if rules.applies(NotationRule.PIPE_AS_PAIR_SEPARATOR, locale):
        separators += "|"
    space = r"(?:\\,|~|\s)*"
    separator = space + "[" + separators + "]" + space

    return (
        r"\s*(" + number_and_or_letter + ")(" + separator + ")("
        + number_and_or_letter + r")\s*"
    )


def wrap_parens(regex: str, left: str, right: str, capture: bool = False) -> str:
    """
    Surrounds `regex` with the `left` and `right` brackets, each optionally
    sized with \\left / \\right. With `capture` the sizing commands are groups.
    """
    if capture:
        return r"(\\left)?" + re.escape(left) + regex + r"(\\right)?" + re.escape(right)
    return r"(?:\\left)?" + re.escape(left) + regex + r"(?:\\right)?" + re.escape(right)


def _pair_replacement(left: str, separator: str, right: str) -> Callable[[re.Match], str]:
    """Rebuilds a pair matched by a capturing `wrap_parens` regex."""
    def _replace(match: re.Match) -> str:
        return (
            (match.group(1) or "") + left + match.group(2) + separator
            + match.group(4) + (match.group(5) or "") + right
        )
    return _replace


def _parse_float(text: str) -> float | None:
    """Parses the leading number of `text`, None when there is none."""
    match = _FLOAT_PREFIX_REGEX.match(text)
    if match is None:
        return None
    return float(match.group(1))


def detect_closed_interval(math: str, rules: NotationRules = DEFAULT_NOTATION_RULES) -> bool:
    """True if `math` contains a pair in [..], [..) or (..]."""
    pair = ordered_pair_regex(SOURCE_LOCALE, rules)
    for left, right in (("[", "]"), ("[", ")"), ("(", "]")):
        if re.search(wrap_parens(pair, left, right), math):
            return True
    return False


def detect_coordinates(math: str, rules: NotationRules = DEFAULT_NOTATION_RULES) -> bool:
    """
    True if some (a, b) pair in `math` has a >= b, which cannot be an open
    interval. Letters, braces and backslashes are dropped before the numbers
    are read, so `\\blue{3}` counts as 3 and a pair of variables never counts.
    """
    coordinates = re.compile(wrap_parens(ordered_pair_regex(SOURCE_LOCALE, rules), "(", ")"))
    for match in coordinates.finditer(math):
        a = _parse_float(_NOT_NUMERIC_REGEX.sub("", match.group(1)))
        b = _parse_float(_NOT_NUMERIC_REGEX.sub("", match.group(3)))
        if a is not None and b is not None and a >= b:
            return True
    return False


def get_separator(
    hint: str | None,
    regex: re.Pattern,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """
    Pair separator to use in `locale`: the one of the first pair found in the
    template hint, else ';' for decimal comma locales and ',' otherwise.
    `regex` must capture the separator as its second group.
    """
    if hint:
        match = regex.search(hint)
        if match:
            return match.group(2)
    if rules.applies(NotationRule.DECIMAL_COMMA, locale):
        return ";"
    return ","


def translate_coordinates(
    math: str,
    hint: str | None,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    as_brackets = rules.applies(NotationRule.COORDS_AS_BRACKETS, locale)
    left, right = ("[", "]") if as_brackets else ("(", ")")

    separator_regex = re.compile(wrap_parens(ordered_pair_regex(locale, rules), left, right))
    separator = get_separator(hint, separator_regex, locale, rules)

    us_coordinates = re.compile(
        wrap_parens(ordered_pair_regex(SOURCE_LOCALE, rules), "(", ")", capture=True))
    return us_coordinates.sub(_pair_replacement(left, separator, right), math)


def translate_intervals(
    math: str,
    hint: str | None,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """
    Rewrites the brackets of every US interval in `math` and the separator
    between its endpoints.
    """
    us_pair = ordered_pair_regex(SOURCE_LOCALE, rules)
    any_interval = re.compile(
        r"(?:\\left)?[\[(\]]" + ordered_pair_regex(locale, rules) + r"(?:\\right)?[\[)\]]")
    separator = get_separator(hint, any_interval, locale, rules)

    # US brackets -> localized brackets for open, closed, left-closed
    # and right-closed intervals.
    if rules.applies(NotationRule.OPEN_INT_AS_BRACKETS, locale):
        localized = [("]", "["), ("[", "]"), ("[", "["), ("]", "]")]
    elif rules.applies(NotationRule.CLOSED_INT_AS_ANGLE_BRACKETS, locale):
        localized = [("(", ")"), ("⟨", "⟩"), ("⟨", ")"), ("(", "⟩")]
    else:
        localized = [("(", ")"), ("[", "]"), ("[", ")"), ("(", "]")]
    us_brackets = [("(", ")"), ("[", "]"), ("[", ")"), ("(", "]")]

    for (us_left, us_right), (left, right) in zip(us_brackets, localized):
        interval = re.compile(wrap_parens(us_pair, us_left, us_right, capture=True))
        math = interval.sub(_pair_replacement(left, separator, right), math)
    return math


def translate_coordinates_or_open_intervals(
    math: str,
    hint: str | None,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """
    A US (a, b) pair is either a point or an open interval; the brackets the
    template hint uses for its first pair decide which.
    """
    if not hint:
        return math
    us_pair = re.compile(
        wrap_parens(ordered_pair_regex(SOURCE_LOCALE, rules), "(", ")", capture=True))
    if not us_pair.search(math):
        return math

    hint_pair = re.compile(
        r"(?:\\left)?([\[(\]])" + ordered_pair_regex(locale, rules) + r"(?:\\right)?([\[)\]])")
    found = hint_pair.search(hint)
    if found is None:
        return math
    left, separator, right = found.group(1), found.group(3), found.group(5)

    match (left, right):
        case ("[", "]") if rules.applies(NotationRule.COORDS_AS_BRACKETS, locale):
            pass
        case ("]", "[") if rules.applies(NotationRule.OPEN_INT_AS_BRACKETS, locale):
            pass
        case ("(", ")"):
            pass
        case _:
            return math

    return us_pair.sub(_pair_replacement(left, separator, right), math)


def maybe_translate_math(
    math: str,
    hint: str | None,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """Applies the rules whose outcome depends on the math and the template hint."""
    if detect_closed_interval(math, rules):
        math = translate_intervals(math, hint, locale, rules)
    elif detect_coordinates(math, rules):
        math = translate_coordinates(math, hint, locale, rules)
    else:
        math = translate_coordinates_or_open_intervals(math, hint, locale, rules)

    if not hint:
        return math
    for rule, pattern, replacement in _TEMPLATE_DEPENDENT_RULES:
        if rules.applies(rule, locale) and replacement in hint and not pattern.search(hint):
            math = pattern.sub(lambda _: replacement, math)
    return math


def translate_math_operators(
    math: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    for rule, pattern, template in _OPERATOR_RULES:
        if rules.applies(rule, locale):
            math = pattern.sub(template, math)
    return math


def translate_numbers(
    math: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """Localizes thousand separators, decimal separators and repeating decimals."""
    us_decimal = re.compile(decimal_number_regex(SOURCE_LOCALE, rules))
    passes: list[tuple[bool, re.Pattern, str]] = [
        # Thousand separators are parked first so that they are not
        # mistaken for decimal commas below.
        (rules.uses_thousand_separator_rule(locale),
         _US_THOUSAND_SEP_REGEX, r"\1" + THOUSAND_SEP_PLACEHOLDER + r"\2"),
        (rules.applies(NotationRule.DECIMAL_COMMA, locale), us_decimal, r"\1{,}\2"),
        (rules.applies(NotationRule.ARABIC_COMMA, locale), us_decimal, r"\1{،}\2"),
        (rules.applies(NotationRule.OVERLINE_AS_PARENS, locale),
         re.compile(r"\\overline\{([0-9]+)\}"), r"(\1)"),
        (rules.applies(NotationRule.OVERLINE_AS_DOT, locale),
         re.compile(r"\\overline\{([0-9])\}"), r"\\dot{\1}"),
        (rules.applies(NotationRule.OVERLINE_AS_DOT, locale),
         re.compile(r"\\overline\{([0-9])([0-9]*)([0-9])\}"), r"\\dot{\1}\2\\dot{\3}"),
        (rules.applies(NotationRule.NO_THOUSAND_SEP, locale),
         _PLACEHOLDER_THOUSAND_SEP_REGEX, r"\1\2"),
        (rules.applies(NotationRule.THOUSAND_SEP_AS_DOT, locale),
         _PLACEHOLDER_THOUSAND_SEP_REGEX, r"\1.\2"),
        (rules.applies(NotationRule.THOUSAND_SEP_AS_THIN_SPACE, locale),
         _PLACEHOLDER_THOUSAND_SEP_REGEX, r"\1\\,\2"),
    ]
    for applies, pattern, template in passes:
        if applies:
            math = pattern.sub(template, math)
    return math


def translate_numerals(
    math: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    if rules.applies(NotationRule.PERSO_ARABIC_NUMERALS, locale):
        return math.translate(_TO_PERSO_ARABIC)
    return math


def _regroup_indian(match: re.Match) -> str:
    digits = match.group(0).replace("{,}", "")
    grouped, head = digits[-3:], digits[:-3]
    while head:
        grouped = head[-2:] + "{,}" + grouped
        head = head[:-2]
    return grouped


def translate_indian_digit_grouping(math: str) -> str:
    """100{,}000{,}000 -> 10{,}00{,}00{,}000"""
    return _US_GROUPED_NUMBER_REGEX.sub(_regroup_indian, math)


def translate_math(
    math: str,
    hint: str | None,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """
    Rewrites US math notation into the notation used in `locale`.

    `hint` is the math of an already translated string of the same shape.
    It settles the cases the math alone cannot: whether (a, b) is a point or
    an interval, which pair separator to use and whether the template-dependent
    operator rules apply. Pass None or "" when there is no such translation.
    """
    if locale == SOURCE_LOCALE:
        return math
    math = maybe_translate_math(math, hint, locale, rules)
    math = translate_math_operators(math, locale, rules)
    math = translate_numbers(math, locale, rules)
    math = translate_numerals(math, locale, rules)
    if rules.applies(NotationRule.INDIAN_DIGIT_GROUPING, locale):
        math = translate_indian_digit_grouping(math)
    return math


def normalize_translated_math(
    math: str,
    locale: str,
    rules: NotationRules = DEFAULT_NOTATION_RULES,
) -> str:
    """
    Brings hand-translated math to the form `translate_math` produces, so the
    two can be compared: braced or tilde thousand separators, trig
    abbreviations without \\operatorname and spacing inside pairs.
    """
    if locale == SOURCE_LOCALE:
        return math
    thin_space = rules.applies(NotationRule.THOUSAND_SEP_AS_THIN_SPACE, locale)

    if thin_space:
        math = re.sub(r"([0-9])\{\\,\}([0-9])(?=[0-9]{2})", r"\1\\,\2", math)
    if rules.applies(NotationRule.THOUSAND_SEP_AS_DOT, locale):
        math = re.sub(r"([0-9])\{\.\}([0-9])(?=[0-9]{2})", r"\1.\2", math)
    if thin_space:
        math = re.sub(r"([0-9])\{?~\}?([0-9])(?=[0-9]{2})", r"\1\\,\2", math)
    if rules.uses_trig_abbreviations(locale):
        math = re.sub(r"\\(tg|arctg|cotg|ctg|cosec)", r"\\operatorname{\1}", math)

    # Only the spacing around a pair's brackets is dropped, the separator
    # keeps its own.
    pair = ordered_pair_regex(locale, rules)
    return re.sub(r"([\[⟨(\]])" + pair + r"([\[)⟩\]])", r"\1\2\3\4\5", math)
