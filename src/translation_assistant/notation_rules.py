from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_serializer

from translation_assistant.enums import NotationRule


class NotationRules(BaseModel):
    """
    Locale lists for the math notation rules.
    Each field names the locales a rule is applied to; a locale missing from
    every list gets its math passed through untouched.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Number formats
    thousand_sep_as_thin_space: frozenset[str] = frozenset()
    thousand_sep_as_dot: frozenset[str] = frozenset()
    no_thousand_sep: frozenset[str] = frozenset()
    decimal_comma: frozenset[str] = frozenset()
    arabic_comma: frozenset[str] = frozenset()
    perso_arabic_numerals: frozenset[str] = frozenset()
    # 1 / 3 = 0.\overline{3} -> 0.\dot{3}
    overline_as_dot: frozenset[str] = frozenset()
    # 1 / 3 = 0.\overline{3} -> 0.(3)
    overline_as_parens: frozenset[str] = frozenset()
    # 100{,}000{,}000 -> 10{,}00{,}00{,}000
    indian_digit_grouping: frozenset[str] = frozenset()

    # (a,b) -> ]a,b[
    open_int_as_brackets: frozenset[str] = frozenset()
    # [a,b] -> ⟨a,b⟩
    closed_int_as_angle_brackets: frozenset[str] = frozenset()
    # (x,y) -> [x,y]
    coords_as_brackets: frozenset[str] = frozenset()
    # (x|y) is accepted as an ordered pair
    pipe_as_pair_separator: frozenset[str] = frozenset()

    times_as_cdot: frozenset[str] = frozenset()
    cdot_as_times: frozenset[str] = frozenset()
    div_as_colon: frozenset[str] = frozenset()

    sin_as_sen: frozenset[str] = frozenset()
    tan_as_tg: frozenset[str] = frozenset()
    cot_as_cotg: frozenset[str] = frozenset()
    cot_as_ctg: frozenset[str] = frozenset()
    csc_as_cosec: frozenset[str] = frozenset()
    csc_as_cossec: frozenset[str] = frozenset()

    # Applied only when the translated template uses the same notation
    maybe_div_as_colon: frozenset[str] = frozenset()
    maybe_times_as_cdot: frozenset[str] = frozenset()
    maybe_cdot_as_times: frozenset[str] = frozenset()

    @field_serializer("*")
    def _serialize_locales(self, locales: frozenset[str]) -> list[str]:
        return sorted(locales)

    def locales(self, rule: NotationRule) -> frozenset[str]:
        return getattr(self, rule.value)

    def applies(self, rule: NotationRule, locale: str) -> bool:
        """Returns True if `rule` is used by `locale`."""
        return locale in self.locales(rule)

    def rules_for(self, locale: str) -> list[NotationRule]:
        """Lists every rule used by `locale`, in table order."""
        return [rule for rule in NotationRule if self.applies(rule, locale)]

    def uses_thousand_separator_rule(self, locale: str) -> bool:
        return (
            locale in self.thousand_sep_as_thin_space
            or locale in self.thousand_sep_as_dot
            or locale in self.no_thousand_sep
        )

    def uses_trig_abbreviations(self, locale: str) -> bool:
        """Locales which may write \\tg, \\cotg, \\ctg or \\cosec directly."""
        return (
            locale in self.tan_as_tg
            or locale in self.cot_as_cotg
            or locale in self.cot_as_ctg
            or locale in self.csc_as_cosec
        )


def _locales(names: str) -> frozenset[str]:
    return frozenset(names.split())


DEFAULT_NOTATION_RULES = NotationRules(
    thousand_sep_as_thin_space=_locales(
        "az bg cs de fr hu it ka km ky lt lv nb nl pl pt-pt ro sq sv uk uz"),
    thousand_sep_as_dot=_locales("da el id is mk pt rw sl sr tr vi"),
    no_thousand_sep=_locales("hy kk ko ru zh-hans"),
    decimal_comma=_locales(
        "az bg cs da de el fr hu hy id is it ka kk ky lt lv mk nb nl pl pt "
        "pt-pt ro ru rw sl sq sr sv tr uz vi"),
    # Pashto writes Western digits for now since strings are shared between
    # Early Math and advanced courses, so these two stay empty.
    arabic_comma=frozenset(),
    perso_arabic_numerals=frozenset(),
    overline_as_dot=_locales("bn hu ja ko my"),
    overline_as_parens=_locales(
        "az bg hy ka kk ky lt lv pl pt-pt ro ru uz vi"),
    indian_digit_grouping=_locales("hi"),
    open_int_as_brackets=_locales("da fr hu pt-pt"),
    closed_int_as_angle_brackets=_locales("cs"),
    coords_as_brackets=_locales("cs"),
    pipe_as_pair_separator=_locales("de"),
    # TODO: drop 'bg' once \mathbin{.} is allowed for Bulgarian
    times_as_cdot=_locales(
        "az bg cs da de hu hy lt lv nb pl ro sr sv uz"),
    cdot_as_times=_locales("fr ps pt-pt"),
    div_as_colon=_locales(
        "az bg cs da de hu hy it ky lt lv nb nl pl pt-pt ro ru sv uk"),
    sin_as_sen=_locales("it pt pt-pt"),
    tan_as_tg=_locales(
        "az bg cs hu hy kk km ky lt lv pl pt pt-pt ro ru uz"),
    cot_as_cotg=_locales("cs pt pt-pt"),
    cot_as_ctg=_locales("az bg hu hy kk km ky lt lv pl ro ru uz"),
    csc_as_cosec=_locales(
        "as az bg bn cs gu hi id ja kn ky lt lv mr my nl pa pl ro ru sv ta "
        "te tr uk"),
    csc_as_cossec=_locales("pt pt-pt"),
    maybe_div_as_colon=_locales("id lol"),
    maybe_times_as_cdot=_locales(
        "bn el gu hi id it ja ka kk km kn ko mr my nl pa pt ru ta te th uk vi "
        "zh-hans"),
    maybe_cdot_as_times=_locales(
        "bn el gu hi id it ja ka kk km kn ko mr my nl pa pt ru ta te th uk vi "
        "zh-hans"),
)
