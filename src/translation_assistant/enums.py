import enum


class PlaceholderKind(str, enum.Enum):
    """
    Enumeration for the kinds of runs a string is split into.
    Every kind but TEXT is replaced by a marker when strings are compared.
    """
    MATH = "math"
    GRAPHIE = "graphie"
    IMAGE = "image"
    WIDGET = "widget"
    TEXT = "text"

    @property
    def marker(self) -> str:
        """Returns the marker token standing for runs of this kind."""
        if self == PlaceholderKind.TEXT:
            raise ValueError("Plain text has no marker")
        return f"__{self.name}__"

    @classmethod
    def from_marker(cls, marker: str) -> 'PlaceholderKind':
        for kind in cls:
            if kind != PlaceholderKind.TEXT and kind.marker == marker:
                return kind
        raise ValueError(f"'{marker}' is not a placeholder marker")

    def __str__(self) -> str:
        return self.value


# Order in which the kinds are carved out of a string
PLACEHOLDER_KINDS: list[PlaceholderKind] = [
    PlaceholderKind.MATH,
    PlaceholderKind.GRAPHIE,
    PlaceholderKind.IMAGE,
    PlaceholderKind.WIDGET,
]


class NotationRule(str, enum.Enum):
    """Names of the locale-gated notation rules."""
    # Number formats
    THOUSAND_SEP_AS_THIN_SPACE = "thousand_sep_as_thin_space"
    THOUSAND_SEP_AS_DOT = "thousand_sep_as_dot"
    NO_THOUSAND_SEP = "no_thousand_sep"
    DECIMAL_COMMA = "decimal_comma"
    ARABIC_COMMA = "arabic_comma"
    PERSO_ARABIC_NUMERALS = "perso_arabic_numerals"
    OVERLINE_AS_DOT = "overline_as_dot"
    OVERLINE_AS_PARENS = "overline_as_parens"
    INDIAN_DIGIT_GROUPING = "indian_digit_grouping"
    # Intervals and coordinates
    OPEN_INT_AS_BRACKETS = "open_int_as_brackets"
    CLOSED_INT_AS_ANGLE_BRACKETS = "closed_int_as_angle_brackets"
    COORDS_AS_BRACKETS = "coords_as_brackets"
    PIPE_AS_PAIR_SEPARATOR = "pipe_as_pair_separator"
    # Binary operators
    TIMES_AS_CDOT = "times_as_cdot"
    CDOT_AS_TIMES = "cdot_as_times"
    DIV_AS_COLON = "div_as_colon"
    # Trig functions
    SIN_AS_SEN = "sin_as_sen"
    TAN_AS_TG = "tan_as_tg"
    COT_AS_COTG = "cot_as_cotg"
    COT_AS_CTG = "cot_as_ctg"
    CSC_AS_COSEC = "csc_as_cosec"
    CSC_AS_COSSEC = "csc_as_cossec"
    # Rules conditional on the translated template
    MAYBE_DIV_AS_COLON = "maybe_div_as_colon"
    MAYBE_TIMES_AS_CDOT = "maybe_times_as_cdot"
    MAYBE_CDOT_AS_TIMES = "maybe_cdot_as_times"

    def __str__(self) -> str:
        return self.value
