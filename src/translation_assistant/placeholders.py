import re
from dataclasses import dataclass, field

from translation_assistant.enums import PLACEHOLDER_KINDS, PlaceholderKind

LINE_BREAK = "\n\n"

# An escaped \$ never opens a span but may appear inside one
MATH_REGEX = re.compile(r"(?<!\\)\$(?:\\\$|[^\$])+\$")
GRAPHIE_REGEX = re.compile(r"!\[\]\([^)]+\)")
IMAGE_REGEX = re.compile(r"https:[^\s]+\.png|web\+graphie:[a-z0-9\.\-/]+(?=[\s,]|\Z)")
WIDGET_REGEX = re.compile(r"\[\[\u2603[^\]]+\]\]")

# Natural language inside math, group 1 is the fragment
TEXT_REGEX = re.compile(r"\\text\s*\{([^}]*)\}")
TEXTBF_REGEX = re.compile(r"\\textbf\s*\{([^}]*)\}")
TEXT_OR_TEXTBF_REGEX = re.compile(r"\\text(?:bf)?\s*\{([^}]*)\}")

PLACEHOLDER_REGEXES: dict[PlaceholderKind, re.Pattern] = {
    PlaceholderKind.MATH: MATH_REGEX,
    PlaceholderKind.GRAPHIE: GRAPHIE_REGEX,
    PlaceholderKind.IMAGE: IMAGE_REGEX,
    PlaceholderKind.WIDGET: WIDGET_REGEX,
}


@dataclass(frozen=True)
class PlaceholderRun:
    """A piece of a string: plain text or one math/graphie/image/widget occurrence."""
    kind: PlaceholderKind
    text: str

    @property
    def is_placeholder(self) -> bool:
        return self.kind != PlaceholderKind.TEXT


@dataclass
class MarkedString:
    """
    A string whose math, graphies, images and widgets have been swapped for
    markers. `occurrences` keeps what each marker stood for, in order.
    """
    skeleton: str
    occurrences: dict[PlaceholderKind, list[str]] = field(default_factory=dict)

    def find_all(self, kind: PlaceholderKind) -> list[str]:
        return self.occurrences.get(kind, [])

    @property
    def lines(self) -> list[str]:
        return self.skeleton.split(LINE_BREAK)


def rtrim(text: str) -> str:
    return text.rstrip()


def _split_runs(text: str, kinds: list[PlaceholderKind]) -> list[PlaceholderRun]:
    if not text:
        return []
    if not kinds:
        return [PlaceholderRun(PlaceholderKind.TEXT, text)]

    kind, later_kinds = kinds[0], kinds[1:]
    runs: list[PlaceholderRun] = []
    position = 0
    for match in PLACEHOLDER_REGEXES[kind].finditer(text):
        runs.extend(_split_runs(text[position:match.start()], later_kinds))
        runs.append(PlaceholderRun(kind, match.group(0)))
        position = match.end()
    runs.extend(_split_runs(text[position:], later_kinds))
    return runs


def extract_runs(text: str) -> list[PlaceholderRun]:
    """
    Splits `text` into plain text and placeholder runs, left to right.

    Math is carved out first, then graphies, images and widgets are only
    searched in the text left between earlier runs, so a graphie's link is
    never also reported as an image. Joining the runs' text gives `text` back.
    """
    return _split_runs(text, PLACEHOLDER_KINDS)


def mark_placeholders(text: str) -> MarkedString:
    """Replaces every placeholder run of `text` with the marker of its kind."""
    runs = extract_runs(text)
    occurrences: dict[PlaceholderKind, list[str]] = {kind: [] for kind in PLACEHOLDER_KINDS}
    pieces: list[str] = []
    for run in runs:
        if run.is_placeholder:
            occurrences[run.kind].append(run.text)
            pieces.append(run.kind.marker)
        else:
            pieces.append(run.text)
    return MarkedString(skeleton="".join(pieces), occurrences=occurrences)


def find_all(text: str, kind: PlaceholderKind) -> list[str]:
    """Returns every occurrence of `kind` in `text`, left to right."""
    if kind == PlaceholderKind.TEXT:
        raise ValueError("Plain text runs are not searched for, use extract_runs")
    return mark_placeholders(text).find_all(kind)


def text_fragments(math: str) -> list[str]:
    """Natural language found in the \\text{} and \\textbf{} blocks of `math`."""
    return [match.group(1) for match in TEXT_OR_TEXTBF_REGEX.finditer(math)]
