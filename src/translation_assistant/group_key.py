import json
import re
from dataclasses import dataclass

from translation_assistant.enums import PLACEHOLDER_KINDS, PlaceholderKind
from translation_assistant.placeholders import LINE_BREAK, mark_placeholders, text_fragments

_MATH_BEFORE_WIDGET_REGEX = re.compile(r"__MATH__[\t ]*__WIDGET__")
_BOLD_REGEX = re.compile(r"\*\*(.+?)\*\*")
TRAILING_PUNCTUATION = ".,;:"


@dataclass(frozen=True)
class GroupKey:
    """
    Fingerprint shared by strings that only differ in their math, graphies,
    images, widgets, bold markup or trailing punctuation.

    `texts` holds, for each math span, the sorted natural language found in
    its \\text{} and \\textbf{} blocks, so strings whose math carries different
    words end up in different groups.
    """
    skeleton: str
    texts: tuple[tuple[str, ...], ...] = ()

    def to_json(self) -> str:
        """Compact JSON form, e.g. {"str":"__MATH__ and __MATH__","texts":[["red"],[]]}"""
        return json.dumps(
            {"str": self.skeleton, "texts": [list(fragments) for fragments in self.texts]},
            ensure_ascii=False,
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, data: str) -> 'GroupKey':
        parsed = json.loads(data)
        return cls(
            skeleton=parsed["str"],
            texts=tuple(tuple(fragments) for fragments in parsed["texts"]),
        )

    @property
    def single_marker_kind(self) -> PlaceholderKind | None:
        """The kind of placeholder the whole string consists of, if any."""
        for kind in PLACEHOLDER_KINDS:
            if self.skeleton == kind.marker:
                return kind
        return None

    def __str__(self) -> str:
        return self.to_json()


def _strip_trailing_punctuation(line: str) -> str:
    return line.rstrip().rstrip(TRAILING_PUNCTUATION).rstrip()


def normalize_skeleton(skeleton: str) -> str:
    skeleton = _MATH_BEFORE_WIDGET_REGEX.sub("__MATH__ __WIDGET__", skeleton)
    skeleton = _BOLD_REGEX.sub(r"\1", skeleton)
    skeleton = "\n".join(_strip_trailing_punctuation(line) for line in skeleton.split("\n"))
    return LINE_BREAK.join(line.strip() for line in skeleton.split(LINE_BREAK))


def string_to_group_key(text: str) -> GroupKey:
    """
    Builds the group key of `text`.

    >>> string_to_group_key(r"Is $\\text{red} + \\textbf{blue}$ equal to $7$?").to_json()
    '{"str":"Is __MATH__ equal to __MATH__?","texts":[["blue","red"],[]]}'
    """
    marked = mark_placeholders(text)
    texts = tuple(
        tuple(sorted(text_fragments(math)))
        for math in marked.find_all(PlaceholderKind.MATH)
    )
    return GroupKey(skeleton=normalize_skeleton(marked.skeleton), texts=texts)
