from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, TypeVar

from loguru import logger

from translation_assistant.enums import PlaceholderKind
from translation_assistant.errors import TemplateError
from translation_assistant.group_key import GroupKey, string_to_group_key
from translation_assistant.math_translator import translate_math
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules
from translation_assistant.placeholders import rtrim
from translation_assistant.template import Template, create_template, populate_template

Item = TypeVar("Item")


@dataclass
class SuggestionGroup(Generic[Item]):
    """
    Corpus items sharing a group key.
    `template` is None while no item of the group is translated, and a
    TemplateError when the first translated item cannot serve as a template.
    """
    items: list[Item] = field(default_factory=list)
    template: Template | TemplateError | None = None


class TranslationAssistant(Generic[Item]):
    """
    Suggests translations for strings that look like strings that were already
    translated.

    Items can be of any type: `get_english` returns the English string of an
    item and `get_translation` its current translation, empty or None when it
    has none.
    """

    def __init__(
        self,
        all_items: Iterable[Item],
        get_english: Callable[[Item], str],
        get_translation: Callable[[Item], str | None],
        locale: str,
        rules: NotationRules = DEFAULT_NOTATION_RULES,
    ):
        self.locale = locale
        self.rules = rules
        self.get_english = get_english
        self.get_translation = get_translation
        self.suggestion_groups = self.get_suggestion_groups(all_items)

    def get_suggestion_groups(self, items: Iterable[Item]) -> dict[GroupKey, SuggestionGroup[Item]]:
        """
        Groups `items` by the group key of their English string. Each group gets
        its template from the first of its items that has a translation.
        """
        groups: dict[GroupKey, SuggestionGroup[Item]] = {}
        for item in items:
            key = string_to_group_key(rtrim(self.get_english(item)))
            groups.setdefault(key, SuggestionGroup()).items.append(item)

        for key, group in groups.items():
            group.template = self._create_group_template(group)
            if isinstance(group.template, TemplateError):
                logger.debug(f"No template for group {key}: {group.template}")
        logger.debug(f"Grouped items into {len(groups)} groups for locale '{self.locale}'")
        return groups

    def _create_group_template(self, group: SuggestionGroup[Item]) -> Template | TemplateError | None:
        for item in group.items:
            translation = self.get_translation(item)
            if translation:
                return create_template(self.get_english(item), translation, self.locale, self.rules)
        return None

    def suggest(self, items: Iterable[Item]) -> list[tuple[Item, str | None]]:
        """Pairs each item with its suggested translation, None when there is none."""
        return [(item, self.suggest_one(item)) for item in items]

    def suggest_one(self, item: Item) -> str | None:
        english = rtrim(self.get_english(item))
        key = string_to_group_key(english)
        group = self.suggestion_groups.get(key)
        template = group.template if group is not None else None

        match key.single_marker_kind:
            # Math with natural language in it needs a template
            case PlaceholderKind.MATH if "\\text" not in english:
                hint = template.hint if isinstance(template, Template) else ""
                logger.trace(f"Translating math-only string: {english!r}")
                return translate_math(english, hint, self.locale, self.rules)
            case PlaceholderKind.GRAPHIE | PlaceholderKind.IMAGE | PlaceholderKind.WIDGET:
                logger.trace(f"Passing through {key.single_marker_kind}: {english!r}")
                return english

        if group is None:
            logger.trace(f"No group for: {english!r}")
            return None
        if isinstance(template, TemplateError):
            logger.trace(f"Group template is unusable ({template}): {english!r}")
            return None
        if template is None:
            logger.trace(f"Group has no translated item yet: {english!r}")
            return None

        suggestion = populate_template(template, english, self.locale, self.rules)
        logger.trace(f"Suggestion for {english!r}: {suggestion!r}")
        return suggestion
