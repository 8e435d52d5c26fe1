from typing import Optional

from translation_assistant.enums import PlaceholderKind

# Base Exception
class TranslationAssistantError(Exception):
    """Base exception for the translation assistant."""
    pass

# Notation Rules Errors
class NotationRulesError(TranslationAssistantError):
    """Base exception for notation rule table errors."""
    pass

class LoadRulesError(NotationRulesError):
    """Errors related to loading a notation rule file."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception

class WriteRulesError(NotationRulesError):
    """Errors related to writing a notation rule file."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception

# Corpus Errors
class CorpusError(TranslationAssistantError):
    """Base exception for corpus reading and writing."""
    pass

class LoadCorpusError(CorpusError):
    """Errors related to loading a corpus of strings."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception

class WriteSuggestionsError(CorpusError):
    """Errors related to writing suggestions out."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception

# Template Errors
class TemplateError(TranslationAssistantError):
    """
    A translated exemplar cannot be used as a template: one of its placeholders
    has no counterpart in the English string.
    """
    kind: PlaceholderKind

    def __init__(self, occurrence: str):
        super().__init__(f"{self.kind.value} doesn't match: {occurrence!r}")
        self.occurrence = occurrence

class MathMismatch(TemplateError):
    """Math in the translation does not match the English math."""
    kind = PlaceholderKind.MATH

class GraphieMismatch(TemplateError):
    """Graphies in the translation do not match."""
    kind = PlaceholderKind.GRAPHIE

class ImageMismatch(TemplateError):
    """Image links in the translation do not match."""
    kind = PlaceholderKind.IMAGE

class WidgetMismatch(TemplateError):
    """Widgets in the translation do not match."""
    kind = PlaceholderKind.WIDGET


MISMATCH_BY_KIND: dict[PlaceholderKind, type[TemplateError]] = {
    PlaceholderKind.MATH: MathMismatch,
    PlaceholderKind.GRAPHIE: GraphieMismatch,
    PlaceholderKind.IMAGE: ImageMismatch,
    PlaceholderKind.WIDGET: WidgetMismatch,
}
