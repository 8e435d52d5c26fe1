import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from typing_extensions import Annotated

from translation_assistant import errors
from translation_assistant.assistant import TranslationAssistant
from translation_assistant.corpus_io import CorpusItem, load_corpus, save_suggestions, write_suggestions
from translation_assistant.group_key import string_to_group_key
from translation_assistant.math_translator import translate_math
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules
from translation_assistant.notation_rules_io import load_notation_rules, write_notation_rules

app = typer.Typer(
    name="translation-assistant",
    help="Suggests translations for strings similar to already translated ones.",
    no_args_is_help=True
)

RulesOption = Annotated[
    Optional[Path],
    typer.Option("--rules", help="YAML or JSON file overriding the built-in notation rules."),
]

@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show diagnostic logs.")] = False,
) -> None:
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="TRACE")

def _get_rules(rules_path: Path | None) -> NotationRules:
    if rules_path is None:
        return DEFAULT_NOTATION_RULES
    try:
        return load_notation_rules(rules_path)
    except errors.LoadRulesError as e:
        typer.secho(f"Error loading notation rules: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

def _load_corpus(corpus_path: Path) -> list[CorpusItem]:
    try:
        return load_corpus(corpus_path)
    except errors.LoadCorpusError as e:
        typer.secho(f"Error loading corpus: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def suggest(
    corpus: Annotated[Path, typer.Argument(help="CSV, JSON or YAML file with 'english' and 'translation' columns.")],
    locale: Annotated[str, typer.Argument(help="Locale of the translations, e.g. 'fr' or 'pt-pt'.")],
    targets: Annotated[Optional[Path], typer.Option(help="Strings to suggest translations for. Defaults to the untranslated corpus strings.")] = None,
    output: Annotated[Optional[Path], typer.Option(help="CSV file to write the suggestions to. Defaults to stdout.")] = None,
    rules: RulesOption = None,
):
    """Suggests translations for untranslated strings of a corpus."""
    notation_rules = _get_rules(rules)
    items = _load_corpus(corpus)
    if targets is None:
        to_translate = [item for item in items if not item.is_translated]
    else:
        to_translate = _load_corpus(targets)

    assistant = TranslationAssistant(
        items,
        lambda item: item.english,
        lambda item: item.translation,
        locale,
        notation_rules,
    )
    suggestions = assistant.suggest(to_translate)

    if output is None:
        write_suggestions(sys.stdout, suggestions)
        return
    try:
        save_suggestions(output, suggestions)
    except errors.WriteSuggestionsError as e:
        typer.secho(f"Error writing suggestions: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    found = sum(1 for _, suggestion in suggestions if suggestion is not None)
    typer.secho(f"{found} of {len(suggestions)} strings got a suggestion, written to {output}", fg=typer.colors.GREEN)

@app.command("math")
def translate_math_cli(
    expression: Annotated[str, typer.Argument(help="Math to translate, e.g. '$3 \\times 1.5$'.")],
    locale: Annotated[str, typer.Argument(help="Target locale.")],
    hint: Annotated[str, typer.Option(help="Math of an existing translation of a similar string.")] = "",
    rules: RulesOption = None,
):
    """Rewrites US math notation into the notation of a locale."""
    notation_rules = _get_rules(rules)
    typer.echo(translate_math(expression, hint, locale, notation_rules))

@app.command("group-key")
def group_key_cli(
    text: Annotated[str, typer.Argument(help="String to compute the group key of.")],
):
    """Prints the key used to group similar strings."""
    typer.echo(string_to_group_key(text).to_json())

@app.command("rules")
def list_rules(
    locale: Annotated[str, typer.Argument(help="Locale to list the notation rules of.")],
    rules: RulesOption = None,
):
    """Lists the notation rules applied for a locale."""
    notation_rules = _get_rules(rules)
    applied = notation_rules.rules_for(locale)
    if not applied:
        typer.secho(f"No notation rules for '{locale}', math is kept as is.", fg=typer.colors.YELLOW)
        return
    typer.secho(f"Notation rules for '{locale}':", fg=typer.colors.BLUE)
    for rule in applied:
        typer.echo(f"  {rule}")

@app.command("export-rules")
def export_rules(
    path: Annotated[Path, typer.Argument(help="JSON file to write the built-in notation rules to.")],
):
    """Writes the built-in notation rules to a file that can be edited and passed back with --rules."""
    try:
        write_notation_rules(path, DEFAULT_NOTATION_RULES)
    except errors.WriteRulesError as e:
        typer.secho(f"Error writing notation rules: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"Notation rules written to {path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
