import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

import yaml
from loguru import logger

from translation_assistant.errors import LoadCorpusError, WriteSuggestionsError

YAML_SUFFIXES = {".yaml", ".yml"}
SUGGESTION_COLUMNS = ["id", "english", "suggestion"]


@dataclass
class CorpusItem:
    """One string of a corpus: its English text and current translation."""
    id: str
    english: str
    translation: str = ""

    @property
    def is_translated(self) -> bool:
        return bool(self.translation)


def _item_from_row(row: dict, index: int, corpus_path: Path) -> CorpusItem | None:
    english = row.get("english")
    if english is None:
        logger.warning(f"Skipping row {index} of {corpus_path}: no 'english' value")
        return None
    item_id = row.get("id")
    return CorpusItem(
        id=str(item_id) if item_id not in (None, "") else str(index),
        english=str(english),
        translation=str(row.get("translation") or ""),
    )


def _read_rows(corpus_path: Path) -> list:
    suffix = corpus_path.suffix.lower()
    if suffix == ".csv":
        with open(corpus_path, "r", encoding="utf-8", newline="") as f:
            return list(csv.DictReader(f))

    contents = corpus_path.read_text(encoding="utf-8")
    if suffix in YAML_SUFFIXES:
        rows = yaml.safe_load(contents)
    else:
        rows = json.loads(contents)
    if rows is None:
        return []
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise LoadCorpusError(f"Corpus must be a list of mappings: {corpus_path}")
    return rows


def load_corpus(corpus_path: Path) -> list[CorpusItem]:
    """
    Loads corpus items from a CSV, JSON or YAML file.
    Each row has an `english` value and optionally `translation` and `id`;
    rows without an id are numbered from 1.
    """
    if not corpus_path.is_file():
        raise LoadCorpusError(f"Corpus file not found: {corpus_path}")
    try:
        rows = _read_rows(corpus_path)
    except LoadCorpusError:
        raise
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error) as e:
        raise LoadCorpusError(f"Incorrect corpus format: {corpus_path} - {e}", original_exception=e)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadCorpusError(f"IO error reading corpus {corpus_path}: {e}", original_exception=e)

    items = []
    for index, row in enumerate(rows, start=1):
        item = _item_from_row(row, index, corpus_path)
        if item is not None:
            items.append(item)
    logger.debug(f"Loaded {len(items)} items from {corpus_path}")
    return items


def write_suggestions(output: TextIO, suggestions: Iterable[tuple[CorpusItem, str | None]]) -> None:
    """Writes `id,english,suggestion` rows; a missing suggestion is an empty cell."""
    writer = csv.DictWriter(output, fieldnames=SUGGESTION_COLUMNS)
    writer.writeheader()
    for item, suggestion in suggestions:
        writer.writerow({
            "id": item.id,
            "english": item.english,
            "suggestion": suggestion if suggestion is not None else "",
        })


def save_suggestions(output_path: Path, suggestions: Iterable[tuple[CorpusItem, str | None]]) -> None:
    try:
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            write_suggestions(f, suggestions)
    except OSError as e:
        raise WriteSuggestionsError(f"IO error writing suggestions to {output_path}: {e}", original_exception=e)
