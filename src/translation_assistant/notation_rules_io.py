import json
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from translation_assistant.errors import LoadRulesError, WriteRulesError
from translation_assistant.notation_rules import DEFAULT_NOTATION_RULES, NotationRules

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_rule_overrides(rules_file_path: Path) -> dict:
    contents = rules_file_path.read_text(encoding="utf-8")
    if rules_file_path.suffix.lower() in YAML_SUFFIXES:
        data = yaml.safe_load(contents)
    else:
        data = json.loads(contents)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LoadRulesError(f"Rule file must contain a mapping of rule names to locales: {rules_file_path}")
    return data


def load_notation_rules(rules_file_path: Path, base: NotationRules = DEFAULT_NOTATION_RULES) -> NotationRules:
    """
    Loads a notation rule table from a YAML or JSON file.
    Rules that the file does not mention keep the locales they have in `base`.
    """
    if not rules_file_path.is_file():
        raise LoadRulesError(f"Rule file not found: {rules_file_path}")
    try:
        overrides = _read_rule_overrides(rules_file_path)
        rules = NotationRules.model_validate({**base.model_dump(), **overrides})
    except LoadRulesError:
        raise
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LoadRulesError(f"Incorrect rule file format (decode error): {rules_file_path}", original_exception=e)
    except ValidationError as e:
        raise LoadRulesError(f"Incorrect rule file format (validation error): {rules_file_path} - {e}", original_exception=e)
    except OSError as e:
        raise LoadRulesError(f"IO error reading rules from {rules_file_path}: {e}", original_exception=e)

    logger.debug(f"Loaded notation rules from {rules_file_path} ({len(overrides)} rules overridden)")
    return rules


def write_notation_rules(rules_file_path: Path, rules: NotationRules) -> None:
    """Writes a notation rule table to a JSON file."""
    try:
        json_str = rules.model_dump_json(indent=2)
        rules_file_path.write_text(json_str, encoding="utf-8")
    except OSError as e:
        raise WriteRulesError(f"IO error writing rules to {rules_file_path}: {e}", original_exception=e)
