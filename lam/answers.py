"""
Answer files.

Answers are stored as YAML (or JSON, which the YAML loader reads as well):
a top-level mapping from directive names to values, with repeating groups
given as lists of mappings.

    client_name: Alice Smith
    is_company: true
    settlement_date: 2025-07-27
    directors:
      - director_name: Bob
      - director_name: Carol
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import LAMUserError
from .values import AnswerMap, to_answer_map

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

ANSWER_SUFFIXES = {".yaml", ".yml", ".json"}


class AnswerFileError(LAMUserError):
    """An answer file cannot be read or has the wrong shape."""

    def __init__(self, message: str, path: Path | None = None):
        prefix = f"{path}: " if path is not None else ""
        super().__init__(prefix + message)
        self.path = path


def parse_answers_text(text: str, source: Path | None = None) -> AnswerMap:
    """
    Parse answers from YAML/JSON text.

    Raises:
        AnswerFileError: invalid syntax or a non-mapping document
        AnswerError: a value with no answer representation
    """
    try:
        data: Any = _yaml.load(text)
    except YAMLError as e:
        raise AnswerFileError(f"invalid YAML: {e}", source) from e

    if data is None:
        # Empty document
        return {}
    if not isinstance(data, Mapping):
        raise AnswerFileError(
            f"expected a mapping of answers, got {type(data).__name__}", source
        )

    answers = to_answer_map(data)
    logger.debug(f"loaded {len(answers)} answers" + (f" from {source}" if source else ""))
    return answers


def load_answers(path: Path) -> AnswerMap:
    """
    Load an answer file.

    Args:
        path: .yaml, .yml or .json file

    Returns:
        Answers for the root scope
    """
    if path.suffix.lower() not in ANSWER_SUFFIXES:
        raise AnswerFileError(
            f"unsupported answer file type '{path.suffix}' (expected one of {sorted(ANSWER_SUFFIXES)})",
            path,
        )
    if not path.is_file():
        raise AnswerFileError("file not found", path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AnswerFileError(f"cannot read file: {e}", path) from e

    return parse_answers_text(text, source=path)


__all__ = ["AnswerFileError", "parse_answers_text", "load_answers", "ANSWER_SUFFIXES"]
