"""
Main merge pipeline.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from .answers import load_answers
from .errors import LAMUserError
from .report_schema import ElementModel, FieldModel, FieldsReport, ParseReport, answers_to_json
from .template import coalesce, collect_fields, default_answers, render, render_tree, tokenize
from .template.nodes import TemplateAST
from .types import RunOptions
from .values import AnswerMap
from .version import tool_version

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


class Engine:
    """
    Coordinates preprocessing, parsing and merging for one set of options.

    Holds no per-template state; one engine may process any number of
    templates, including concurrently.
    """

    def __init__(self, options: RunOptions):
        self.options = options

    def prepare(self, text: str) -> str:
        """Apply text preprocessing selected by the options."""
        if self.options.coalesce_runs:
            return coalesce(text)
        return text

    def parse(self, text: str) -> TemplateAST:
        return tokenize(self.prepare(text))

    def merge(self, text: str, answers: Mapping[str, Any]) -> str:
        """
        Merge answers into template text.

        With `validate` set the template is checked through the tokenizer
        first; with `via_tree` the parsed tree is rendered instead of the
        raw text.
        """
        prepared = self.prepare(text)

        if self.options.via_tree:
            return render_tree(tokenize(prepared), answers)

        if self.options.validate:
            tokenize(prepared)
        return render(prepared, answers)


def read_template(source: str) -> str:
    """Template text from a path, or from stdin for '-'."""
    if source == STDIN_MARKER:
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise LAMUserError(f"Template not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LAMUserError(f"Failed to read template {path}: {e}") from e


def parse_template(text: str, options: Optional[RunOptions] = None) -> TemplateAST:
    return Engine(options or RunOptions()).parse(text)


def merge(text: str, answers: Mapping[str, Any], options: Optional[RunOptions] = None) -> str:
    return Engine(options or RunOptions()).merge(text, answers)


def run_parse(source: str, options: RunOptions) -> ParseReport:
    """Entry point for `lam parse`."""
    elements = Engine(options).parse(read_template(source))
    logger.debug(f"parsed {source}: {len(elements)} root elements")
    return ParseReport(
        version=tool_version(),
        source=source,
        elements=[ElementModel.from_element(e) for e in elements],
    )


def run_fields(source: str, options: RunOptions) -> FieldsReport:
    """Entry point for `lam fields`."""
    elements = Engine(options).parse(read_template(source))
    return FieldsReport(
        version=tool_version(),
        source=source,
        fields=[FieldModel.from_spec(f) for f in collect_fields(elements)],
        defaults=answers_to_json(default_answers(elements)),
    )


def run_render(source: str, answers_path: Optional[Path], options: RunOptions) -> str:
    """Entry point for `lam render`."""
    answers: AnswerMap = load_answers(answers_path) if answers_path is not None else {}
    logger.debug(f"rendering {source} with {len(answers)} answers")
    return Engine(options).merge(read_template(source), answers)


__all__ = [
    "Engine",
    "read_template",
    "parse_template",
    "merge",
    "run_parse",
    "run_fields",
    "run_render",
]
