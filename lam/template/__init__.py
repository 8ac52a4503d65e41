"""
Directive template engine.

Tokenizes template text into an element tree and merges answers into
template text, either directly or by walking a parsed tree.
"""

from __future__ import annotations

from .coalesce import coalesce, coalesce_count
from .errors import MismatchedCloseError, TemplateSyntaxError, UnexpectedCloseError, UnmatchedOpenError
from .escaping import escape
from .evaluator import TreeRenderer, render_tree
from .fields import FieldSpec, collect_fields, default_answers
from .lexer import DirectiveLexer, tokenize_directives
from .nodes import (
    Conditional, FieldType, PlainText, RepeatingGroup, TemplateAST, TemplateElement, Variable,
    element_to_dict, infer_field_type, walk,
)
from .parser import TemplateParser, tokenize
from .renderer import render

__all__ = [
    "tokenize",
    "render",
    "render_tree",
    "coalesce",
    "coalesce_count",
    "escape",
    "collect_fields",
    "default_answers",
    "FieldSpec",
    "TreeRenderer",
    "TemplateParser",
    "DirectiveLexer",
    "tokenize_directives",
    "TemplateElement",
    "TemplateAST",
    "PlainText",
    "Variable",
    "Conditional",
    "RepeatingGroup",
    "FieldType",
    "infer_field_type",
    "walk",
    "element_to_dict",
    "TemplateSyntaxError",
    "UnmatchedOpenError",
    "UnexpectedCloseError",
    "MismatchedCloseError",
]
