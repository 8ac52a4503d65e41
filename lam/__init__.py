"""
Legal Automator merge core.

Templates carry three kinds of directives:

    {{ client_name, label: Client name, hint: e.g. John Smith }}
    [[IF is_company]] ... [[END IF]]
    [[REPEAT FOR directors]] ... {{director_name}} ... [[END REPEAT]]

`tokenize` turns template text into an element tree for form layers;
`render` merges an answer set into template text.
"""

from __future__ import annotations

from .errors import LAMUserError
from .template import (
    Conditional, FieldSpec, FieldType, MismatchedCloseError, PlainText, RepeatingGroup,
    TemplateElement, TemplateSyntaxError, UnexpectedCloseError, UnmatchedOpenError, Variable,
    coalesce, collect_fields, default_answers, escape, render, render_tree, tokenize,
)
from .values import (
    ABSENT, Absent, AnswerError, AnswerMap, AnswerValue, BoolValue, DateValue, NumberValue,
    RowListValue, TextValue, is_truthy, to_answer_map, to_text, to_value,
)

__all__ = [
    "tokenize",
    "render",
    "render_tree",
    "coalesce",
    "escape",
    "collect_fields",
    "default_answers",
    "FieldSpec",
    "FieldType",
    "TemplateElement",
    "PlainText",
    "Variable",
    "Conditional",
    "RepeatingGroup",
    "LAMUserError",
    "TemplateSyntaxError",
    "UnmatchedOpenError",
    "UnexpectedCloseError",
    "MismatchedCloseError",
    "AnswerError",
    "AnswerValue",
    "AnswerMap",
    "Absent",
    "ABSENT",
    "BoolValue",
    "NumberValue",
    "TextValue",
    "DateValue",
    "RowListValue",
    "to_value",
    "to_answer_map",
    "is_truthy",
    "to_text",
]
