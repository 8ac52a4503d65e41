"""
JSON report models for the CLI.

`lam parse` and `lam fields` print these as JSON
(model_dump(mode="json")) so that form front-ends can consume them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .template.fields import FieldSpec
from .template.nodes import TemplateElement, element_to_dict
from .values import (
    Absent, AnswerMap, AnswerValue, BoolValue, DateValue, NumberValue, RowListValue, TextValue,
)


class ElementModel(BaseModel):
    kind: Literal["text", "variable", "conditional", "repeating"]
    id: str
    content: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    hint: Optional[str] = None
    field_type: Optional[str] = None
    children: List[ElementModel] = Field(default_factory=list)

    @classmethod
    def from_element(cls, element: TemplateElement) -> ElementModel:
        return cls.model_validate(element_to_dict(element))


ElementModel.model_rebuild()


class ParseReport(BaseModel):
    version: str
    source: str
    elements: List[ElementModel]


class FieldModel(BaseModel):
    name: str
    kind: Literal["variable", "conditional", "repeating"]
    label: Optional[str] = None
    hint: Optional[str] = None
    field_type: Optional[str] = None
    children: List[FieldModel] = Field(default_factory=list)

    @classmethod
    def from_spec(cls, spec: FieldSpec) -> FieldModel:
        return cls.model_validate(spec.to_dict())


FieldModel.model_rebuild()


class FieldsReport(BaseModel):
    version: str
    source: str
    fields: List[FieldModel]
    defaults: Dict[str, Any]


def value_to_json(value: AnswerValue) -> Any:
    if isinstance(value, Absent):
        return None
    if isinstance(value, (BoolValue, NumberValue, TextValue)):
        return value.value
    if isinstance(value, DateValue):
        return value.value.isoformat()
    if isinstance(value, RowListValue):
        return [answers_to_json(row) for row in value.rows]
    raise TypeError(f"Not an answer value: {value!r}")


def answers_to_json(answers: AnswerMap) -> Dict[str, Any]:
    """JSON-friendly form of an answer map."""
    return {name: value_to_json(value) for name, value in answers.items()}


__all__ = [
    "ElementModel",
    "ParseReport",
    "FieldModel",
    "FieldsReport",
    "value_to_json",
    "answers_to_json",
]
