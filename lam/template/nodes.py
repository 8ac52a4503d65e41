"""
Template element tree.

Immutable node classes produced by the parser and consumed by the
tree renderer and by form layers. Every element carries an opaque
identifier assigned at construction; it takes no part in equality,
so two parses of one template compare equal.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


def _new_id() -> str:
    return uuid.uuid4().hex


class FieldType(enum.Enum):
    """Presentation hint for a variable's input control."""
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"


_BOOLEAN_PREFIXES = ("is_", "has_", "flag_")


def infer_field_type(name: str) -> FieldType:
    """
    Guess an input control type from a variable name.

    Only form layers look at this; parsing and merging never do.
    """
    if name.startswith(_BOOLEAN_PREFIXES):
        return FieldType.BOOLEAN
    if name.endswith("_date") or "date" in name:
        return FieldType.DATE
    return FieldType.TEXT


@dataclass(frozen=True)
class TemplateElement:
    """Base class for all template tree nodes."""
    pass


@dataclass(frozen=True)
class PlainText(TemplateElement):
    """
    Literal text, emitted verbatim.
    """
    content: str
    element_id: str = field(default_factory=_new_id, compare=False, kw_only=True)


@dataclass(frozen=True)
class Variable(TemplateElement):
    """
    Single value placeholder: {{ name, label: ..., hint: ... }}.
    """
    name: str
    label: Optional[str] = None
    hint: Optional[str] = None
    element_id: str = field(default_factory=_new_id, compare=False, kw_only=True)

    @property
    def field_type(self) -> FieldType:
        return infer_field_type(self.name)


@dataclass(frozen=True)
class Conditional(TemplateElement):
    """
    Block included only when its name resolves truthy.
    """
    name: str
    label: Optional[str] = None
    children: List[TemplateElement] = field(default_factory=list)
    element_id: str = field(default_factory=_new_id, compare=False, kw_only=True)


@dataclass(frozen=True)
class RepeatingGroup(TemplateElement):
    """
    Block rendered once per row of the list bound to group_name.

    Children resolve against each row's own answers.
    """
    group_name: str
    label: Optional[str] = None
    children: List[TemplateElement] = field(default_factory=list)
    element_id: str = field(default_factory=_new_id, compare=False, kw_only=True)


# Alias for a list of nodes (the tree)
TemplateAST = List[TemplateElement]


def walk(elements: List[TemplateElement]) -> Iterator[TemplateElement]:
    """Depth-first pre-order traversal."""
    stack = list(reversed(elements))
    while stack:
        element = stack.pop()
        yield element
        if isinstance(element, (Conditional, RepeatingGroup)):
            stack.extend(reversed(element.children))


def element_to_dict(element: TemplateElement) -> Dict[str, Any]:
    """Plain-dict form of an element, for JSON export."""
    if isinstance(element, PlainText):
        return {"kind": "text", "id": element.element_id, "content": element.content}
    if isinstance(element, Variable):
        return {
            "kind": "variable",
            "id": element.element_id,
            "name": element.name,
            "label": element.label,
            "hint": element.hint,
            "field_type": element.field_type.value,
        }
    if isinstance(element, Conditional):
        return {
            "kind": "conditional",
            "id": element.element_id,
            "name": element.name,
            "label": element.label,
            "children": [element_to_dict(c) for c in element.children],
        }
    if isinstance(element, RepeatingGroup):
        return {
            "kind": "repeating",
            "id": element.element_id,
            "name": element.group_name,
            "label": element.label,
            "children": [element_to_dict(c) for c in element.children],
        }
    raise TypeError(f"Unknown template element: {type(element).__name__}")


__all__ = [
    "FieldType",
    "infer_field_type",
    "TemplateElement",
    "PlainText",
    "Variable",
    "Conditional",
    "RepeatingGroup",
    "TemplateAST",
    "walk",
    "element_to_dict",
]
