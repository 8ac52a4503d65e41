"""
Questionnaire fields derived from a template tree.

Form layers draw one control per field and send the collected answers
back keyed by field name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple

from .nodes import Conditional, FieldType, RepeatingGroup, TemplateElement, Variable
from ..values import AnswerMap, BoolValue, RowListValue, TextValue

FieldKind = Literal["variable", "conditional", "repeating"]


@dataclass
class FieldSpec:
    name: str
    kind: FieldKind
    label: Optional[str] = None
    hint: Optional[str] = None
    field_type: Optional[FieldType] = None
    # Row fields of a repeating group; fields nested in a conditional
    children: List[FieldSpec] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "label": self.label,
            "hint": self.hint,
            "field_type": self.field_type.value if self.field_type else None,
            "children": [c.to_dict() for c in self.children],
        }


def collect_fields(elements: List[TemplateElement]) -> List[FieldSpec]:
    """
    One field per distinct name in a scope, in document order.

    A conditional's fields appear as its children (the form reveals them when
    the toggle is on) but share the enclosing answer scope; a repeating
    group's children form the row scope. The first occurrence of a name
    supplies its label and hint.
    """
    result: List[FieldSpec] = []
    # names already reported in each row scope, keyed by the repeating field
    row_scopes: Dict[int, Dict[str, FieldSpec]] = {}
    stack: List[Tuple[Iterator[TemplateElement], List[FieldSpec], Dict[str, FieldSpec]]] = [
        (iter(elements), result, {})
    ]

    while stack:
        items, out, seen = stack[-1]
        element = next(items, None)
        if element is None:
            stack.pop()
            continue

        if isinstance(element, Variable):
            if element.name in seen:
                continue
            spec = FieldSpec(
                element.name, "variable", element.label, element.hint, element.field_type
            )
            seen[element.name] = spec
            out.append(spec)

        elif isinstance(element, Conditional):
            spec = seen.get(element.name)
            if spec is None:
                spec = FieldSpec(element.name, "conditional", element.label)
                seen[element.name] = spec
                out.append(spec)
            # same answer scope as the enclosing block
            target = spec.children if spec.kind == "conditional" else out
            stack.append((iter(element.children), target, seen))

        elif isinstance(element, RepeatingGroup):
            spec = seen.get(element.group_name)
            if spec is None:
                spec = FieldSpec(element.group_name, "repeating", element.label)
                seen[element.group_name] = spec
                out.append(spec)
            if spec.kind == "repeating":
                # rows are a fresh scope, shared by every block with this name
                row_seen = row_scopes.setdefault(id(spec), {})
                stack.append((iter(element.children), spec.children, row_seen))

    return result


def default_answers(elements: List[TemplateElement]) -> AnswerMap:
    """
    Initial answers for a blank questionnaire.

    Toggles start off, text fields empty and repeating groups without rows.
    """
    return _defaults(collect_fields(elements))


def _defaults(fields: List[FieldSpec]) -> AnswerMap:
    answers: AnswerMap = {}
    for spec in fields:
        if spec.kind == "repeating":
            answers[spec.name] = RowListValue([])
            continue
        if spec.kind == "conditional":
            answers[spec.name] = BoolValue(False)
            answers.update(_defaults(spec.children))
            continue
        if spec.field_type is FieldType.BOOLEAN:
            answers[spec.name] = BoolValue(False)
        else:
            answers[spec.name] = TextValue("")
    return answers


__all__ = ["FieldSpec", "collect_fields", "default_answers"]
