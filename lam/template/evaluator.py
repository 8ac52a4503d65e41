"""
Tree merge engine.

Renders an already parsed element tree against answers. Produces the same
text as the direct engine for every well-formed template: the same
truthiness, the same text forms, escaping once per substitution, and
rows of a repeating group resolved against their own answers only.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Tuple

from .escaping import escape
from .nodes import Conditional, PlainText, RepeatingGroup, TemplateElement, Variable
from .renderer import normalize_answers
from ..values import AnswerMap, as_rows, is_truthy, lookup, to_text

# Elements still to render, each paired with the answers of its scope
_Frame = Iterator[Tuple[TemplateElement, AnswerMap]]


class TreeRenderer:
    """
    Walks a template tree and produces merged text.

    Open blocks are kept on an explicit stack, so any depth the parser
    accepts can be rendered. Holds no state between calls; one instance
    may be shared.
    """

    def render(self, elements: List[TemplateElement], answers: AnswerMap) -> str:
        out: List[str] = []
        stack: List[_Frame] = [iter([(e, answers) for e in elements])]

        while stack:
            item = next(stack[-1], None)
            if item is None:
                stack.pop()
                continue
            element, scope = item

            if isinstance(element, PlainText):
                out.append(element.content)

            elif isinstance(element, Variable):
                out.append(escape(to_text(lookup(scope, element.name))))

            elif isinstance(element, Conditional):
                if is_truthy(lookup(scope, element.name)):
                    stack.append(iter([(child, scope) for child in element.children]))

            elif isinstance(element, RepeatingGroup):
                rows = [normalize_answers(row) for row in as_rows(lookup(scope, element.group_name))]
                stack.append(iter([(child, row) for row in rows for child in element.children]))

            else:
                raise TypeError(f"Unknown template element: {type(element).__name__}")

        return "".join(out)

    def render_element(self, element: TemplateElement, answers: AnswerMap) -> str:
        return self.render([element], answers)


def render_tree(elements: List[TemplateElement], answers: Mapping[str, Any]) -> str:
    """
    Merge answers into a parsed template.

    Args:
        elements: Root-level elements from tokenize()
        answers: AnswerMap, or a mapping of plain Python values

    Returns:
        Merged text
    """
    return TreeRenderer().render(elements, normalize_answers(answers))


__all__ = ["TreeRenderer", "render_tree"]
