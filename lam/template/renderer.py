"""
Direct merge engine.

Resolves directives straight from template text without building an
element tree. The text is scanned once; each scope (the whole template, a
true IF body, or one row of a REPEAT FOR body) is cut into top-level pieces
(literal text, variables and complete IF / REPEAT FOR blocks) and resolved
in three stages: variables, conditionals, repeats. Block bodies become new
scopes on an explicit work stack, so nesting depth is not limited by the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple, Union

from .errors import MismatchedCloseError, UnexpectedCloseError, UnmatchedOpenError
from .escaping import escape
from .lexer import tokenize_directives
from .tokens import CLOSE_TYPES, OPEN_TYPES, Token, TokenType
from ..values import AnswerMap, as_rows, is_truthy, lookup, to_answer_map, to_text

logger = logging.getLogger(__name__)

_MATCHING_OPEN = {
    TokenType.IF_CLOSE: TokenType.IF_OPEN,
    TokenType.REPEAT_CLOSE: TokenType.REPEAT_OPEN,
}

_CLOSE_SYNTAX = {
    TokenType.IF_OPEN: "[[END IF]]",
    TokenType.REPEAT_OPEN: "[[END REPEAT]]",
}


@dataclass(frozen=True)
class _Span:
    """A top-level directive awaiting resolution."""
    kind: TokenType                 # VARIABLE, IF_OPEN or REPEAT_OPEN
    name: str
    body: Tuple[int, int] = (0, 0)  # token index range between the open and its close


class _Scope:
    """A token range resolved against one answer map."""

    def __init__(self, lo: int, hi: int, answers: AnswerMap):
        self.lo = lo
        self.hi = hi
        self.answers = answers
        self.pieces: List[_Piece] = []
        self.text = ""


# str: resolved text; _Span: not yet resolved; _Scope: a true IF body;
# list of _Scope: the rows of a REPEAT FOR block
_Piece = Union[str, _Span, _Scope, List[_Scope]]


def _split_top_level(tokens: List[Token], lo: int, hi: int) -> List[_Piece]:
    """
    Cut a token range into literal runs and top-level directive spans.

    Nested directives stay inside their enclosing block's body. The whole
    nesting structure is checked on the way, so a malformed template fails
    here even when the broken part sits in a branch that is never rendered.
    """
    pieces: List[_Piece] = []
    open_stack: List[Tuple[int, Token]] = []

    for idx in range(lo, hi):
        token = tokens[idx]
        if token.type is TokenType.EOF:
            break

        if token.type in OPEN_TYPES:
            open_stack.append((idx, token))
            continue

        if token.type in CLOSE_TYPES:
            if not open_stack:
                raise UnexpectedCloseError(token)
            open_idx, opener = open_stack[-1]
            if opener.type is not _MATCHING_OPEN[token.type]:
                raise MismatchedCloseError(token, expected=_CLOSE_SYNTAX[opener.type])
            open_stack.pop()
            if not open_stack:
                assert opener.body is not None
                pieces.append(_Span(opener.type, opener.body.name, (open_idx + 1, idx)))
            continue

        if open_stack:
            # belongs to an enclosing block body
            continue

        if token.type is TokenType.TEXT:
            pieces.append(token.value)
        elif token.type is TokenType.VARIABLE:
            assert token.body is not None
            pieces.append(_Span(TokenType.VARIABLE, token.body.name))

    if open_stack:
        raise UnmatchedOpenError(open_stack[-1][1])

    return pieces


def _substitute_variables(pieces: List[_Piece], answers: AnswerMap) -> int:
    count = 0
    # rightmost first
    for idx in range(len(pieces) - 1, -1, -1):
        piece = pieces[idx]
        if isinstance(piece, _Span) and piece.kind is TokenType.VARIABLE:
            pieces[idx] = escape(to_text(lookup(answers, piece.name)))
            count += 1
    return count


def _process_conditionals(pieces: List[_Piece], answers: AnswerMap, nested: List[_Scope]) -> int:
    count = 0
    for idx in range(len(pieces) - 1, -1, -1):
        piece = pieces[idx]
        if isinstance(piece, _Span) and piece.kind is TokenType.IF_OPEN:
            if is_truthy(lookup(answers, piece.name)):
                body = _Scope(*piece.body, answers)
                nested.append(body)
                pieces[idx] = body
            else:
                pieces[idx] = ""
            count += 1
    return count


def _process_repeats(pieces: List[_Piece], answers: AnswerMap, nested: List[_Scope]) -> int:
    count = 0
    for idx in range(len(pieces) - 1, -1, -1):
        piece = pieces[idx]
        if isinstance(piece, _Span) and piece.kind is TokenType.REPEAT_OPEN:
            rows = as_rows(lookup(answers, piece.name))
            # each row is its own scope, no fallback to the outer answers
            bodies = [_Scope(*piece.body, normalize_answers(row)) for row in rows]
            nested.extend(bodies)
            pieces[idx] = bodies
            logger.debug(f"repeat '{piece.name}': {len(rows)} rows")
            count += 1
    return count


def _resolve_scope(scope: _Scope, tokens: List[Token]) -> List[_Scope]:
    """Run the three stages over one scope; returns the block bodies still to resolve."""
    nested: List[_Scope] = []
    scope.pieces = _split_top_level(tokens, scope.lo, scope.hi)

    variables = _substitute_variables(scope.pieces, scope.answers)
    conditionals = _process_conditionals(scope.pieces, scope.answers, nested)
    repeats = _process_repeats(scope.pieces, scope.answers, nested)
    logger.debug(
        f"scope of {scope.hi - scope.lo} tokens: {variables} variables, "
        f"{conditionals} conditionals, {repeats} repeats"
    )
    return nested


def _piece_text(piece: _Piece) -> str:
    if isinstance(piece, str):
        return piece
    if isinstance(piece, _Scope):
        return piece.text
    if isinstance(piece, list):
        return "".join(row.text for row in piece)
    raise TypeError(f"Unresolved piece: {piece!r}")


def normalize_answers(answers: Mapping[str, Any]) -> AnswerMap:
    """Accept an AnswerMap or plain Python values (AnswerValues pass through)."""
    return to_answer_map(answers)


def render(text: str, answers: Mapping[str, Any]) -> str:
    """
    Merge answers into template text.

    Missing answers are not errors: variables render empty, conditionals
    are false and repeating blocks have no rows.

    Args:
        text: Template text
        answers: AnswerMap, or a mapping of plain Python values

    Returns:
        Text with every directive resolved

    Raises:
        TemplateSyntaxError: on malformed directive nesting
        AnswerError: when plain answers cannot be coerced
    """
    tokens = tokenize_directives(text)
    root = _Scope(0, len(tokens), normalize_answers(answers))

    # Scopes are recorded parent before child
    order: List[_Scope] = [root]
    pending: List[_Scope] = [root]
    while pending:
        nested = _resolve_scope(pending.pop(), tokens)
        order.extend(nested)
        pending.extend(nested)

    for scope in reversed(order):
        scope.text = "".join(_piece_text(p) for p in scope.pieces)
    return root.text


__all__ = ["render", "normalize_answers"]
