"""
Tree builder for the directive language.

Turns the lexer's token stream into a nested element tree in one pass,
using an explicit stack of open-block frames instead of recursion.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MismatchedCloseError, UnexpectedCloseError, UnmatchedOpenError
from .lexer import tokenize_directives
from .nodes import Conditional, PlainText, RepeatingGroup, TemplateAST, TemplateElement, Variable
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class FrameKind(enum.Enum):
    ROOT = "root"
    CONDITIONAL = "conditional"
    REPEATING = "repeating"


# Close token -> frame kind it is allowed to close
_CLOSES = {
    TokenType.IF_CLOSE: FrameKind.CONDITIONAL,
    TokenType.REPEAT_CLOSE: FrameKind.REPEATING,
}

_CLOSE_SYNTAX = {
    FrameKind.CONDITIONAL: "[[END IF]]",
    FrameKind.REPEATING: "[[END REPEAT]]",
}


@dataclass
class Frame:
    """One open block and the children collected for it so far."""
    kind: FrameKind
    name: str = ""
    label: Optional[str] = None
    children: List[TemplateElement] = field(default_factory=list)
    opened_by: Optional[Token] = None

    def finish(self) -> TemplateElement:
        if self.kind is FrameKind.CONDITIONAL:
            return Conditional(self.name, self.label, self.children)
        if self.kind is FrameKind.REPEATING:
            return RepeatingGroup(self.name, self.label, self.children)
        raise ValueError("Root frame cannot be finished as an element")


class TemplateParser:
    """
    Stack-based parser for templates.

    Text and variable tokens append to the innermost open frame, open
    tokens push a frame, close tokens pop one and attach the finished
    block to its parent.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.stack: List[Frame] = [Frame(FrameKind.ROOT)]

    @property
    def depth(self) -> int:
        """Number of currently open blocks."""
        return len(self.stack) - 1

    def parse(self) -> TemplateAST:
        """
        Build the element tree.

        Returns:
            Root-level elements in document order

        Raises:
            UnexpectedCloseError: close directive with no open block
            MismatchedCloseError: close directive of the wrong kind
            UnmatchedOpenError: blocks still open at end of input
        """
        for token in self.tokens:
            if token.type is TokenType.EOF:
                break
            self._feed(token)

        if len(self.stack) > 1:
            raise UnmatchedOpenError(self.stack[-1].opened_by)

        return self.stack[0].children

    def _feed(self, token: Token) -> None:
        top = self.stack[-1]

        if token.type is TokenType.TEXT:
            top.children.append(PlainText(token.value))

        elif token.type is TokenType.VARIABLE:
            assert token.body is not None
            top.children.append(Variable(token.body.name, token.body.label, token.body.hint))

        elif token.type is TokenType.IF_OPEN:
            self._push(FrameKind.CONDITIONAL, token)

        elif token.type is TokenType.REPEAT_OPEN:
            self._push(FrameKind.REPEATING, token)

        elif token.type in _CLOSES:
            self._pop(_CLOSES[token.type], token)

        else:
            raise ValueError(f"Unexpected token: {token!r}")

    def _push(self, kind: FrameKind, token: Token) -> None:
        assert token.body is not None
        self.stack.append(Frame(kind, token.body.name, token.body.label, opened_by=token))
        logger.debug(f"open {kind.value} '{token.body.name}' at {token.line}:{token.column}, depth {self.depth}")

    def _pop(self, expected: FrameKind, token: Token) -> None:
        if len(self.stack) == 1:
            raise UnexpectedCloseError(token)

        top = self.stack[-1]
        if top.kind is not expected:
            raise MismatchedCloseError(token, expected=_CLOSE_SYNTAX[top.kind])

        finished = self.stack.pop()
        self.stack[-1].children.append(finished.finish())
        logger.debug(f"close {finished.kind.value} '{finished.name}' with {len(finished.children)} children")


def tokenize(text: str) -> TemplateAST:
    """
    Parse template text into an element tree.

    Args:
        text: Template text

    Returns:
        Root-level elements

    Raises:
        TemplateSyntaxError: on malformed directive nesting
    """
    tokens = tokenize_directives(text)
    logger.debug(f"lexed {len(tokens) - 1} tokens from {len(text)} chars")
    return TemplateParser(tokens).parse()


__all__ = [
    "FrameKind",
    "Frame",
    "TemplateParser",
    "tokenize",
]
