"""
Structural errors of the directive language.

Raised by the tree builder and by the direct renderer when directive
nesting is malformed. Missing answers are never errors.
"""

from __future__ import annotations

from typing import Optional

from .tokens import Token
from ..errors import LAMUserError


class TemplateSyntaxError(LAMUserError):
    """Malformed directive nesting."""

    def __init__(self, reason: str, token: Optional[Token] = None):
        self.reason = reason
        self.token = token
        if token is not None:
            self.line = token.line
            self.column = token.column
            self.position = token.position
            message = f"Template syntax error: {reason} at {token.line}:{token.column} ({token.value!r})"
        else:
            self.line = 0
            self.column = 0
            self.position = -1
            message = f"Template syntax error: {reason}"
        super().__init__(message)


class UnmatchedOpenError(TemplateSyntaxError):
    """An IF / REPEAT FOR was never closed."""

    def __init__(self, token: Optional[Token] = None):
        super().__init__("unmatched opening tag", token)


class UnexpectedCloseError(TemplateSyntaxError):
    """An END IF / END REPEAT has no open block."""

    def __init__(self, token: Optional[Token] = None):
        super().__init__("unexpected closing tag", token)


class MismatchedCloseError(TemplateSyntaxError):
    """A close directive does not match the innermost open block."""

    def __init__(self, token: Optional[Token] = None, expected: str = ""):
        reason = "mismatched closing tag"
        if expected:
            reason += f" (expected {expected})"
        super().__init__(reason, token)
        self.expected = expected


__all__ = [
    "TemplateSyntaxError",
    "UnmatchedOpenError",
    "UnexpectedCloseError",
    "MismatchedCloseError",
]
