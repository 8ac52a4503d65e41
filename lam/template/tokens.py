"""
Lexical types of the directive language.

A template is scanned into a flat stream of tokens: literal text and the
five directive kinds. The tree builder consumes this stream.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class TokenType(enum.Enum):
    """Token kinds in a template."""

    # Literal content
    TEXT = "TEXT"

    # {{ name, label: ..., hint: ... }}
    VARIABLE = "VARIABLE"

    # [[IF name]] / [[END IF]]
    IF_OPEN = "IF_OPEN"
    IF_CLOSE = "IF_CLOSE"

    # [[REPEAT FOR name]] / [[END REPEAT]]
    REPEAT_OPEN = "REPEAT_OPEN"
    REPEAT_CLOSE = "REPEAT_CLOSE"

    EOF = "EOF"


OPEN_TYPES = frozenset({TokenType.IF_OPEN, TokenType.REPEAT_OPEN})
CLOSE_TYPES = frozenset({TokenType.IF_CLOSE, TokenType.REPEAT_CLOSE})


@dataclass(frozen=True)
class DirectiveBody:
    """Parsed inside of a variable or open directive."""
    name: str
    label: Optional[str] = None
    hint: Optional[str] = None


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error reporting.
    """
    type: TokenType
    value: str
    position: int        # Start offset in the source text
    end: int             # Offset just past the token
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)
    body: Optional[DirectiveBody] = None

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = [
    "TokenType",
    "OPEN_TYPES",
    "CLOSE_TYPES",
    "DirectiveBody",
    "Token",
]
