"""
Lexical analyzer for the directive language.

Splits template text into a flat token stream: literal text and the five
directive kinds (variable, IF open/close, REPEAT FOR open/close).
At every step the earliest directive at or after the cursor wins; when two
directives start at the same offset, the one declared first wins.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from .tokens import DirectiveBody, Token, TokenType

# Declaration order matters: it breaks ties between matches at one offset.
_PATTERNS: List[Tuple[TokenType, str]] = [
    (TokenType.VARIABLE, r'\{\{([^}]+)\}\}'),
    (TokenType.IF_OPEN, r'\[\[IF\s+([^\]]+)\]\]'),
    (TokenType.IF_CLOSE, r'\[\[END\s+IF\]\]'),
    (TokenType.REPEAT_OPEN, r'\[\[REPEAT\s+FOR\s+([^\]]+)\]\]'),
    (TokenType.REPEAT_CLOSE, r'\[\[END\s+REPEAT\]\]'),
]


def _build_master_pattern() -> re.Pattern[str]:
    # An alternation is tried left to right at each offset, and re.search
    # tries offsets left to right: leftmost match, ties by declaration order.
    parts = [
        f"(?P<{token_type.name}>{pattern})"
        for token_type, pattern in _PATTERNS
    ]
    return re.compile("|".join(parts))


_MASTER = _build_master_pattern()
_GROUP_OFFSETS = {
    token_type.name: re.compile(pattern).groups for token_type, pattern in _PATTERNS
}

# Attributes understood after the name
_ATTRIBUTES = ("label", "hint")


def parse_directive_body(body: str, allow_hint: bool = True) -> DirectiveBody:
    """
    Parse the inside of a directive: "name[, label: text][, hint: text]".

    Whitespace around every part is trimmed. Unknown attributes are ignored.
    Open directives (IF / REPEAT FOR) only carry a label.
    """
    parts = body.split(",")
    name = parts[0].strip()
    attrs = {}
    for part in parts[1:]:
        trimmed = part.strip()
        for attr in _ATTRIBUTES:
            prefix = f"{attr}:"
            if trimmed.startswith(prefix):
                # first occurrence wins
                attrs.setdefault(attr, trimmed[len(prefix):].strip())
                break
    return DirectiveBody(
        name=name,
        label=attrs.get("label"),
        hint=attrs.get("hint") if allow_hint else None,
    )


class DirectiveLexer:
    """
    Directive lexer.

    Produces TEXT tokens for literal runs (whitespace-only runs included)
    and one token per recognised directive, followed by a single EOF token.
    Text that merely looks like a directive (an unclosed "{{", a misspelt
    keyword) stays part of the surrounding TEXT token.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole source text.
        """
        tokens = list(self._scan())
        tokens.append(Token(TokenType.EOF, "", self.position, self.position, self.line, self.column))
        return tokens

    def _scan(self) -> Iterator[Token]:
        while self.position < self.length:
            match = _MASTER.search(self.text, self.position)
            if match is None:
                yield self._text_token(self.length)
                return

            if match.start() > self.position:
                yield self._text_token(match.start())

            yield self._directive_token(match)

    def _text_token(self, end: int) -> Token:
        start_pos, start_line, start_column = self.position, self.line, self.column
        value = self.text[self.position:end]
        self._advance_to(end)
        return Token(TokenType.TEXT, value, start_pos, end, start_line, start_column)

    def _directive_token(self, match: re.Match[str]) -> Token:
        kind = match.lastgroup
        assert kind is not None
        token_type = TokenType[kind]

        body: Optional[DirectiveBody] = None
        if _GROUP_OFFSETS[kind]:
            # the body group directly follows the named group
            raw_body = match.group(match.re.groupindex[kind] + 1)
            body = parse_directive_body(raw_body, allow_hint=token_type is TokenType.VARIABLE)

        token = Token(
            token_type,
            match.group(0),
            match.start(),
            match.end(),
            self.line,
            self.column,
            body,
        )
        self._advance_to(match.end())
        return token

    def _advance_to(self, end: int) -> None:
        """
        Move the cursor to `end`, updating line and column numbers.
        """
        chunk = self.text[self.position:end]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position = end


def tokenize_directives(text: str) -> List[Token]:
    """
    Convenience wrapper for tokenizing a template.

    Args:
        text: Template text

    Returns:
        Token list terminated by EOF
    """
    return DirectiveLexer(text).tokenize()


__all__ = [
    "DirectiveLexer",
    "parse_directive_body",
    "tokenize_directives",
]
