"""Lexical analyzer (tokenizer) for the Azalea language.

Converts source text into a stream of tokens for parsing.  The lexer is
total: it never raises, unknown characters are dropped and unterminated
strings or block comments run to the end of the input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .keywords import is_keyword

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the Azalea language."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    SYMBOL = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with the position where it starts."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def is_value(self) -> bool:
        """True for tokens that can stand alone as an operand."""
        return self.type in (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING)


# Operators are spelled as words, so only this punctuation survives lexing.
SYMBOLS = ".,/?!;"

QUOTES = ('"', "'")


class Lexer:
    """Tokenizer for Azalea source code."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        while self.peek() is not None and self.peek().isspace():
            self.advance()

    def at_comment(self) -> bool:
        return self.peek() == '/' and self.peek(1) in ('/', '*')

    def skip_comment(self) -> None:
        """Skip a ``//`` line comment or a ``/* */`` block comment."""
        self.advance()
        if self.advance() == '/':
            while self.peek() is not None and self.peek() != '\n':
                self.advance()
            return

        start_line = self.line
        while self.peek() is not None:
            if self.peek() == '*' and self.peek(1) == '/':
                self.advance()
                self.advance()
                return
            self.advance()
        logger.debug("Unterminated block comment from line %d consumed the rest of the input", start_line)

    def read_number(self) -> str:
        """Read digits with at most one decimal point."""
        chars = []
        seen_dot = False
        while self.peek() is not None and (self.peek().isdigit() or self.peek() == '.'):
            if self.peek() == '.':
                if seen_dot:
                    break
                seen_dot = True
            chars.append(self.advance())
        return ''.join(chars)

    def read_string(self) -> str:
        """Read a quoted string, keeping escape sequences verbatim."""
        quote = self.advance()
        chars = []
        while True:
            char = self.peek()
            if char is None:
                logger.debug("Unterminated string literal at line %d consumed the rest of the input", self.line)
                break
            if char == quote:
                self.advance()
                break
            if char == '\\':
                chars.append(self.advance())
                if self.peek() is not None:
                    chars.append(self.advance())
                continue
            chars.append(self.advance())
        return ''.join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        while self.peek() is not None and (self.peek().isalnum() or self.peek() == '_'):
            chars.append(self.advance())
        return ''.join(chars)

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            if self.at_comment():
                self.skip_comment()
                continue

            char = self.peek()
            line, column = self.line, self.column

            if char.isdigit():
                self.add_token(TokenType.NUMBER, self.read_number(), line, column)
                continue

            if char in QUOTES:
                self.add_token(TokenType.STRING, self.read_string(), line, column)
                continue

            if char.isalpha() or char == '_':
                value = self.read_identifier()
                token_type = TokenType.KEYWORD if is_keyword(value) else TokenType.IDENTIFIER
                self.add_token(token_type, value, line, column)
                continue

            if char in SYMBOLS:
                self.add_token(TokenType.SYMBOL, self.advance(), line, column)
                continue

            logger.debug("Skipping unrecognised character %r at %d:%d", char, line, column)
            self.advance()

        self.add_token(TokenType.EOF, '', self.line, self.column)
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize Azalea source code."""
    return Lexer(source).tokenize()


__all__ = ["Token", "TokenType", "Lexer", "tokenize", "SYMBOLS"]
