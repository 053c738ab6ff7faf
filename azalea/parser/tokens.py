"""Token cursor operations shared by the parser mixins."""

from __future__ import annotations

from typing import AbstractSet, List

from ..lang.lexer import Token, TokenType


class TokenOperationsMixin:
    """Mixin providing token manipulation operations.

    Unlike a conventional parser cursor, nothing here raises: reading past
    the end keeps returning the ``EOF`` token.
    """

    tokens: List[Token]
    token_pos: int

    def current(self) -> Token:
        """Get current token without consuming it."""
        if self.token_pos < len(self.tokens):
            return self.tokens[self.token_pos]
        return self.tokens[-1]

    def peek(self, offset: int = 1) -> Token:
        """Look ``offset`` tokens past the current one."""
        index = self.token_pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if self.token_pos < len(self.tokens):
            self.token_pos += 1
        return token

    def at_end(self) -> bool:
        return self.current().type is TokenType.EOF

    def check(self, token_type: TokenType) -> bool:
        return self.current().type is token_type

    def check_keyword(self, words: AbstractSet[str]) -> bool:
        token = self.current()
        return token.type is TokenType.KEYWORD and token.value in words

    def match_keyword(self, words: AbstractSet[str]) -> bool:
        """Consume the current token if it is a keyword in ``words``."""
        if self.check_keyword(words):
            self.advance()
            return True
        return False

    def match_symbol(self, symbols: str) -> bool:
        token = self.current()
        if token.type is TokenType.SYMBOL and token.value in symbols:
            self.advance()
            return True
        return False

    def check_word(self) -> bool:
        return self.current().type in (TokenType.IDENTIFIER, TokenType.KEYWORD)
