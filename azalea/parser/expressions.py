"""Expression parsing: precedence climbing over word operators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..ast.nodes import BinaryOp, Identifier, Literal, LiteralKind
from ..lang.keywords import (
    BLOCK_END_KEYWORDS,
    BLOCK_START_KEYWORDS,
    BOOLEAN_LITERALS,
    ELSE_KEYWORDS,
    OPERATOR_PRECEDENCE,
)
from ..lang.lexer import TokenType

if TYPE_CHECKING:
    from ..ast.nodes import Node

_DELIMITERS = BLOCK_START_KEYWORDS | BLOCK_END_KEYWORDS | ELSE_KEYWORDS


class ExpressionParserMixin:
    """Mixin for binary and primary expressions.

    Precedence, low to high: ``or`` < ``and`` < ``same``/``not`` <
    ``over``/``under`` < ``plus``/``minus`` < ``times``/``div``.
    All operators are left-associative.
    """

    def parse_expression(self) -> "Node":
        return self.parse_binary(0)

    def parse_binary(self, min_precedence: int) -> "Node":
        left = self.parse_primary()

        while True:
            token = self.current()
            if token.type is not TokenType.KEYWORD:
                break
            precedence = OPERATOR_PRECEDENCE.get(token.value)
            if precedence is None or precedence < min_precedence:
                break
            if not self._operand_follows():
                # "loop 3 times do": the word is filler, not an operator
                break

            self.advance()
            right = self.parse_binary(precedence + 1)
            left = BinaryOp(
                op=token.value,
                left=left,
                right=right,
                line=token.line,
                column=token.column,
            )

        return left

    def _operand_follows(self) -> bool:
        following = self.peek()
        if following.type in (TokenType.EOF, TokenType.SYMBOL):
            return False
        return not (following.type is TokenType.KEYWORD and following.value in _DELIMITERS)

    def parse_primary(self) -> "Node":
        token = self.advance()

        if token.type is TokenType.NUMBER:
            return Literal(raw=token.value, literal_kind=LiteralKind.NUMBER, line=token.line, column=token.column)

        if token.type is TokenType.STRING:
            return Literal(raw=token.value, literal_kind=LiteralKind.STRING, line=token.line, column=token.column)

        if token.type is TokenType.KEYWORD and token.value in BOOLEAN_LITERALS:
            return Literal(raw=token.value, literal_kind=LiteralKind.BOOLEAN, line=token.line, column=token.column)

        # Identifiers, and any other keyword in operand position, are names.
        return Identifier(name=token.value, line=token.line, column=token.column)
