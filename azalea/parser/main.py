"""Composition class for the Azalea parser."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..ast.nodes import Node, Program
from ..lang.keywords import MODULE_NAMES
from ..lang.lexer import Token, TokenType, tokenize
from .expressions import ExpressionParserMixin
from .implicit import ImplicitCallParserMixin
from .statements import StatementParserMixin
from .tokens import TokenOperationsMixin


class Parser(
    TokenOperationsMixin,
    StatementParserMixin,
    ImplicitCallParserMixin,
    ExpressionParserMixin,
):
    """
    Total recursive-descent parser for Azalea.

    Every token stream, however malformed, yields a :class:`Program`:
    tokens that start no statement are skipped and missing pieces are left
    empty on the node.

    Statement forms (each with a family of interchangeable keywords):
        form x from 3 plus 4
        act greet name do say name end
        call greet "Ada"
        if x over 3 do say "big" end else do say "small" end
        loop 3 do say step end
        give x
        say "Hello"
        put x plus 1 to x

    Architecture:
        - TokenOperationsMixin: cursor over the token list
        - StatementParserMixin: statement forms and blocks
        - ImplicitCallParserMixin: arguments and ``call``-less calls
        - ExpressionParserMixin: precedence climbing over word operators

    ``module_names`` lists the capability modules whose calls carry a
    method name; it defaults to the modules the language knows about.
    """

    def __init__(self, tokens: List[Token], module_names: Optional[Iterable[str]] = None):
        self.tokens: List[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(
                Token(TokenType.EOF, '', last.line if last else 1, last.column if last else 1)
            )
        self.token_pos: int = 0
        self.module_names = frozenset(MODULE_NAMES if module_names is None else module_names)

    def parse(self) -> Program:
        start = self.current()
        statements: List[Node] = []

        while not self.at_end():
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)

        return Program(statements=tuple(statements), line=start.line, column=start.column)


def parse(source: str, module_names: Optional[Iterable[str]] = None) -> Program:
    """Tokenize and parse Azalea source text."""
    return Parser(tokenize(source), module_names=module_names).parse()


__all__ = ["Parser", "parse"]
