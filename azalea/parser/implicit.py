"""Call arguments and keyword-led implicit calls.

Markup element names desugar to a ``view`` module call and capability
module names to a call of that module, so ``button "Go"`` means
``call view button "Go"`` and ``net get "x"`` means ``call net get "x"``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet, List, Tuple

from ..ast.nodes import Call
from ..lang.keywords import (
    BLOCK_END_KEYWORDS,
    BLOCK_START_KEYWORDS,
    CONNECTIVE_KEYWORDS,
    ELEMENT_NAMES,
    ELSE_KEYWORDS,
    STATEMENT_KEYWORDS,
    VIEW_MODULE,
    is_operator,
)
from ..lang.lexer import TokenType

if TYPE_CHECKING:
    from ..ast.nodes import Node

logger = logging.getLogger(__name__)

_ARGUMENT_STOPS = BLOCK_START_KEYWORDS | BLOCK_END_KEYWORDS | ELSE_KEYWORDS


class ImplicitCallParserMixin:
    """Mixin for argument lists and calls written without ``call``."""

    module_names: AbstractSet[str]

    def is_module_name(self, word: str) -> bool:
        return word in self.module_names

    def is_implicit_call_target(self, word: str) -> bool:
        if is_operator(word):
            return False
        return word in ELEMENT_NAMES or self.is_module_name(word)

    def parse_implicit_call(self) -> Call:
        token = self.advance()

        if token.value in ELEMENT_NAMES:
            target, method = VIEW_MODULE, token.value
        else:
            target = token.value
            method = self.advance().value if self.check_word() else None

        logger.debug("Implicit call %s.%s at %d:%d", target, method, token.line, token.column)
        return Call(
            target=target,
            method=method,
            args=self.parse_arguments(),
            line=token.line,
            column=token.column,
        )

    def parse_arguments(self) -> Tuple["Node", ...]:
        """Consume argument expressions greedily.

        Stops at block delimiters, ``else``, statement keywords and
        punctuation other than commas.  A connective (``with``, ``to``,
        ``on``) is skipped when a value follows it and ends the list
        otherwise.
        """
        args: List["Node"] = []

        while not self.at_end():
            token = self.current()

            if token.type is TokenType.SYMBOL:
                if token.value == ",":
                    self.advance()
                    continue
                break

            if token.type is TokenType.KEYWORD:
                if token.value in _ARGUMENT_STOPS or token.value in STATEMENT_KEYWORDS:
                    break
                if token.value in CONNECTIVE_KEYWORDS:
                    if self.peek().is_value:
                        self.advance()
                        continue
                    break

            args.append(self.parse_expression())

        return tuple(args)
