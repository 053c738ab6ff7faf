"""Statement parsing for the eight keyword-introduced statement forms."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Dict, List, Optional

from ..ast.nodes import (
    Assign,
    Block,
    Call,
    Conditional,
    Declaration,
    FunctionDef,
    Loop,
    Output,
    Return,
)
from ..lang.keywords import (
    ASSIGNMENT_INTRODUCERS,
    BLOCK_END_KEYWORDS,
    BLOCK_START_KEYWORDS,
    BOOLEAN_LITERALS,
    CONDITIONAL_KEYWORDS,
    ELSE_KEYWORDS,
    FUNCTION_BLOCK_START_KEYWORDS,
    LOOP_COUNT_FILLER,
    LOOP_KEYWORDS,
    OUTPUT_LABEL_KEYWORD,
    STATEMENT_KEYWORDS,
    TYPE_NAMES,
    StatementKind,
    statement_kind,
)
from ..lang.lexer import Token, TokenType

if TYPE_CHECKING:
    from ..ast.nodes import Node

logger = logging.getLogger(__name__)

# Keywords that shape statements and therefore never act as names.
STRUCTURAL_KEYWORDS = (
    frozenset(STATEMENT_KEYWORDS)
    | FUNCTION_BLOCK_START_KEYWORDS
    | BLOCK_END_KEYWORDS
    | ELSE_KEYWORDS
)

# Words that can never be a call target.
_CALL_TARGET_STOPS = BLOCK_START_KEYWORDS | BLOCK_END_KEYWORDS | ELSE_KEYWORDS

_STATEMENT_PARSERS: Dict[StatementKind, str] = {
    StatementKind.DECLARATION: "parse_declaration",
    StatementKind.FUNCTION: "parse_function_def",
    StatementKind.CALL: "parse_call",
    StatementKind.CONDITIONAL: "parse_conditional",
    StatementKind.LOOP: "parse_loop",
    StatementKind.RETURN: "parse_return",
    StatementKind.OUTPUT: "parse_output",
    StatementKind.ASSIGNMENT: "parse_assignment",
}


class StatementParserMixin:
    """Mixin for statements and blocks.

    Every parse method consumes at least one token, which is what keeps
    the skip-and-continue recovery loops in :meth:`parse_block` and
    ``Parser.parse`` terminating.
    """

    def parse_statement(self) -> Optional["Node"]:
        """Parse one statement, or skip one token and return ``None``."""
        token = self.current()

        if token.type is TokenType.KEYWORD:
            kind = statement_kind(token.value)
            if kind is not None:
                return getattr(self, _STATEMENT_PARSERS[kind])()
            if self.is_implicit_call_target(token.value):
                return self.parse_implicit_call()
            logger.debug("Skipping keyword %r at %d:%d", token.value, token.line, token.column)
            self.advance()
            return None

        if token.type is TokenType.SYMBOL:
            self.advance()
            return None

        return self.parse_expression()

    def parse_block(self, *, stop_at_else: bool = False) -> Block:
        """Parse statements up to and including a block-end keyword.

        With ``stop_at_else`` the block also ends, unconsumed, at ``else``
        so that ``if c do ... else do ... end`` reads naturally.
        """
        start = self.current()
        statements: List["Node"] = []

        while not self.at_end():
            if self.match_keyword(BLOCK_END_KEYWORDS):
                break
            if stop_at_else and self.check_keyword(ELSE_KEYWORDS):
                break
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)

        return Block(statements=tuple(statements), line=start.line, column=start.column)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def check_name(self) -> bool:
        """True if the current token can serve as a declared name."""
        token = self.current()
        if token.type is TokenType.IDENTIFIER:
            return True
        return token.type is TokenType.KEYWORD and token.value not in STRUCTURAL_KEYWORDS

    def at_terminator(self) -> bool:
        """True where an optional expression is absent."""
        token = self.current()
        if token.type in (TokenType.EOF, TokenType.SYMBOL):
            return True
        return token.type is TokenType.KEYWORD and (
            token.value in STRUCTURAL_KEYWORDS or token.value in BLOCK_START_KEYWORDS
        )

    def _optional_expression(self) -> Optional["Node"]:
        if self.at_terminator():
            return None
        return self.parse_expression()

    def _starts_value(self, token: Token) -> bool:
        return token.is_value or (token.type is TokenType.KEYWORD and token.value in BOOLEAN_LITERALS)

    # ------------------------------------------------------------------
    # Statement forms
    # ------------------------------------------------------------------

    def parse_declaration(self) -> Declaration:
        """
        Syntax: form [type] name [from|is|equals|to|as|becomes expr]

        Without an introducer a following expression is still taken as
        the value: ``let x 5``.
        """
        keyword = self.advance()

        type_name = None
        if self._type_name_follows():
            type_name = self.advance().value

        name = ""
        if self.check_name() and not self.check_keyword(ASSIGNMENT_INTRODUCERS):
            name = self.advance().value

        if self.match_keyword(ASSIGNMENT_INTRODUCERS):
            value = self.parse_expression()
        else:
            value = self._optional_expression()

        return Declaration(
            name=name,
            type_name=type_name,
            value=value,
            line=keyword.line,
            column=keyword.column,
        )

    def _type_name_follows(self) -> bool:
        token = self.current()
        following = self.peek()
        if token.type is TokenType.KEYWORD and token.value in TYPE_NAMES:
            return following.type is TokenType.IDENTIFIER or (
                following.type is TokenType.KEYWORD
                and following.value not in STRUCTURAL_KEYWORDS
                and following.value not in ASSIGNMENT_INTRODUCERS
            )
        # An unknown type word is only recognised in "let int x from 5".
        introducer = self.peek(2)
        return (
            token.type is TokenType.IDENTIFIER
            and following.type is TokenType.IDENTIFIER
            and introducer.type is TokenType.KEYWORD
            and introducer.value in ASSIGNMENT_INTRODUCERS
        )

    def parse_function_def(self) -> FunctionDef:
        """
        Syntax: act name [param [, param]...] do body end

        Parameters may be separated by commas or semicolons.  If no
        block-start keyword appears, the body is parsed from whatever
        follows the parameters.
        """
        keyword = self.advance()
        name = self.advance().value if self.check_name() else ""

        params: List[str] = []
        while not self.at_end():
            if self.match_keyword(FUNCTION_BLOCK_START_KEYWORDS):
                break
            if self.match_symbol(",;"):
                continue
            if self.check(TokenType.IDENTIFIER):
                params.append(self.advance().value)
                continue
            break

        body = self.parse_block()
        return FunctionDef(
            name=name,
            params=tuple(params),
            body=body,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_call(self) -> Call:
        """
        Syntax: call target [method] [args...]

        ``method`` is read only when ``target`` names a capability module.
        """
        keyword = self.advance()

        target = ""
        if self.check_word() and not self.check_keyword(_CALL_TARGET_STOPS):
            target = self.advance().value

        method = None
        if self.is_module_name(target) and self.check_word():
            method = self.advance().value

        return Call(
            target=target,
            method=method,
            args=self.parse_arguments(),
            line=keyword.line,
            column=keyword.column,
        )

    def parse_conditional(self) -> Conditional:
        """
        Syntax: if condition do ... end [else do ... end]

        ``else`` may also be followed directly by another conditional.
        """
        keyword = self.advance()
        condition = self.parse_expression()

        then_block = None
        if self.match_keyword(BLOCK_START_KEYWORDS):
            then_block = self.parse_block(stop_at_else=True)

        else_block = None
        if self.match_keyword(ELSE_KEYWORDS):
            if self.match_keyword(BLOCK_START_KEYWORDS):
                else_block = self.parse_block()
            elif self.check_keyword(CONDITIONAL_KEYWORDS):
                start = self.current()
                nested = self.parse_conditional()
                else_block = Block(statements=(nested,), line=start.line, column=start.column)

        return Conditional(
            condition=condition,
            then_block=then_block,
            else_block=else_block,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_loop(self) -> Loop:
        """
        Syntax: loop count do ... end

        Also accepts ``for each 3 do`` and ``repeat 3 times do``.
        """
        keyword = self.advance()
        while self.match_keyword(LOOP_KEYWORDS):
            pass

        count = self.parse_expression()

        if self.check_keyword({LOOP_COUNT_FILLER}):
            following = self.peek()
            if following.type is TokenType.KEYWORD and following.value in BLOCK_START_KEYWORDS:
                self.advance()

        body = None
        if self.match_keyword(BLOCK_START_KEYWORDS):
            body = self.parse_block()

        return Loop(count=count, body=body, line=keyword.line, column=keyword.column)

    def parse_return(self) -> Return:
        keyword = self.advance()
        return Return(value=self._optional_expression(), line=keyword.line, column=keyword.column)

    def parse_output(self) -> Output:
        """
        Syntax: say [repeat] expr [name 'label']

        A leading number is a repeat count only when a value follows it
        directly on the same line, so ``say 3 "hi"`` repeats while
        ``say 10 div 2`` does not.
        """
        keyword = self.advance()

        repeat = 1
        following = self.peek()
        if (
            self.check(TokenType.NUMBER)
            and following.line == self.current().line
            and self._starts_value(following)
        ):
            raw = self.advance().value
            try:
                repeat = math.floor(float(raw))
            except ValueError:
                repeat = 0

        value = self._optional_expression()

        label = None
        if self.check_word() and self.current().value == OUTPUT_LABEL_KEYWORD and self.peek().type is TokenType.STRING:
            self.advance()
            label = self.advance().value

        return Output(
            value=value,
            repeat=repeat,
            label=label,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_assignment(self) -> Assign:
        """
        Syntax: put expr to name | put expr name
        """
        keyword = self.advance()
        value = self._optional_expression()

        target = None
        if self.match_keyword({"to"}):
            if self.check_name():
                target = self.advance().value
        elif self.check(TokenType.IDENTIFIER):
            target = self.advance().value

        return Assign(value=value, target=target, line=keyword.line, column=keyword.column)
