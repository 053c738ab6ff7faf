"""Lexical layer of the Azalea language: keyword families and the tokenizer."""

from .keywords import (
    MODULE_NAMES,
    ELEMENT_NAMES,
    OPERATOR_PRECEDENCE,
    VOCABULARY,
    StatementKind,
    statement_kind,
    suggest_name,
)
from .lexer import Lexer, Token, TokenType, tokenize

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "StatementKind",
    "statement_kind",
    "suggest_name",
    "VOCABULARY",
    "OPERATOR_PRECEDENCE",
    "ELEMENT_NAMES",
    "MODULE_NAMES",
]
