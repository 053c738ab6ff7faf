"""Abstract syntax tree for Azalea programs."""

from .nodes import (
    Assign,
    BinaryOp,
    Block,
    Call,
    Conditional,
    Declaration,
    FunctionDef,
    Identifier,
    Literal,
    LiteralKind,
    Loop,
    Node,
    NodeKind,
    Output,
    Program,
    Return,
)

__all__ = [
    "Assign",
    "BinaryOp",
    "Block",
    "Call",
    "Conditional",
    "Declaration",
    "FunctionDef",
    "Identifier",
    "Literal",
    "LiteralKind",
    "Loop",
    "Node",
    "NodeKind",
    "Output",
    "Program",
    "Return",
]
