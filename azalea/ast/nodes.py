"""AST node definitions for Azalea programs.

Nodes are frozen dataclasses: the parser builds them once and the
interpreter only reads them.  A function body is referenced by every
closure made from its definition, so trees are shared rather than copied.
Every node also exposes its sub-nodes, in source order, through
:attr:`Node.children`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

__all__ = [
    "NodeKind",
    "LiteralKind",
    "Node",
    "Program",
    "Block",
    "Declaration",
    "FunctionDef",
    "Call",
    "Conditional",
    "Loop",
    "Return",
    "Output",
    "Assign",
    "BinaryOp",
    "Identifier",
    "Literal",
]


class NodeKind(Enum):
    PROGRAM = "program"
    BLOCK = "block"
    DECLARATION = "declaration"
    FUNCTION_DEF = "function_def"
    CALL = "call"
    CONDITIONAL = "conditional"
    LOOP = "loop"
    RETURN = "return"
    OUTPUT = "output"
    ASSIGN = "assign"
    BINARY_OP = "binary_op"
    IDENTIFIER = "identifier"
    LITERAL = "literal"


class LiteralKind(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Node:
    """Base class for all nodes."""

    line: int = field(default=0, kw_only=True, compare=False)
    column: int = field(default=0, kw_only=True, compare=False)

    kind = None  # type: Optional[NodeKind]

    @property
    def children(self) -> Tuple["Node", ...]:
        return ()


# ==================== Structure ====================


@dataclass(frozen=True)
class Program(Node):
    """Top-level statement sequence."""
    statements: Tuple[Node, ...] = ()

    kind = NodeKind.PROGRAM

    @property
    def children(self) -> Tuple[Node, ...]:
        return self.statements


@dataclass(frozen=True)
class Block(Node):
    """Statement sequence evaluated in its own scope: do ... end"""
    statements: Tuple[Node, ...] = ()

    kind = NodeKind.BLOCK

    @property
    def children(self) -> Tuple[Node, ...]:
        return self.statements


# ==================== Statements ====================


@dataclass(frozen=True)
class Declaration(Node):
    """Variable declaration: form [type] name from value"""
    name: str = ""
    type_name: Optional[str] = None
    value: Optional[Node] = None

    kind = NodeKind.DECLARATION

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.value,) if self.value is not None else ()


@dataclass(frozen=True)
class FunctionDef(Node):
    """Function definition: act name params do body end"""
    name: str = ""
    params: Tuple[str, ...] = ()
    body: Block = field(default_factory=Block)

    kind = NodeKind.FUNCTION_DEF

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.body,)


@dataclass(frozen=True)
class Call(Node):
    """Call of a capability module method or a user function.

    ``method`` is only set when ``target`` names a capability module.
    """
    target: str = ""
    method: Optional[str] = None
    args: Tuple[Node, ...] = ()

    kind = NodeKind.CALL

    @property
    def children(self) -> Tuple[Node, ...]:
        return self.args


@dataclass(frozen=True)
class Conditional(Node):
    """if condition do then_block end [else do else_block end]"""
    condition: Optional[Node] = None
    then_block: Optional[Block] = None
    else_block: Optional[Block] = None

    kind = NodeKind.CONDITIONAL

    @property
    def children(self) -> Tuple[Node, ...]:
        return tuple(
            child
            for child in (self.condition, self.then_block, self.else_block)
            if child is not None
        )


@dataclass(frozen=True)
class Loop(Node):
    """Counted loop: loop count do body end"""
    count: Optional[Node] = None
    body: Optional[Block] = None

    kind = NodeKind.LOOP

    @property
    def children(self) -> Tuple[Node, ...]:
        return tuple(child for child in (self.count, self.body) if child is not None)


@dataclass(frozen=True)
class Return(Node):
    """give value"""
    value: Optional[Node] = None

    kind = NodeKind.RETURN

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.value,) if self.value is not None else ()


@dataclass(frozen=True)
class Output(Node):
    """say [repeat] value [name 'label']"""
    value: Optional[Node] = None
    repeat: int = 1
    label: Optional[str] = None

    kind = NodeKind.OUTPUT

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.value,) if self.value is not None else ()


@dataclass(frozen=True)
class Assign(Node):
    """put value to target; without a target the value passes through."""
    value: Optional[Node] = None
    target: Optional[str] = None

    kind = NodeKind.ASSIGN

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.value,) if self.value is not None else ()


# ==================== Expressions ====================


@dataclass(frozen=True)
class BinaryOp(Node):
    """Binary operation: left op right"""
    op: str = ""
    left: Optional[Node] = None
    right: Optional[Node] = None

    kind = NodeKind.BINARY_OP

    @property
    def children(self) -> Tuple[Node, ...]:
        return tuple(child for child in (self.left, self.right) if child is not None)


@dataclass(frozen=True)
class Identifier(Node):
    """Variable reference: x"""
    name: str = ""

    kind = NodeKind.IDENTIFIER


@dataclass(frozen=True)
class Literal(Node):
    """Literal as written in the source; interpreted at evaluation time."""
    raw: str = ""
    literal_kind: LiteralKind = LiteralKind.STRING

    kind = NodeKind.LITERAL
