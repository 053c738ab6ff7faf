"""Tree-walking interpreter for Azalea programs."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from ..ast.nodes import (
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
from ..lang.keywords import LOOP_VARIABLE, MODULE_NAMES, suggest_name
from ..parser import parse
from .modules import CapabilityModule, ModuleRegistry
from .scope import ScopeStack
from .values import (
    VOID,
    Closure,
    Value,
    ValueKind,
    text_to_number,
    values_equal,
    word_to_number,
)

if TYPE_CHECKING:
    from ..config import InterpreterConfig

__all__ = ["CallState", "Interpreter", "execute", "DEFAULT_MAX_CALL_DEPTH"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_CALL_DEPTH = 64

PrintFn = Callable[[str], None]

_HANDLERS: Dict[NodeKind, str] = {
    NodeKind.PROGRAM: "_eval_program",
    NodeKind.BLOCK: "_eval_block",
    NodeKind.DECLARATION: "_eval_declaration",
    NodeKind.FUNCTION_DEF: "_eval_function_def",
    NodeKind.CALL: "_eval_call",
    NodeKind.CONDITIONAL: "_eval_conditional",
    NodeKind.LOOP: "_eval_loop",
    NodeKind.RETURN: "_eval_return",
    NodeKind.OUTPUT: "_eval_output",
    NodeKind.ASSIGN: "_eval_assign",
    NodeKind.BINARY_OP: "_eval_binary_op",
    NodeKind.IDENTIFIER: "_eval_identifier",
    NodeKind.LITERAL: "_eval_literal",
}


class CallState:
    """Track nesting of user-function calls."""

    def __init__(self, max_depth: int = DEFAULT_MAX_CALL_DEPTH):
        self.max_depth = max_depth
        self.depth = 0
        self.call_stack: List[str] = []

    def can_enter(self) -> bool:
        return self.depth < self.max_depth

    def enter_call(self, name: str) -> None:
        self.depth += 1
        self.call_stack.append(name)

    def exit_call(self) -> None:
        self.depth -= 1
        if self.call_stack:
            self.call_stack.pop()

    def reset(self) -> None:
        self.depth = 0
        self.call_stack.clear()


class Interpreter:
    """
    Evaluate Azalea syntax trees.

    All mutable state lives on the instance: global variables and scope
    frames (:attr:`scopes`), the function table (:attr:`functions`) and
    the capability modules (:attr:`modules`).  Evaluation never raises;
    anything that cannot be evaluated yields ``void``.

    Example:
        >>> lines = []
        >>> interpreter = Interpreter(print_fn=lines.append)
        >>> interpreter.execute('form x from 3 plus 4 say x')
        Value(kind=<ValueKind.NUMBER: 'num'>, data=7.0)
        >>> lines
        ['7']
    """

    def __init__(
        self,
        print_fn: Optional[PrintFn] = None,
        *,
        max_call_depth: int = DEFAULT_MAX_CALL_DEPTH,
        modules: Optional[Iterable[CapabilityModule]] = None,
    ):
        self.print_fn: PrintFn = print_fn or print
        self.scopes = ScopeStack()
        self.functions: Dict[str, Closure] = {}
        self.modules = ModuleRegistry()
        self.state = CallState(max_call_depth)
        for module in modules or ():
            self.register_module(module)

    @classmethod
    def from_config(
        cls, config: "InterpreterConfig", print_fn: Optional[PrintFn] = None
    ) -> "Interpreter":
        """Build an interpreter from a validated configuration."""
        from ..config import configure_logging
        from ..modules import builtin_modules

        configure_logging(config.log_level)
        available = builtin_modules()
        return cls(
            print_fn,
            max_call_depth=config.max_call_depth,
            modules=[available[name] for name in config.modules],
        )

    def register_module(self, module: CapabilityModule, name: Optional[str] = None) -> None:
        self.modules.register(module, name)
        logger.debug("Registered capability module %r", name or module.name)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def execute(self, source: str) -> Value:
        """Tokenize, parse and evaluate ``source``; return the last statement's value."""
        try:
            program = parse(source, module_names=self.module_names())
            return self.evaluate(program)
        except RecursionError:
            logger.error("Evaluation aborted: host recursion limit reached", exc_info=True)
            self.state.reset()
            return VOID

    def module_names(self) -> frozenset:
        return MODULE_NAMES | frozenset(self.modules.names())

    def evaluate(self, node: Optional[Node]) -> Value:
        if node is None:
            return VOID
        handler = _HANDLERS.get(node.kind)
        if handler is None:
            return VOID
        return getattr(self, handler)(node)

    def lookup(self, name: str) -> Value:
        value = self.scopes.lookup(name)
        return VOID if value is None else value

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------

    def _eval_sequence(self, statements: Iterable[Node]) -> Value:
        result = VOID
        for statement in statements:
            result = self.evaluate(statement)
        return result

    def _eval_program(self, node: Program) -> Value:
        return self._eval_sequence(node.statements)

    def _eval_block(self, node: Block) -> Value:
        with self.scopes.frame():
            return self._eval_sequence(node.statements)

    def _eval_declaration(self, node: Declaration) -> Value:
        value = self.evaluate(node.value)
        if node.name:
            self.scopes.declare(node.name, value)
        return value

    def _eval_function_def(self, node: FunctionDef) -> Value:
        closure = Closure(params=node.params, body=node.body, name=node.name)
        if node.name:
            self.functions[node.name] = closure
        return Value.function(closure)

    def _eval_call(self, node: Call) -> Value:
        module = self.modules.get(node.target)
        if module is not None:
            return self._invoke_module(module, node)

        closure = self.functions.get(node.target)
        if closure is None:
            bound = self.scopes.lookup(node.target)
            if bound is not None and bound.kind is ValueKind.FUNCTION:
                closure = bound.data

        if closure is None:
            suggestion = suggest_name(
                node.target, list(self.functions) + self.modules.names()
            )
            logger.debug(
                "Call to unknown target %r at %d:%d%s",
                node.target,
                node.line,
                node.column,
                f" (did you mean {suggestion!r}?)" if suggestion else "",
            )
            return VOID

        args = [self.evaluate(arg) for arg in node.args]
        return self.call_function(closure, args, name=node.target)

    def call_function(self, closure: Closure, args: List[Value], name: str = "") -> Value:
        """Run ``closure`` in a fresh frame with parameters bound positionally."""
        if not self.state.can_enter():
            logger.warning(
                "Call depth limit (%d) reached calling %r; call stack: %s",
                self.state.max_depth,
                name or closure.name,
                " -> ".join(self.state.call_stack[-10:]),
            )
            return VOID

        self.state.enter_call(name or closure.name)
        try:
            with self.scopes.frame() as frame:
                for param, arg in zip(closure.params, args):
                    frame[param] = arg
                return self.evaluate(closure.body)
        finally:
            self.state.exit_call()

    def _invoke_module(self, module: CapabilityModule, node: Call) -> Value:
        args = [self.evaluate(arg) for arg in node.args]
        try:
            result = module.invoke(node.method, args)
        except Exception:
            logger.warning(
                "Capability module %r failed on method %r at %d:%d",
                node.target,
                node.method,
                node.line,
                node.column,
                exc_info=True,
            )
            return VOID
        return Value.from_python(result)

    def _eval_conditional(self, node: Conditional) -> Value:
        if node.then_block is None:
            return VOID
        if self.evaluate(node.condition).to_bool():
            return self.evaluate(node.then_block)
        return self.evaluate(node.else_block)

    def _eval_loop(self, node: Loop) -> Value:
        if node.body is None:
            return VOID

        count = self.evaluate(node.count).to_number()
        if not math.isfinite(count):
            logger.warning("Loop count %r at %d:%d is not finite; skipping", count, node.line, node.column)
            return VOID

        result = VOID
        for index in range(max(0, math.floor(count))):
            with self.scopes.frame() as frame:
                frame[LOOP_VARIABLE] = Value.number(index)
                result = self.evaluate(node.body)
        return result

    def _eval_return(self, node: Return) -> Value:
        return self.evaluate(node.value)

    def _eval_output(self, node: Output) -> Value:
        value = self.evaluate(node.value)
        text = value.to_string()
        for _ in range(node.repeat):
            self.print_fn(text)
        if node.label:
            self.scopes.declare(node.label, value)
        return value

    def _eval_assign(self, node: Assign) -> Value:
        value = self.evaluate(node.value)
        if node.target:
            self.scopes.assign(node.target, value)
        return value

    def _eval_binary_op(self, node: BinaryOp) -> Value:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        op = node.op

        if op == "plus":
            return Value.number(left.to_number() + right.to_number())
        if op == "minus":
            return Value.number(left.to_number() - right.to_number())
        if op == "times":
            return Value.number(left.to_number() * right.to_number())
        if op == "div":
            divisor = right.to_number()
            if divisor == 0.0:
                return Value.number(0.0)
            return Value.number(left.to_number() / divisor)
        if op == "over":
            return Value.boolean(left.to_number() > right.to_number())
        if op == "under":
            return Value.boolean(left.to_number() < right.to_number())
        if op == "same":
            return Value.boolean(values_equal(left, right))
        if op == "not":
            return Value.boolean(not values_equal(left, right))
        if op == "and":
            return Value.boolean(left.to_bool() and right.to_bool())
        if op == "or":
            return Value.boolean(left.to_bool() or right.to_bool())

        logger.debug("Unknown operator %r at %d:%d", op, node.line, node.column)
        return VOID

    def _eval_identifier(self, node: Identifier) -> Value:
        value = self.scopes.lookup(node.name)
        if value is not None:
            return value
        closure = self.functions.get(node.name)
        if closure is not None:
            return Value.function(closure)
        number = word_to_number(node.name)
        if number is not None:
            return Value.number(number)
        return VOID

    def _eval_literal(self, node: Literal) -> Value:
        if node.literal_kind is LiteralKind.NUMBER:
            try:
                return Value.number(float(node.raw))
            except ValueError:
                return Value.number(text_to_number(node.raw))
        if node.literal_kind is LiteralKind.BOOLEAN:
            return Value.boolean(node.raw == "true")
        return Value.text(node.raw)


def execute(
    source: str,
    *,
    config: Optional["InterpreterConfig"] = None,
    print_fn: Optional[PrintFn] = None,
) -> Value:
    """Run ``source`` on a fresh interpreter."""
    if config is not None:
        interpreter = Interpreter.from_config(config, print_fn=print_fn)
    else:
        interpreter = Interpreter(print_fn)
    return interpreter.execute(source)
