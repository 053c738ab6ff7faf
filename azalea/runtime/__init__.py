"""Azalea runtime: values, scopes, capability modules and the interpreter."""

from .interpreter import DEFAULT_MAX_CALL_DEPTH, CallState, Interpreter, execute
from .modules import CapabilityModule, ModuleRegistry
from .scope import ScopeStack
from .values import (
    NUMBER_WORDS,
    VOID,
    Closure,
    Value,
    ValueKind,
    format_number,
    text_to_number,
    values_equal,
    word_to_number,
)

__all__ = [
    "CallState",
    "CapabilityModule",
    "Closure",
    "DEFAULT_MAX_CALL_DEPTH",
    "Interpreter",
    "ModuleRegistry",
    "NUMBER_WORDS",
    "ScopeStack",
    "VOID",
    "Value",
    "ValueKind",
    "execute",
    "format_number",
    "text_to_number",
    "values_equal",
    "word_to_number",
]
